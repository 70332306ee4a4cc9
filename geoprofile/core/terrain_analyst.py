"""AI terrain description for elevation profiles.

Builds a short natural-language prompt from a decimated profile and asks a
LangChain chat model (Gemini by default) to describe the landform.

The feature is optional: without an API key the analyst reports itself as
unconfigured and the UI shows a notice instead of calling the model.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from typing import TYPE_CHECKING

from geoprofile.constants import AnalysisConfig

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

    from geoprofile.model.elevation_point import ElevationPoint
    from geoprofile.model.profile_line import ProfileLine

logger = logging.getLogger(__name__)


class AnalysisUnavailableError(RuntimeError):
    """Raised when analysis is requested without a configured model."""


class AnalysisFailedError(RuntimeError):
    """Raised when the model call fails or returns no text."""


def find_api_key() -> str | None:
    """Return the first API key found in AnalysisConfig.API_KEY_ENV_VARS."""
    for env_var in AnalysisConfig.API_KEY_ENV_VARS:
        value = os.environ.get(env_var)
        if value:
            return value
    return None


def build_prompt(points: Sequence[ElevationPoint], step: int = AnalysisConfig.DECIMATION_STEP) -> str:
    """Build the analysis prompt from every `step`-th profile point.

    Args:
        points: Full profile
        step: Decimation step (every 5th sample by default)

    Returns:
        Prompt text with "distance: Xm, elevation: Ym" entries joined by "; ".
    """
    if step <= 0:
        raise ValueError(f"Decimation step must be positive, got {step}")
    simplified = "; ".join(
        f"distance: {p.distance_m}m, elevation: {p.elevation_m}m" for i, p in enumerate(points) if i % step == 0
    )
    return AnalysisConfig.PROMPT_TEMPLATE.format(data=simplified)


def _extract_text(content: object) -> str:
    """Flatten chat model content (plain string or list of content blocks)."""
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        return "".join(parts).strip()
    return ""


class TerrainAnalyst:
    """Describes terrain profiles with a chat model.

    Example:
        analyst = TerrainAnalyst()
        if analyst.is_configured:
            text = asyncio.run(analyst.analyze(line))
    """

    def __init__(
        self,
        llm: BaseChatModel | None = None,
        api_key: str | None = None,
        model: str = AnalysisConfig.MODEL,
        provider: str = AnalysisConfig.PROVIDER,
    ) -> None:
        """Initialize terrain analyst.

        Args:
            llm: Pre-built chat model (skips lazy creation, used in tests)
            api_key: Provider API key (defaults to environment lookup)
            model: Model name for init_chat_model
            provider: LangChain provider name for init_chat_model
        """
        self._llm = llm
        self.api_key = api_key if api_key is not None else find_api_key()
        self.model = model
        self.provider = provider

    @property
    def is_configured(self) -> bool:
        """True when a model is injected or an API key is available."""
        return self._llm is not None or bool(self.api_key)

    def _get_llm(self) -> BaseChatModel:
        """Create the chat model on first use.

        Raises:
            AnalysisUnavailableError: If no model is injected and no API key is set.
            AnalysisFailedError: If LangChain cannot build the configured model.
        """
        if self._llm is None:
            if not self.api_key:
                raise AnalysisUnavailableError("No API key configured for AI analysis")

            logger.info(f"[ANALYSIS] Creating chat model {self.provider}:{self.model}")
            try:
                from langchain.chat_models import init_chat_model

                self._llm = init_chat_model(
                    model=self.model,
                    model_provider=self.provider,
                    temperature=AnalysisConfig.TEMPERATURE,
                    api_key=self.api_key,
                )
            except (ImportError, ValueError) as e:
                raise AnalysisFailedError(f"Cannot create chat model {self.provider}:{self.model}: {e}") from e
        return self._llm

    async def analyze(self, line: ProfileLine) -> str:
        """Return a one-to-two sentence landform description for a line.

        Raises:
            AnalysisUnavailableError: If no model is configured.
            AnalysisFailedError: If the model cannot be created, the call fails
                or the reply has no text.
        """
        llm = self._get_llm()

        try:
            prompt = build_prompt(points=line.points)
            logger.info(f"[ANALYSIS] Requesting description for {line.id} ({len(prompt)} chars)")
            response = await llm.ainvoke(prompt)
        except Exception as e:
            raise AnalysisFailedError(f"{type(e).__name__}: {e}") from e

        text = _extract_text(response.content)
        if not text:
            raise AnalysisFailedError("Model returned an empty description")
        logger.info(f"[ANALYSIS] {line.id}: {text[:80]}")
        return text
