"""Tests for AI terrain description.

Tests: build_prompt, TerrainAnalyst with a fake chat model
Focus: Prompt decimation, configuration detection, failure wrapping
"""

import asyncio
from unittest.mock import patch

import pytest

from fakes import FakeChatModel
from geoprofile.constants import AnalysisConfig
from geoprofile.core.terrain_analyst import (
    AnalysisFailedError,
    AnalysisUnavailableError,
    TerrainAnalyst,
    build_prompt,
    find_api_key,
)
from geoprofile.model.coordinate import Coordinate
from geoprofile.model.elevation_point import ElevationPoint
from geoprofile.model.profile_line import ProfileLine


def _points(n: int) -> list[ElevationPoint]:
    return [ElevationPoint(distance_m=float(i * 10), elevation_m=float(500 + i), location=Coordinate(lat=0, lon=0)) for i in range(n)]


class TestBuildPrompt:
    def test_every_fifth_point(self) -> None:
        """51 points → indices 0, 5, ..., 50 → 11 entries."""
        prompt = build_prompt(points=_points(51))
        assert prompt.count("distance:") == 11
        assert "distance: 0.0m, elevation: 500.0m" in prompt
        assert "distance: 50.0m, elevation: 505.0m" in prompt
        assert "distance: 10.0m" not in prompt
        assert "distance: 500.0m, elevation: 550.0m" in prompt

    def test_entries_joined_with_semicolons(self) -> None:
        prompt = build_prompt(points=_points(6))
        assert "distance: 0.0m, elevation: 500.0m; distance: 50.0m, elevation: 505.0m" in prompt

    def test_asks_for_short_shape_description(self) -> None:
        prompt = build_prompt(points=_points(1))
        assert "one or two sentences" in prompt

    def test_rejects_non_positive_step(self) -> None:
        with pytest.raises(ValueError):
            build_prompt(points=_points(5), step=0)


class TestConfiguration:
    def test_api_key_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in AnalysisConfig.API_KEY_ENV_VARS:
            monkeypatch.delenv(var, raising=False)
        assert find_api_key() is None
        monkeypatch.setenv("API_KEY", "fallback")
        assert find_api_key() == "fallback"
        monkeypatch.setenv("GOOGLE_API_KEY", "primary")
        assert find_api_key() == "primary"

    def test_unconfigured_without_key_or_model(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in AnalysisConfig.API_KEY_ENV_VARS:
            monkeypatch.delenv(var, raising=False)
        analyst = TerrainAnalyst()
        assert analyst.is_configured is False

    def test_injected_model_counts_as_configured(self) -> None:
        assert TerrainAnalyst(llm=FakeChatModel()).is_configured  # type: ignore[arg-type]

    def test_analyze_without_key_raises_unavailable(self, sample_line: ProfileLine) -> None:
        analyst = TerrainAnalyst(api_key="")
        with pytest.raises(AnalysisUnavailableError):
            asyncio.run(analyst.analyze(line=sample_line))

    def test_model_created_lazily_with_configured_provider(self, sample_line: ProfileLine) -> None:
        fake = FakeChatModel(reply="Flat plain.")
        with patch("langchain.chat_models.init_chat_model", return_value=fake) as init:
            analyst = TerrainAnalyst(api_key="secret", model="gemini-test", provider="google_genai")
            init.assert_not_called()
            text = asyncio.run(analyst.analyze(line=sample_line))
        assert text == "Flat plain."
        init.assert_called_once()
        kwargs = init.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["model_provider"] == "google_genai"
        assert kwargs["api_key"] == "secret"


class TestAnalyze:
    def test_returns_model_text(self, sample_line: ProfileLine) -> None:
        model = FakeChatModel(reply="  Steep ascent to a ridge.  ")
        text = asyncio.run(TerrainAnalyst(llm=model).analyze(line=sample_line))  # type: ignore[arg-type]
        assert text == "Steep ascent to a ridge."
        assert model.prompts[0] == build_prompt(points=sample_line.points)

    def test_content_blocks_are_flattened(self, sample_line: ProfileLine) -> None:
        model = FakeChatModel(reply=[{"type": "text", "text": "Rolling "}, {"type": "text", "text": "hills."}])
        text = asyncio.run(TerrainAnalyst(llm=model).analyze(line=sample_line))  # type: ignore[arg-type]
        assert text == "Rolling hills."

    def test_model_error_is_wrapped(self, sample_line: ProfileLine) -> None:
        model = FakeChatModel(error=ConnectionError("quota exceeded"))
        with pytest.raises(AnalysisFailedError, match="quota exceeded"):
            asyncio.run(TerrainAnalyst(llm=model).analyze(line=sample_line))  # type: ignore[arg-type]

    def test_empty_reply_is_failure(self, sample_line: ProfileLine) -> None:
        model = FakeChatModel(reply="   ")
        with pytest.raises(AnalysisFailedError):
            asyncio.run(TerrainAnalyst(llm=model).analyze(line=sample_line))  # type: ignore[arg-type]


class TestModelCreationFailure:
    """LangChain errors while building the model surface as AnalysisFailedError."""

    def test_unsupported_provider(self, sample_line: ProfileLine) -> None:
        analyst = TerrainAnalyst(api_key="secret", provider="no_such_provider")
        with pytest.raises(AnalysisFailedError, match="no_such_provider"):
            asyncio.run(analyst.analyze(line=sample_line))

    @pytest.mark.parametrize("error", [ValueError("bad model"), ImportError("langchain-google-genai missing")])
    def test_init_errors_are_wrapped(self, sample_line: ProfileLine, error: Exception) -> None:
        with patch("langchain.chat_models.init_chat_model", side_effect=error):
            analyst = TerrainAnalyst(api_key="secret")
            with pytest.raises(AnalysisFailedError, match=str(error)):
                asyncio.run(analyst.analyze(line=sample_line))
        assert analyst.is_configured
