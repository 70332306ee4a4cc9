"""Message - User-facing messages for the GeoProfile UI.

Architecture:
- LEFT (sidebar): ONE blue info message showing the drawing mode and what clicks do
- CENTER (under map): Blue loading message while a profile is generated
- BOTTOM (profile list): Empty-state hint when no profiles exist
- TOASTS: Transient notices for failures (generation, analysis, search, export)

Design Principles:
- Maximum ONE persistent message per panel location at any time
- Failures never raise into the UI; they become toasts
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class MessageLevel(Enum):
    """Display level for UI messages."""

    INFO = "info"  # Blue - context/status/loading
    WARNING = "warning"  # Yellow - action instructions
    ERROR = "error"  # Red - failures


@dataclass(frozen=True)
class Message(ABC):
    """Abstract base class for user-facing messages displayed inline (sidebars/panels).

    These messages are rendered as st.info/st.warning/st.error blocks that persist
    in the UI until replaced. Used for context, instructions, and status.
    """

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for display in Streamlit."""
        raise NotImplementedError

    @property
    @abstractmethod
    def level(self) -> MessageLevel:
        """Display level."""
        raise NotImplementedError

    def display(self) -> None:
        """Render this message using the appropriate Streamlit function."""
        import streamlit as st

        render_fn = {
            MessageLevel.INFO: st.info,
            MessageLevel.WARNING: st.warning,
            MessageLevel.ERROR: st.error,
        }[self.level]
        render_fn(self.message)


@dataclass(frozen=True)
class ToastMessage(ABC):
    """Abstract base class for transient popup notifications.

    Good for: generation failures, analysis failures, search misses
    Bad for: context messages, status displays, instruction panels
    """

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for the toast notification."""
        raise NotImplementedError

    @property
    @abstractmethod
    def icon(self) -> str:
        """Icon to show in toast. Override in subclasses."""
        raise NotImplementedError

    def display(self) -> None:
        """Show this message as a toast notification and log it."""
        import streamlit as st

        logger = logging.getLogger(__name__)
        logger.info(f"[TOAST] {self.icon} {self.message}")
        st.toast(f"{self.icon} {self.message}")


# =============================================================================
# TOAST MESSAGES - Transient popup notifications for errors/feedback
# =============================================================================


@dataclass(frozen=True)
class ProfileBusyMessage(ToastMessage):
    """User clicked while a profile is still being generated."""

    @property
    def icon(self) -> str:
        return "⏳"

    @property
    def message(self) -> str:
        return "Still generating the previous profile, please wait."


@dataclass(frozen=True)
class ProfileGenerationFailedMessage(ToastMessage):
    """Elevation synthesis failed; the pending start point is kept for retry."""

    error: str

    @property
    def icon(self) -> str:
        return "⚠️"

    @property
    def message(self) -> str:
        return f"Profile generation failed, please try again: {self.error}"


@dataclass(frozen=True)
class LineNotFoundMessage(ToastMessage):
    """Action referenced a profile line that no longer exists."""

    line_id: str

    @property
    def icon(self) -> str:
        return "🔍"

    @property
    def message(self) -> str:
        return f"Profile {self.line_id} no longer exists."


@dataclass(frozen=True)
class AnalysisUnavailableMessage(ToastMessage):
    """No API key configured for AI analysis."""

    @property
    def icon(self) -> str:
        return "🔑"

    @property
    def message(self) -> str:
        return "AI analysis unavailable: no API key configured."


@dataclass(frozen=True)
class AnalysisInProgressMessage(ToastMessage):
    """Analysis requested for a line that is already being analyzed."""

    line_name: str

    @property
    def icon(self) -> str:
        return "⏳"

    @property
    def message(self) -> str:
        return f"{self.line_name} is already being analyzed."


@dataclass(frozen=True)
class AnalysisFailedMessage(ToastMessage):
    """Model call failed for one line."""

    line_name: str
    error: str

    @property
    def icon(self) -> str:
        return "✨"

    @property
    def message(self) -> str:
        return f"AI analysis failed for {self.line_name}: {self.error}"


@dataclass(frozen=True)
class PlaceNotFoundMessage(ToastMessage):
    """Search returned no results."""

    query: str

    @property
    def icon(self) -> str:
        return "📍"

    @property
    def message(self) -> str:
        return f"Place not found: {self.query!r}"


@dataclass(frozen=True)
class PlaceSearchFailedMessage(ToastMessage):
    """Search request failed."""

    error: str

    @property
    def icon(self) -> str:
        return "🌐"

    @property
    def message(self) -> str:
        return f"Search failed: {self.error}"


@dataclass(frozen=True)
class ExportFailedMessage(ToastMessage):
    """Image export failed."""

    error: str

    @property
    def icon(self) -> str:
        return "🖼️"

    @property
    def message(self) -> str:
        return f"Export failed: {self.error}"


# =============================================================================
# CENTER (UNDER MAP) - Loading state (BLUE)
# =============================================================================


@dataclass(frozen=True)
class ProfileLoadingMessage(Message):
    """Shown while a segment profile is being generated."""

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        return "⛰️ **Generating terrain data...**"


# =============================================================================
# LEFT PANEL (SIDEBAR) - Context/Status Messages
# =============================================================================


@dataclass(frozen=True)
class IdleContextMessage(Message):
    """LEFT panel: Nothing being drawn."""

    num_profiles: int = 0

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        return (
            "🗺️ **Ready to Draw**\n\n"
            "- 👆 Click the **map** → start a segment\n"
            "- 👆 Click again → finish it and keep drawing\n"
            "- ⏹️ **Finish drawing** → stop the chain\n"
            f"- 📈 Profiles so far: **{self.num_profiles}**"
        )


@dataclass(frozen=True)
class AwaitingSecondPointMessage(Message):
    """LEFT panel: Start point placed, waiting for the next click."""

    start_lon_dms: str
    start_lat_dms: str
    segments_drawn: int = 0

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.WARNING

    @property
    def message(self) -> str:
        return (
            "📍 **Click the Next Point**\n\n"
            f"- From: {self.start_lon_dms}, {self.start_lat_dms}\n"
            f"- Segments in this chain: {self.segments_drawn}\n"
            "- ⏹️ **Finish drawing** to stop"
        )


# =============================================================================
# BOTTOM (PROFILE LIST) - Empty state
# =============================================================================


@dataclass(frozen=True)
class NoProfilesMessage(Message):
    """Profile list is empty."""

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        return "➕ No profiles yet. Draw a segment on the map to begin."
