"""ProfileCollection - Central manager for profile lines.

Owns every ProfileLine visible in the app, in insertion order.
Provides operations for:
- Adding a line once its profile is synthesized (id, color, name assignment)
- Deleting a line by id
- Per-line AI analysis state transitions
"""

import logging
from collections.abc import Iterator, Sequence

from geoprofile.constants import EntityPrefixes, StyleConfig
from geoprofile.model.coordinate import Coordinate
from geoprofile.model.elevation_point import ElevationPoint
from geoprofile.model.profile_line import AnalysisState, ProfileLine

logger = logging.getLogger(__name__)


class AnalysisInProgressError(RuntimeError):
    """Raised when an analysis is requested for a line that is already pending."""


class ProfileCollection:
    """Ordered collection of ProfileLines.

    Example:
        collection = ProfileCollection()
        line = collection.add_line(start=a, end=b, points=points)
        collection.delete_line(line_id=line.id)
    """

    def __init__(self) -> None:
        """Initialize empty collection."""
        self._lines: dict[str, ProfileLine] = {}
        self._line_counter = 0

    def _next_line_id(self) -> str:
        self._line_counter += 1
        return f"{EntityPrefixes.PROFILE}{self._line_counter}"

    # =========================================================================
    # Collection Access
    # =========================================================================

    @property
    def lines(self) -> list[ProfileLine]:
        """All lines in insertion order."""
        return list(self._lines.values())

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[ProfileLine]:
        return iter(self.lines)

    def __contains__(self, line_id: object) -> bool:
        return line_id in self._lines

    def get_line(self, line_id: str) -> ProfileLine:
        """Return the line with this id.

        Raises:
            KeyError: If no such line exists.
        """
        line = self._lines.get(line_id)
        if line is None:
            raise KeyError(f"Profile line {line_id} not found")
        return line

    # =========================================================================
    # Line Operations
    # =========================================================================

    def next_color(self) -> str:
        """Palette color the next added line will receive."""
        return StyleConfig.LINE_COLORS[len(self._lines) % len(StyleConfig.LINE_COLORS)]

    def next_name(self) -> str:
        """Default display name the next added line will receive."""
        return f"Profile {len(self._lines) + 1}"

    def add_line(
        self,
        start: Coordinate,
        end: Coordinate,
        points: Sequence[ElevationPoint],
    ) -> ProfileLine:
        """Create and append a fully populated line.

        Color and name follow the current number of visible lines, so the Nth
        line added to an untouched collection gets palette color N mod size.

        Args:
            start: Segment start
            end: Segment end
            points: Synthesized profile (must not be empty)

        Returns:
            The new ProfileLine.
        """
        if not points:
            raise ValueError("Cannot add a profile line without profile points")

        line = ProfileLine(
            id=self._next_line_id(),
            start=start,
            end=end,
            color=self.next_color(),
            name=self.next_name(),
            points=tuple(points),
        )
        self._lines[line.id] = line
        logger.info(f"[PROFILE] Added {line!r}")
        return line

    def delete_line(self, line_id: str) -> ProfileLine:
        """Remove exactly one line, keeping the others in relative order.

        Raises:
            KeyError: If no such line exists.
        """
        line = self.get_line(line_id)
        del self._lines[line_id]
        logger.info(f"[PROFILE] Deleted {line_id} ({line.name}), {len(self._lines)} remaining")
        return line

    # =========================================================================
    # Analysis State Transitions
    # =========================================================================

    def begin_analysis(self, line_id: str) -> ProfileLine:
        """Mark a line's analysis as pending.

        Raises:
            KeyError: If no such line exists.
            AnalysisInProgressError: If an analysis is already pending.
        """
        line = self.get_line(line_id)
        if line.analysis_state == AnalysisState.PENDING:
            raise AnalysisInProgressError(f"Analysis already running for {line_id}")
        line.analysis_state = AnalysisState.PENDING
        return line

    def complete_analysis(self, line_id: str, text: str) -> ProfileLine:
        """Store the analysis result and mark the request done."""
        line = self.get_line(line_id)
        line.analysis_result = text
        line.analysis_state = AnalysisState.DONE
        return line

    def fail_analysis(self, line_id: str) -> ProfileLine:
        """Mark the request failed. Any previous result is left untouched."""
        line = self.get_line(line_id)
        line.analysis_state = AnalysisState.FAILED
        return line

    def __repr__(self) -> str:
        return f"ProfileCollection(lines={[line.id for line in self._lines.values()]})"
