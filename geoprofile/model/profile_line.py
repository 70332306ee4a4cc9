"""ProfileLine - A completed user-drawn segment with its elevation profile.

A ProfileLine is created atomically once its profile has been synthesized,
so a partially filled line is never visible. After creation only the AI
analysis fields change.
"""

from dataclasses import dataclass
from enum import Enum

from geoprofile.model.coordinate import Coordinate
from geoprofile.model.elevation_point import ElevationPoint


class AnalysisState(Enum):
    """Request state of the AI terrain description for one line."""

    IDLE = "idle"  # Never requested
    PENDING = "pending"  # Request in flight
    DONE = "done"  # Result available
    FAILED = "failed"  # Last request failed (previous result, if any, kept)


@dataclass
class ProfileLine:
    """A drawn segment and its synthesized elevation profile.

    Attributes:
        id: Unique identifier (e.g., "P1"), never reused
        start: Segment start coordinate
        end: Segment end coordinate
        color: Hex display color from the line palette
        name: Display name (e.g., "Profile 1")
        points: Ordered profile samples, distance non-decreasing
        analysis_state: AI analysis request state
        analysis_result: AI description once computed
    """

    id: str
    start: Coordinate
    end: Coordinate
    color: str
    name: str
    points: tuple[ElevationPoint, ...]
    analysis_state: AnalysisState = AnalysisState.IDLE
    analysis_result: str | None = None

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if not self.points:
            raise ValueError(f"ProfileLine {self.id} must have profile points")
        self.points = tuple(self.points)

    @property
    def total_distance_m(self) -> float:
        """Distance of the last sample (≈ segment length)."""
        return self.points[-1].distance_m

    @property
    def distances(self) -> list[float]:
        return [p.distance_m for p in self.points]

    @property
    def elevations(self) -> list[float]:
        return [p.elevation_m for p in self.points]

    @property
    def min_elevation_m(self) -> float:
        return min(self.elevations)

    @property
    def max_elevation_m(self) -> float:
        return max(self.elevations)

    @property
    def elevation_gain_m(self) -> float:
        """Sum of all positive elevation changes between consecutive samples."""
        elevations = self.elevations
        return sum(max(0.0, b - a) for a, b in zip(elevations, elevations[1:]))

    @property
    def elevation_loss_m(self) -> float:
        """Sum of all negative elevation changes (as positive meters)."""
        elevations = self.elevations
        return sum(max(0.0, a - b) for a, b in zip(elevations, elevations[1:]))

    @property
    def is_analyzing(self) -> bool:
        return self.analysis_state == AnalysisState.PENDING

    @property
    def has_analysis(self) -> bool:
        return self.analysis_result is not None

    def __repr__(self) -> str:
        return (
            f"ProfileLine(id={self.id}, name={self.name!r}, points={len(self.points)}, "
            f"length={self.total_distance_m:.0f}m, analysis={self.analysis_state.value})"
        )
