"""ElevationPoint - One sample of a terrain profile."""

from dataclasses import dataclass

from geoprofile.model.coordinate import Coordinate


@dataclass(frozen=True)
class ElevationPoint:
    """A profile sample: distance along the segment, elevation and location.

    Produced only by the elevation synthesizer.

    Attributes:
        distance_m: Distance from segment start in meters (>= 0)
        elevation_m: Elevation in meters above sea level
        location: Interpolated coordinate of the sample
    """

    distance_m: float
    elevation_m: float
    location: Coordinate

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if self.distance_m < 0:
            raise ValueError(f"ElevationPoint distance cannot be negative: {self.distance_m}")

    def __repr__(self) -> str:
        return f"ElevationPoint(d={self.distance_m:.1f}m, elev={self.elevation_m:.1f}m, at={self.location!r})"
