"""Geodesic calculations on Earth's surface.

Provides geographic helper functions for terrain profiles:
- Distance calculation (Haversine formula)
- Linear interpolation between coordinates (profile sampling)

All calculations use a spherical Earth approximation (R = 6,371 km).
"""

from math import atan2, cos, radians, sin, sqrt

from geoprofile.model.coordinate import Coordinate

# Earth's radius in meters (spherical approximation)
EARTH_RADIUS_M = 6_371_000


class GeoCalculator:
    """Static methods for geodesic calculations on Earth's surface.

    Coordinates are in decimal degrees (WGS84).
    Distances are in meters.
    """

    EARTH_RADIUS_M = EARTH_RADIUS_M

    @staticmethod
    def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Inputs are not validated. Out-of-range values give numerically odd
        results but never raise.

        Args:
            lat1: Latitude of first point (decimal degrees)
            lon1: Longitude of first point (decimal degrees)
            lat2: Latitude of second point (decimal degrees)
            lon2: Longitude of second point (decimal degrees)

        Returns:
            Distance in meters.
        """
        dlat = radians(lat2 - lat1)
        dlon = radians(lon2 - lon1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
        # Rounding can push a slightly past 1 for antipodal points
        a = min(max(a, 0.0), 1.0)
        return EARTH_RADIUS_M * 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def distance_between(start: Coordinate, end: Coordinate) -> float:
        """Haversine distance between two Coordinates in meters."""
        return GeoCalculator.haversine_distance_m(lat1=start.lat, lon1=start.lon, lat2=end.lat, lon2=end.lon)

    @staticmethod
    def interpolate(start: Coordinate, end: Coordinate, fraction: float) -> Coordinate:
        """Linear interpolation of latitude and longitude independently.

        This is a straight line in coordinate space, not a great-circle path.

        Args:
            start: Coordinate at fraction 0
            end: Coordinate at fraction 1
            fraction: Position along the segment (0-1)

        Returns:
            Interpolated Coordinate.
        """
        return Coordinate(
            lat=start.lat + (end.lat - start.lat) * fraction,
            lon=start.lon + (end.lon - start.lon) * fraction,
        )

    @staticmethod
    def sample_segment(start: Coordinate, end: Coordinate, samples: int) -> list[Coordinate]:
        """Return samples + 1 evenly spaced coordinates from start to end inclusive."""
        if samples <= 0:
            raise ValueError(f"samples must be positive, got {samples}")
        return [GeoCalculator.interpolate(start=start, end=end, fraction=i / samples) for i in range(samples + 1)]
