"""Coordinate - The fundamental geometry atom for terrain profiles.

A Coordinate is a single latitude/longitude pair in decimal degrees.
It is the single source of truth for location throughout the system.

Used by:
- ElevationPoint (sampled location along a segment)
- ProfileLine (segment start and end)
- DrawingContext (pending start point)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """A geographic point in decimal degrees (WGS84).

    Attributes:
        lat: Latitude in decimal degrees, expected within [-90, 90]
        lon: Longitude in decimal degrees, unbounded (normalized for display only)

    Example:
        point = Coordinate(lat=46.985, lon=10.295)
    """

    lat: float
    lon: float

    @property
    def lat_lon(self) -> tuple[float, float]:
        """Return (lat, lon) tuple - standard geographic order."""
        return (self.lat, self.lon)

    @property
    def lon_lat(self) -> tuple[float, float]:
        """Return (lon, lat) tuple - GeoJSON/Pydeck order."""
        return (self.lon, self.lat)

    @staticmethod
    def from_lon_lat(lon_lat: list[float] | tuple[float, float]) -> "Coordinate":
        """Build from a Pydeck [lon, lat] pair."""
        if len(lon_lat) < 2:
            raise ValueError(f"Expected [lon, lat], got {lon_lat!r}")
        return Coordinate(lat=float(lon_lat[1]), lon=float(lon_lat[0]))

    def __repr__(self) -> str:
        return f"Coordinate(lat={self.lat:.5f}, lon={self.lon:.5f})"
