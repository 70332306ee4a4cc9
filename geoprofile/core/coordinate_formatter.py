"""Coordinate formatting for display.

Converts decimal degrees into normalized decimal strings and
degree-minute-second (DMS) strings:
- Longitude normalization to [-180, 180)
- Decimal formatting with 4 decimal places
- DMS formatting with hemisphere suffix (N/S, E/W)

Fixed-decimal output rounds ties away from zero. The built-in round() and
format specs round exact binary ties to even instead.

Seconds are truncated, not rounded, so DMS output is always within one
arcsecond of the input.
"""

import re
from decimal import ROUND_HALF_UP, Decimal
from math import floor

from geoprofile.model.coordinate import Coordinate

_DMS_PATTERN = re.compile(r"^\s*(\d+)°(\d+)′(\d+)″([NSEW])\s*$")


class CoordinateFormatter:
    """Static methods for coordinate display formatting."""

    @staticmethod
    def _quantize(value: float, decimals: int) -> Decimal:
        return Decimal(value).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)

    @staticmethod
    def round_half_up(value: float, decimals: int) -> float:
        """Round the exact binary value, ties away from zero: round_half_up(0.25, 1) == 0.3."""
        return float(CoordinateFormatter._quantize(value, decimals))

    @staticmethod
    def to_fixed(value: float, decimals: int) -> str:
        """String form of round_half_up with exactly `decimals` digits after the point."""
        return f"{CoordinateFormatter._quantize(value, decimals):f}"

    @staticmethod
    def normalize_lon(lon: float) -> float:
        """Map any longitude to [-180, 180). Values already in range are returned unchanged."""
        if -180 <= lon < 180:
            return lon
        return ((lon + 180) % 360 + 360) % 360 - 180

    @staticmethod
    def to_decimal(value: float, is_lat: bool) -> str:
        """Format as decimal degrees with 4 decimals (longitude normalized first)."""
        v = value if is_lat else CoordinateFormatter.normalize_lon(value)
        return CoordinateFormatter.to_fixed(v, 4)

    @staticmethod
    def to_dms(value: float, is_lat: bool) -> str:
        """Format as degrees, minutes, seconds with hemisphere suffix.

        The sign of the normalized value picks the suffix, so longitude 190
        becomes 170°0′0″W. Zero maps to N or E.

        Args:
            value: Decimal degrees
            is_lat: True for latitude (N/S), False for longitude (E/W)

        Returns:
            String like "46°58′55″N".
        """
        normalized = value if is_lat else CoordinateFormatter.normalize_lon(value)

        absolute = abs(normalized)
        degrees = floor(absolute)
        minutes_not_truncated = (absolute - degrees) * 60
        minutes = floor(minutes_not_truncated)
        seconds = floor((minutes_not_truncated - minutes) * 60)

        if is_lat:
            direction = "N" if normalized >= 0 else "S"
        else:
            direction = "E" if normalized >= 0 else "W"

        return f"{degrees}°{minutes}′{seconds}″{direction}"

    @staticmethod
    def parse_dms(text: str) -> float:
        """Convert a string produced by to_dms back to decimal degrees.

        Raises:
            ValueError: If text is not in D°M′S″X form.
        """
        match = _DMS_PATTERN.match(text)
        if match is None:
            raise ValueError(f"Not a DMS coordinate: {text!r}")
        degrees, minutes, seconds, direction = match.groups()
        value = int(degrees) + int(minutes) / 60 + int(seconds) / 3600
        return -value if direction in ("S", "W") else value

    @staticmethod
    def format_coordinate(coord: Coordinate) -> str:
        """DMS display as "<lon>, <lat>"."""
        return f"{CoordinateFormatter.to_dms(coord.lon, is_lat=False)}, {CoordinateFormatter.to_dms(coord.lat, is_lat=True)}"

    @staticmethod
    def format_coordinate_decimal(coord: Coordinate) -> str:
        """Decimal display as "<lon>, <lat>"."""
        return (
            f"{CoordinateFormatter.to_decimal(coord.lon, is_lat=False)}, "
            f"{CoordinateFormatter.to_decimal(coord.lat, is_lat=True)}"
        )

    @staticmethod
    def format_distance_km(distance_m: float) -> str:
        """Meters to "12.34 km"."""
        return f"{CoordinateFormatter.to_fixed(distance_m / 1000, 2)} km"
