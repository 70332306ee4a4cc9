"""Data model classes for terrain profiles.

- Coordinate: Geometry atom (lat, lon)
- ElevationPoint: One profile sample (distance, elevation, location)
- ProfileLine: Drawn segment with its profile and AI analysis state
- AnalysisState: Per-line AI request state
- ProfileCollection: Central manager owning all lines
"""

from geoprofile.model.coordinate import Coordinate
from geoprofile.model.elevation_point import ElevationPoint
from geoprofile.model.profile_collection import AnalysisInProgressError, ProfileCollection
from geoprofile.model.profile_line import AnalysisState, ProfileLine

__all__ = [
    "Coordinate",
    "ElevationPoint",
    "ProfileLine",
    "AnalysisState",
    "ProfileCollection",
    "AnalysisInProgressError",
]
