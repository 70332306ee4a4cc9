"""Core foundation classes for terrain profiles.

This module provides the numeric and service backbone:
- GeoCalculator: Geodesic calculations (haversine distance, interpolation)
- CoordinateFormatter: Decimal and DMS coordinate display
- ElevationService: Simulated elevation profile synthesis
- TerrainAnalyst: AI terrain description (optional)
- PlaceSearchService: Place-name lookup for map navigation
"""

from geoprofile.core.coordinate_formatter import CoordinateFormatter
from geoprofile.core.elevation_service import ElevationService, ElevationServiceError
from geoprofile.core.geo_calculator import GeoCalculator
from geoprofile.core.place_search import PlaceResult, PlaceSearchError, PlaceSearchService
from geoprofile.core.terrain_analyst import (
    AnalysisFailedError,
    AnalysisUnavailableError,
    TerrainAnalyst,
    build_prompt,
)

__all__ = [
    # Geo calculator
    "GeoCalculator",
    # Formatting
    "CoordinateFormatter",
    # Elevation
    "ElevationService",
    "ElevationServiceError",
    # AI analysis
    "TerrainAnalyst",
    "AnalysisUnavailableError",
    "AnalysisFailedError",
    "build_prompt",
    # Place search
    "PlaceSearchService",
    "PlaceResult",
    "PlaceSearchError",
]
