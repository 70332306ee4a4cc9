"""Shared pytest fixtures for geoprofile tests.

Provides a zero-delay ElevationService, sample profile lines and a controller
wired to fake services, so no test sleeps or touches the network.

COORDINATE SYSTEM:
    Tests use coordinates near the equator (lat~0) and prime meridian (lon~0)
    where the math is simple: 1 degree ≈ 111,195 meters along the equator
    on a 6,371 km sphere.
"""

import pytest

from fakes import FakeChatModel, FixedRandom, make_search_session
from geoprofile.core.elevation_service import ElevationService
from geoprofile.core.place_search import PlaceSearchService
from geoprofile.core.terrain_analyst import TerrainAnalyst
from geoprofile.model.coordinate import Coordinate
from geoprofile.model.elevation_point import ElevationPoint
from geoprofile.model.profile_collection import ProfileCollection
from geoprofile.model.profile_line import ProfileLine
from geoprofile.ui.controller import ProfileController

# =============================================================================
# COORDINATES AND LINES
# =============================================================================


@pytest.fixture
def origin() -> Coordinate:
    return Coordinate(lat=0.0, lon=0.0)


@pytest.fixture
def one_degree_east() -> Coordinate:
    return Coordinate(lat=0.0, lon=1.0)


@pytest.fixture
def elevation_service() -> ElevationService:
    """Zero-delay service with a fixed random source."""
    return ElevationService(rng=FixedRandom(0.5), delay_s=0)


@pytest.fixture
def sample_points(
    elevation_service: ElevationService, origin: Coordinate, one_degree_east: Coordinate
) -> list[ElevationPoint]:
    return elevation_service.synthesize(start=origin, end=one_degree_east)


@pytest.fixture
def collection() -> ProfileCollection:
    return ProfileCollection()


@pytest.fixture
def sample_line(
    collection: ProfileCollection,
    origin: Coordinate,
    one_degree_east: Coordinate,
    sample_points: list[ElevationPoint],
) -> ProfileLine:
    return collection.add_line(start=origin, end=one_degree_east, points=sample_points)


# =============================================================================
# CONTROLLER
# =============================================================================


@pytest.fixture
def chat_model() -> FakeChatModel:
    return FakeChatModel()


@pytest.fixture
def controller(elevation_service: ElevationService, chat_model: FakeChatModel) -> ProfileController:
    """Controller with zero delay, a fake chat model and an offline search session."""
    return ProfileController(
        elevation_service=elevation_service,
        analyst=TerrainAnalyst(llm=chat_model),  # type: ignore[arg-type]
        search_service=PlaceSearchService(session=make_search_session(payload=[])),
    )
