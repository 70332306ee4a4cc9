"""Shared pytest fixtures for geoprofile workflow tests.

Workflow tests drive ProfileController through whole user sessions with a
seeded elevation service and LangChain's fake chat model, so nothing sleeps
and nothing touches the network.

COORDINATE SYSTEM:
    Tests use coordinates near the equator (lat~0) and prime meridian (lon~0)
    where 1 degree ≈ 111,195 meters in both directions.
"""

import random
from unittest.mock import MagicMock

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from geoprofile.core.elevation_service import ElevationService
from geoprofile.core.place_search import PlaceSearchService
from geoprofile.core.terrain_analyst import TerrainAnalyst
from geoprofile.ui.controller import ProfileController
from geoprofile.ui.state_machine import DrawingContext, DrawingStateMachine

SMAndCtx = tuple[DrawingStateMachine, DrawingContext]

ANALYSIS_REPLIES = [
    "A steep ascent that levels out onto a broad plateau.",
    "Gently rolling hills with a shallow valley in the middle.",
]


@pytest.fixture
def sm_and_ctx() -> SMAndCtx:
    """Fresh state machine without the log listener."""
    return DrawingStateMachine.create(add_log_listener=False)


@pytest.fixture
def seeded_service() -> ElevationService:
    """Zero-delay service with a seeded random source."""
    return ElevationService(rng=random.Random(42), delay_s=0)


@pytest.fixture
def fake_llm() -> FakeListChatModel:
    return FakeListChatModel(responses=ANALYSIS_REPLIES)


@pytest.fixture
def search_session() -> MagicMock:
    """requests.Session stand-in that finds Mont Blanc for every query."""
    session = MagicMock()
    session.get.return_value.json.return_value = [
        {"lat": "45.8326", "lon": "6.8652", "display_name": "Mont Blanc, France"}
    ]
    return session


@pytest.fixture
def workflow_controller(
    seeded_service: ElevationService, fake_llm: FakeListChatModel, search_session: MagicMock
) -> ProfileController:
    return ProfileController(
        elevation_service=seeded_service,
        analyst=TerrainAnalyst(llm=fake_llm),
        search_service=PlaceSearchService(session=search_session),
    )
