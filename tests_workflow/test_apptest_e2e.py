"""End-to-End Integration Test using Streamlit AppTest Framework.

ONE comprehensive session that simulates a user drawing terrain profiles,
going through the ACTION LAYER (actions.py) exactly as app.py does:

    1. Click the map -> process_map_click(Coordinate)
    2. Click "Finish drawing" -> finish_drawing()
    3. Click "AI Analyze" -> analyze_profile(line_id)
    4. Search a place -> search_place(query)
    5. Click "Delete" -> delete_profile(line_id)

Architecture:
- Uses AppTest.from_function with COMMAND-BASED execution
- Each at.run() processes ONE user action from the command queue
- Actions call infra.reload_map() / trigger_rerun(), which AppTest executes
  as a real Streamlit rerun, so map_version bumps are exercised too
"""

from __future__ import annotations

import random
from unittest.mock import MagicMock

from langchain_core.language_models.fake_chat_models import FakeListChatModel
from streamlit.testing.v1 import AppTest

from geoprofile.core.elevation_service import ElevationService
from geoprofile.core.place_search import PlaceSearchService
from geoprofile.core.terrain_analyst import TerrainAnalyst
from geoprofile.model.profile_line import AnalysisState
from geoprofile.ui.controller import ProfileController

# =============================================================================
# COMMAND EXECUTOR - Simulates User Actions via Action Layer
# =============================================================================


def create_command_executor() -> None:
    """Streamlit app that executes commands from session_state.command_queue.

    This function runs inside AppTest and processes ONE command per at.run().

    COMMAND TYPES:
        ("click", lon, lat) -> process_map_click(Coordinate)
        ("finish",) -> finish_drawing()
        ("analyze", line_id) -> analyze_profile(line_id)
        ("search", query) -> search_place(query)
        ("delete", line_id) -> delete_profile(line_id)
        ("noop",) -> do nothing
    """
    import streamlit as st

    from geoprofile.model.coordinate import Coordinate
    from geoprofile.ui.actions import (
        analyze_profile,
        delete_profile,
        finish_drawing,
        process_map_click,
        search_place,
    )

    controller = st.session_state.controller

    # Commands are popped and stored back before executing, since actions rerun the script
    command_queue: list = st.session_state.get("command_queue", [])
    if command_queue:
        cmd = command_queue.pop(0)
        st.session_state.command_queue = command_queue
        st.session_state.executed_commands = st.session_state.get("executed_commands", []) + [cmd]
        cmd_type = cmd[0]

        if cmd_type == "click":
            _, lon, lat = cmd
            process_map_click(coord=Coordinate(lat=lat, lon=lon))
        elif cmd_type == "finish":
            finish_drawing()
        elif cmd_type == "analyze":
            analyze_profile(line_id=cmd[1])
        elif cmd_type == "search":
            search_place(query=cmd[1])
        elif cmd_type == "delete":
            delete_profile(line_id=cmd[1])
        elif cmd_type == "noop":
            pass
        else:
            raise ValueError(f"Unknown command type: {cmd_type}")

    st.write(f"State: {controller.sm.get_state_name()}")
    st.write(f"Profiles: {len(controller.lines)}")


def _run(at: AppTest, *commands: tuple) -> None:
    for cmd in commands:
        at.session_state["command_queue"] = [cmd]
        at.run()
        assert not at.exception, f"{cmd} raised {at.exception}"


# =============================================================================
# THE WORLD TOUR - ONE COMPREHENSIVE E2E TEST
# =============================================================================


class TestProfileWorldTour:
    """Draw, analyze, search and delete through the action layer."""

    def test_complete_session(self) -> None:
        """PHASE 1: chain of two segments, finished
        PHASE 2: analyze the first profile
        PHASE 3: search moves the map, second chain of one segment
        PHASE 4: delete a profile

        FINAL: 2 profiles, idle, map version bumped by every reload
        """
        search_session = MagicMock()
        search_session.get.return_value.json.return_value = [
            {"lat": "45.8326", "lon": "6.8652", "display_name": "Mont Blanc"}
        ]
        controller = ProfileController(
            elevation_service=ElevationService(rng=random.Random(7), delay_s=0),
            analyst=TerrainAnalyst(llm=FakeListChatModel(responses=["A steep climb to a sharp summit."])),
            search_service=PlaceSearchService(session=search_session),
        )

        at = AppTest.from_function(create_command_executor, default_timeout=30)
        at.session_state["controller"] = controller
        at.session_state["map_version"] = 0
        at.session_state["command_queue"] = []
        at.run()
        assert not at.exception

        # ================================================================
        # PHASE 1: chained drawing
        # ================================================================
        _run(at, ("click", 10.0, 46.0))
        controller = at.session_state["controller"]
        assert controller.is_awaiting_second_point
        assert controller.lines == []

        _run(at, ("click", 10.1, 46.0), ("click", 10.1, 46.1))
        assert [line.name for line in controller.lines] == ["Profile 1", "Profile 2"]
        assert controller.lines[1].start == controller.lines[0].end

        _run(at, ("finish",))
        assert controller.is_idle
        assert len(controller.lines) == 2

        # ================================================================
        # PHASE 2: AI analysis
        # ================================================================
        first_id = controller.lines[0].id
        _run(at, ("analyze", first_id))
        first = controller.collection.get_line(first_id)
        assert first.analysis_state == AnalysisState.DONE
        assert first.analysis_result == "A steep climb to a sharp summit."

        # ================================================================
        # PHASE 3: search, then draw somewhere else
        # ================================================================
        _run(at, ("search", "Mont Blanc"))
        assert controller.context.map.lat_lon == (45.8326, 6.8652)

        _run(at, ("click", 6.86, 45.83), ("click", 6.9, 45.9), ("finish",))
        assert len(controller.lines) == 3
        assert controller.is_idle

        # ================================================================
        # PHASE 4: delete
        # ================================================================
        _run(at, ("delete", controller.lines[1].id))
        assert [line.name for line in controller.lines] == ["Profile 1", "Profile 3"]

        # Unknown ids only toast
        _run(at, ("delete", "P999"))
        assert len(controller.lines) == 2

        # ================================================================
        # FINAL
        # ================================================================
        # 5 clicks + 2 finishes + 1 search + 1 delete reload the map
        assert at.session_state["map_version"] == 9
        assert any("Profiles: 2" in md.value for md in at.markdown)
