"""GeoProfile - Global terrain profile generator.

Draw segments on a world map; each segment gets a simulated elevation
profile, coordinates in DMS and decimal notation, and an optional AI
description of its landform.

Run: streamlit run geoprofile/app.py
"""

import logging
import traceback

import streamlit as st

from geoprofile.constants import AppConfig, MapConfig
from geoprofile.model.message import ProfileLoadingMessage
from geoprofile.ui import (
    ClickDeduplication,
    ClickDetector,
    MapRenderer,
    ProfileController,
    SidebarRenderer,
    analyze_profile,
    delete_profile,
    export_profiles,
    finish_drawing,
    process_map_click,
    render_profile_list,
    search_place,
)
from geoprofile.ui.pydeck_click_handler import render_pydeck_map

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# SESSION STATE
# =============================================================================


def init_session_state() -> None:
    """Initialize session state with the controller and UI helpers."""
    if "controller" not in st.session_state:
        st.session_state.controller = ProfileController()

    if "map_renderer" not in st.session_state:
        st.session_state.map_renderer = MapRenderer()

    if "click_dedup" not in st.session_state:
        st.session_state.click_dedup = ClickDeduplication()

    if "map_version" not in st.session_state:
        st.session_state.map_version = 0


def reset_ui_state() -> None:
    """Reset drawing state while preserving every profile line.

    Called when an error occurs to recover gracefully. Resets the state
    machine to Idle, clears click deduplication and bumps the map version.
    """
    logger.info("Resetting UI state due to error recovery")

    controller: ProfileController = st.session_state.controller
    controller.reset_drawing()
    st.session_state.click_dedup.reset()
    st.session_state.map_version = st.session_state.get("map_version", 0) + 1

    logger.info("UI state reset complete - profiles preserved")


# =============================================================================
# MAP RENDERING
# =============================================================================


def _render_map() -> None:
    """Render the map and dispatch a new click."""
    controller: ProfileController = st.session_state.controller
    renderer: MapRenderer = st.session_state.map_renderer
    map_version = st.session_state.get("map_version", 0)

    logger.info(f"[RENDER] Map: state={controller.sm.get_state_name()}, map_version={map_version}")

    view = controller.context.map
    renderer.update_view(lat=view.lat, lon=view.lon, zoom=view.zoom)
    deck = renderer.render(lines=controller.lines, pending_start=controller.pending_start)

    click_result = render_pydeck_map(deck=deck, key=f"main_map_{map_version}", height=MapConfig.MAP_HEIGHT)

    if controller.is_loading:
        ProfileLoadingMessage().display()

    detector = ClickDetector(dedup=st.session_state.click_dedup)
    coord = detector.detect(
        clicked_object=click_result.clicked_object,
        clicked_coordinate=click_result.clicked_coordinate,
        map_version=map_version,
    )
    if coord is not None:
        process_map_click(coord=coord)


# =============================================================================
# MAIN
# =============================================================================


def main() -> None:
    """Application entry point."""
    st.set_page_config(page_title=AppConfig.TITLE, page_icon=AppConfig.ICON, layout=AppConfig.LAYOUT)
    init_session_state()

    st.title(f"{AppConfig.ICON} {AppConfig.TITLE}")

    try:
        _run_app_ui()
    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        full_traceback = traceback.format_exc()
        logger.error(f"[UI] UI error caught: {error_msg}\n{full_traceback}")

        st.error(f"⚠️ [UI] Something went wrong: {error_msg}")

        # Drawing state is reset, profiles are kept
        reset_ui_state()

        if st.button("🔄 Reset and Continue", type="primary"):
            st.rerun()


def _run_app_ui() -> None:
    """Run the main application UI. Separated for error handling wrapper."""
    controller: ProfileController = st.session_state.controller

    map_version = st.session_state.get("map_version", 0)
    logger.info(f"[MAIN] Render cycle starting: {controller!r}, map_version={map_version}")

    sidebar = SidebarRenderer(controller=controller)
    actions = sidebar.render()

    if actions.get("finish_drawing"):
        finish_drawing()
    if actions.get("search_query"):
        search_place(query=actions["search_query"])
    if actions.get("export"):
        export_profiles()

    _render_map()

    render_profile_list(
        lines=controller.lines,
        analysis_available=controller.analyst.is_configured,
        on_analyze=analyze_profile,
        on_delete=delete_profile,
    )


if __name__ == "__main__":
    main()
