"""UI Actions - Streamlit-facing wrappers around ProfileController.

Each action fetches the controller from session state, runs the operation
(async ones under a spinner), shows any returned toast, and reloads the map
when the drawing changed.

This module handles:
- Map clicks (process_map_click)
- Finishing / cancelling the drawing chain (finish_drawing)
- Profile line operations (delete_profile, analyze_profile)
- Map navigation (search_place)
- Image export (export_profiles)
"""

import logging

import streamlit as st

from geoprofile.model.coordinate import Coordinate
from geoprofile.model.message import ExportFailedMessage, ProfileLoadingMessage
from geoprofile.ui import infra
from geoprofile.ui.bottom_chart import ProfileExportError, export_filename, export_profiles_png
from geoprofile.ui.controller import ProfileController

logger = logging.getLogger(__name__)


def get_controller() -> ProfileController:
    """Controller stored in session state by app.init_session_state."""
    return st.session_state.controller


# =============================================================================
# DRAWING
# =============================================================================


def process_map_click(coord: Coordinate) -> None:
    """Start a segment or complete one, depending on the drawing state."""
    controller = get_controller()
    logger.info(f"[CLICK] {coord!r} in state {controller.sm.get_state_name()}")

    if controller.is_awaiting_second_point and not controller.is_loading:
        with st.spinner(ProfileLoadingMessage().message):
            toast = infra.run_async(controller.handle_map_click(coord=coord))
    else:
        toast = infra.run_async(controller.handle_map_click(coord=coord))

    if toast is not None:
        toast.display()
        return
    infra.reload_map()


def finish_drawing() -> None:
    """Stop the chain: discard the pending start point, keep created lines."""
    controller = get_controller()
    if controller.cancel_drawing():
        infra.reload_map()


# =============================================================================
# PROFILE LINES
# =============================================================================


def delete_profile(line_id: str) -> None:
    controller = get_controller()
    toast = controller.delete_line(line_id=line_id)
    if toast is not None:
        toast.display()
        return
    infra.reload_map()


def analyze_profile(line_id: str) -> None:
    """Run AI analysis for one line under a spinner."""
    controller = get_controller()
    with st.spinner("✨ Analyzing terrain..."):
        toast = infra.run_async(controller.analyze_line(line_id=line_id))
    if toast is not None:
        toast.display()
        return
    infra.trigger_rerun()


# =============================================================================
# MAP NAVIGATION
# =============================================================================


def search_place(query: str) -> None:
    """Fly the map to the best match for a place name."""
    controller = get_controller()
    with st.spinner("🔍 Searching..."):
        toast = controller.search_place(query=query)
    if toast is not None:
        toast.display()
        return
    infra.reload_map()


# =============================================================================
# EXPORT
# =============================================================================


def export_profiles() -> None:
    """Render all profiles to PNG and keep it in session state for the download button."""
    controller = get_controller()
    try:
        with st.spinner("🖼️ Rendering image..."):
            image = export_profiles_png(lines=controller.lines)
    except (ValueError, ProfileExportError) as e:
        logger.error(f"[EXPORT] {e}")
        ExportFailedMessage(error=str(e)).display()
        return
    st.session_state.export_png = image
    st.session_state.export_filename = export_filename()
    st.session_state.export_line_ids = tuple(line.id for line in controller.lines)
    infra.trigger_rerun()
