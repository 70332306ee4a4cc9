"""Sidebar UI renderer for GeoProfile.

Renders the left sidebar with:
- Drawing status / usage instructions
- Place search
- "Finish drawing" button (ends the current chain)
- Image export of all profiles
- AI analysis availability notice

Returns action flags; app.py dispatches them to actions.py.
"""

import logging
from typing import Any

import streamlit as st

from geoprofile.constants import ExportConfig
from geoprofile.core.coordinate_formatter import CoordinateFormatter
from geoprofile.model.message import AwaitingSecondPointMessage, IdleContextMessage, Message
from geoprofile.ui.bottom_chart import export_filename
from geoprofile.ui.controller import ProfileController

logger = logging.getLogger(__name__)


def get_context_message(controller: ProfileController) -> Message:
    """The one persistent sidebar message for the current drawing state."""
    start = controller.pending_start
    if controller.is_awaiting_second_point and start is not None:
        return AwaitingSecondPointMessage(
            start_lon_dms=CoordinateFormatter.to_dms(start.lon, is_lat=False),
            start_lat_dms=CoordinateFormatter.to_dms(start.lat, is_lat=True),
            segments_drawn=controller.context.segments_drawn,
        )
    return IdleContextMessage(num_profiles=len(controller.collection))


class SidebarRenderer:
    """Renders the sidebar UI and returns action flags."""

    def __init__(self, controller: ProfileController) -> None:
        self.controller = controller

    def render(self) -> dict[str, Any]:
        """Render the sidebar.

        Returns:
            Dict with keys:
            - finish_drawing: True if the finish button was clicked
            - search_query: Submitted place name, or None
            - export: True if an export was requested
        """
        actions: dict[str, Any] = {"finish_drawing": False, "search_query": None, "export": False}

        with st.sidebar:
            st.header("⛰️ GeoProfile")
            get_context_message(controller=self.controller).display()

            if st.button(
                "⏹️ Finish drawing",
                disabled=not self.controller.is_awaiting_second_point,
                use_container_width=True,
                type="primary",
            ):
                actions["finish_drawing"] = True

            st.divider()
            actions["search_query"] = self._render_search()

            st.divider()
            actions["export"] = self._render_export()

            if not self.controller.analyst.is_configured:
                st.caption("🔑 AI analysis disabled: set GOOGLE_API_KEY to enable it.")

        return actions

    def _render_search(self) -> str | None:
        st.subheader("🔍 Search Place")
        with st.form("place_search", clear_on_submit=False):
            query = st.text_input("Place name", placeholder="e.g. Mount Everest", label_visibility="collapsed")
            submitted = st.form_submit_button("Go", use_container_width=True)
        if submitted and query.strip():
            return query.strip()
        return None

    def _render_export(self) -> bool:
        """Export button plus a download button for the last rendered image."""
        st.subheader("🖼️ Export")
        has_lines = len(self.controller.collection) > 0
        requested = st.button("Render profiles as PNG", disabled=not has_lines, use_container_width=True)

        # Only offer an image that still matches the current set of lines
        image = st.session_state.get("export_png")
        current_ids = tuple(line.id for line in self.controller.lines)
        if image and has_lines and st.session_state.get("export_line_ids") == current_ids:
            st.download_button(
                "⬇️ Download image",
                data=image,
                file_name=st.session_state.get("export_filename") or export_filename(),
                mime=ExportConfig.MIME_TYPE,
                use_container_width=True,
            )
        return requested
