"""User interface components for GeoProfile.

File Structure (layout-based naming):
- left_panel.py: Sidebar with drawing status, search, finish button, export
- center_map.py: Pydeck map with profile lines and the pending start point
- bottom_panel.py: Profile cards with charts, coordinates and AI analysis
- bottom_chart.py: Plotly elevation profile charts and PNG export

Core Components:
- state_machine.py: DrawingStateMachine (2 states) + DrawingContext
- controller.py: ProfileController, the single owner of application state
- actions.py: Streamlit wrappers (spinners, toasts, reruns) around the controller
- click_detector.py / pydeck_click_handler.py: Map click capture and deduplication
"""

from geoprofile.ui.actions import (
    analyze_profile,
    delete_profile,
    export_profiles,
    finish_drawing,
    process_map_click,
    search_place,
)
from geoprofile.ui.bottom_chart import ProfileChart, export_profiles_png
from geoprofile.ui.bottom_panel import render_profile_list
from geoprofile.ui.center_map import MapRenderer
from geoprofile.ui.click_detector import ClickDeduplication, ClickDetector
from geoprofile.ui.controller import ProfileController
from geoprofile.ui.left_panel import SidebarRenderer
from geoprofile.ui.state_machine import DrawingContext, DrawingStateMachine

__all__ = [
    "DrawingStateMachine",
    "DrawingContext",
    "ProfileController",
    "MapRenderer",
    "ProfileChart",
    "SidebarRenderer",
    "ClickDetector",
    "ClickDeduplication",
    "render_profile_list",
    "export_profiles_png",
    "analyze_profile",
    "delete_profile",
    "export_profiles",
    "finish_drawing",
    "process_map_click",
    "search_place",
]
