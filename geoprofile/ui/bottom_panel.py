"""Profile list under the map.

One card per profile line, in creation order:
- Color swatch, name and total distance
- Elevation chart
- Start / end coordinates in DMS and decimal notation
- "Analyze" button (disabled while a request is running or once a result exists)
- "Delete" button
- AI analysis text, if any
"""

import logging
from collections.abc import Callable

import streamlit as st

from geoprofile.constants import ChartConfig, StyleConfig
from geoprofile.core.coordinate_formatter import CoordinateFormatter
from geoprofile.model.message import NoProfilesMessage
from geoprofile.model.profile_line import AnalysisState, ProfileLine
from geoprofile.ui.bottom_chart import ProfileChart

logger = logging.getLogger(__name__)


def analyze_button_label(line: ProfileLine) -> str:
    if line.analysis_state == AnalysisState.PENDING:
        return "⏳ Analyzing..."
    if line.analysis_state == AnalysisState.DONE:
        return "✅ Analyzed"
    if line.analysis_state == AnalysisState.FAILED:
        return "✨ Retry Analysis"
    return "✨ AI Analyze"


def analyze_button_disabled(line: ProfileLine, analysis_available: bool) -> bool:
    """Analyze is offered once per line and never while a request is running."""
    return not analysis_available or line.analysis_state in (AnalysisState.PENDING, AnalysisState.DONE)


def _render_endpoint(label: str, line: ProfileLine, is_start: bool) -> None:
    coord = line.start if is_start else line.end
    st.markdown(
        f"**{label}:** {CoordinateFormatter.format_coordinate(coord)}  \n"
        f"<small>{CoordinateFormatter.format_coordinate_decimal(coord)}</small>",
        unsafe_allow_html=True,
    )


def render_profile_card(
    line: ProfileLine,
    chart: ProfileChart,
    analysis_available: bool,
    on_analyze: Callable[[str], None],
    on_delete: Callable[[str], None],
) -> None:
    """Render one profile card."""
    with st.container(border=True):
        col_title, col_analyze, col_delete = st.columns([4, 1, 1])
        with col_title:
            st.markdown(
                f"<span style='color:{line.color}; font-size:1.3em'>●</span> "
                f"**{line.name}** · {CoordinateFormatter.format_distance_km(line.total_distance_m)}",
                unsafe_allow_html=True,
            )
        with col_analyze:
            if st.button(
                analyze_button_label(line=line),
                key=f"analyze_{line.id}",
                disabled=analyze_button_disabled(line=line, analysis_available=analysis_available),
                use_container_width=True,
            ):
                on_analyze(line.id)
        with col_delete:
            if st.button("🗑️ Delete", key=f"delete_{line.id}", use_container_width=True):
                on_delete(line.id)

        st.plotly_chart(chart.render_line(line=line), key=f"profile_chart_{line.id}", use_container_width=True)

        col_start, col_end, col_stats = st.columns(3)
        with col_start:
            _render_endpoint(label="Start", line=line, is_start=True)
        with col_end:
            _render_endpoint(label="End", line=line, is_start=False)
        with col_stats:
            st.markdown(
                f"**Range:** {line.min_elevation_m:.0f}m – {line.max_elevation_m:.0f}m  \n"
                f"**Gain / Loss:** +{line.elevation_gain_m:.0f}m / -{line.elevation_loss_m:.0f}m"
            )

        if line.has_analysis:
            st.markdown(
                f"<div style='border-left: 4px solid {StyleConfig.ANALYSIS_ACCENT_COLOR}; "
                f"padding: 6px 12px;'>✨ <b>AI Terrain Analysis</b><br/>{line.analysis_result}</div>",
                unsafe_allow_html=True,
            )
        elif line.analysis_state == AnalysisState.FAILED:
            st.caption("AI analysis failed. Try again.")


def render_profile_list(
    lines: list[ProfileLine],
    analysis_available: bool,
    on_analyze: Callable[[str], None],
    on_delete: Callable[[str], None],
) -> None:
    """Render all profile cards, or the empty-state hint."""
    if not lines:
        NoProfilesMessage().display()
        return

    st.subheader(f"📈 Elevation Profiles ({len(lines)})")
    chart = ProfileChart(width=ChartConfig.DEFAULT_WIDTH, height=ChartConfig.PROFILE_HEIGHT)
    for line in lines:
        render_profile_card(
            line=line,
            chart=chart,
            analysis_available=analysis_available,
            on_analyze=on_analyze,
            on_delete=on_delete,
        )
