"""ProfileChart - Plotly elevation profile rendering and PNG export.

Renders elevation profiles showing:
- Elevation along the segment as a filled area in the line's color
- Hover readout with distance, elevation and the sample location in
  DMS and decimal notation
- All profiles overlaid in one figure for image export
"""

import logging
from datetime import datetime
from typing import Optional

import plotly.graph_objects as go

from geoprofile.constants import ChartConfig, ExportConfig, StyleConfig
from geoprofile.core.coordinate_formatter import CoordinateFormatter
from geoprofile.model.profile_line import ProfileLine

logger = logging.getLogger(__name__)


class ProfileExportError(RuntimeError):
    """Rendering the profile image failed."""


_HOVER_TEMPLATE = (
    "Distance: %{x:.0f}m<br>"
    "Elevation: %{y:.0f}m<br>"
    "Lon: %{customdata[0]} (%{customdata[2]})<br>"
    "Lat: %{customdata[1]} (%{customdata[3]})"
)


class ProfileChart:
    """Renders elevation profiles using Plotly.

    Example:
        chart = ProfileChart(width=ChartConfig.DEFAULT_WIDTH, height=ChartConfig.PROFILE_HEIGHT)
        fig = chart.render_line(line=line)
        st.plotly_chart(fig)
    """

    def __init__(
        self,
        width: int,
        height: int,
    ) -> None:
        """Initialize profile chart renderer.

        Args:
            width: Chart width in pixels
            height: Chart height in pixels
        """
        self.width = width
        self.height = height

    @staticmethod
    def _hover_data(line: ProfileLine) -> list[list[str]]:
        """Per-point [lon DMS, lat DMS, lon decimal, lat decimal] for the hover template."""
        data = []
        for p in line.points:
            lat, lon = p.location.lat, p.location.lon
            data.append(
                [
                    CoordinateFormatter.to_dms(lon, is_lat=False),
                    CoordinateFormatter.to_dms(lat, is_lat=True),
                    CoordinateFormatter.to_decimal(lon, is_lat=False),
                    CoordinateFormatter.to_decimal(lat, is_lat=True),
                ]
            )
        return data

    def _elevation_range(self, elevations: list[float]) -> list[float]:
        """Y-axis range with padding, never starting below sea level."""
        min_elev = min(elevations)
        max_elev = max(elevations)
        padding = max(
            (max_elev - min_elev) * ChartConfig.ELEVATION_PADDING_FACTOR,
            ChartConfig.ELEVATION_PADDING_MIN_M,
        )
        return [max(min_elev - padding, 0.0), max_elev + padding]

    def render_line(
        self,
        line: ProfileLine,
        title: Optional[str] = None,
    ) -> go.Figure:
        """Render the elevation profile of one line.

        Args:
            line: Profile line to visualize
            title: Optional chart title (default: no title, the card shows the name)

        Returns:
            Plotly Figure object.
        """
        distances = line.distances
        elevations = line.elevations

        fig = go.Figure()
        fig.add_trace(
            go.Scatter(
                x=distances,
                y=elevations,
                fill="tozeroy",
                fillcolor=self._area_fill(hex_color=line.color),
                line=dict(color=line.color, width=ChartConfig.LINE_WIDTH),
                mode="lines",
                name=line.name,
                customdata=self._hover_data(line=line),
                hovertemplate=_HOVER_TEMPLATE + "<extra></extra>",
            )
        )

        fig.update_layout(
            title=dict(text=title, x=0.5) if title else None,
            xaxis=dict(
                title="Distance (m)",
                showgrid=True,
                gridcolor=ChartConfig.GRID_COLOR,
            ),
            yaxis=dict(
                title="Elevation (m)",
                showgrid=True,
                gridcolor=ChartConfig.GRID_COLOR,
                range=self._elevation_range(elevations=elevations),
            ),
            showlegend=False,
            hovermode="x unified",
            width=self.width,
            height=self.height,
            margin=dict(l=50, r=20, t=40 if title else 10, b=40),
            plot_bgcolor=ChartConfig.BACKGROUND_COLOR,
            paper_bgcolor=ChartConfig.BACKGROUND_COLOR,
        )
        return fig

    def render_combined(
        self,
        lines: list[ProfileLine],
        title: str = "Terrain Profiles",
    ) -> go.Figure:
        """Render all lines overlaid in one figure.

        Args:
            lines: Lines to draw, in creation order
            title: Chart title

        Returns:
            Plotly Figure object.
        """
        if not lines:
            return self._empty_figure(message="No profiles yet")

        fig = go.Figure()
        all_elevations: list[float] = []
        for line in lines:
            all_elevations.extend(line.elevations)
            name = f"{line.name} ({CoordinateFormatter.format_distance_km(line.total_distance_m)})"
            fig.add_trace(
                go.Scatter(
                    x=line.distances,
                    y=line.elevations,
                    mode="lines",
                    line=dict(color=line.color, width=ChartConfig.LINE_WIDTH),
                    name=name,
                    customdata=self._hover_data(line=line),
                    hovertemplate=f"{line.name}<br>" + _HOVER_TEMPLATE + "<extra></extra>",
                )
            )

        fig.update_layout(
            title=dict(text=title, x=0.5),
            xaxis=dict(
                title="Distance (m)",
                showgrid=True,
                gridcolor=ChartConfig.GRID_COLOR,
            ),
            yaxis=dict(
                title="Elevation (m)",
                showgrid=True,
                gridcolor=ChartConfig.GRID_COLOR,
                range=self._elevation_range(elevations=all_elevations),
            ),
            showlegend=True,
            legend=dict(
                orientation="h",
                yanchor="bottom",
                y=1.02,
                xanchor="center",
                x=0.5,
            ),
            width=self.width,
            height=self.height,
            margin=dict(l=50, r=30, t=80, b=50),
            plot_bgcolor=ChartConfig.BACKGROUND_COLOR,
            paper_bgcolor=ChartConfig.BACKGROUND_COLOR,
        )
        return fig

    def _empty_figure(self, message: str) -> go.Figure:
        """Create empty figure with message."""
        fig = go.Figure()
        fig.add_annotation(
            xref="paper",
            yref="paper",
            x=0.5,
            y=0.5,
            text=message,
            showarrow=False,
            font=dict(size=14, color="gray"),
        )
        fig.update_layout(
            width=self.width,
            height=self.height,
            xaxis=dict(visible=False),
            yaxis=dict(visible=False),
            plot_bgcolor=ChartConfig.BACKGROUND_COLOR,
        )
        return fig

    def _area_fill(self, hex_color: str) -> str:
        """Translucent CSS fill for the area under a profile."""
        r, g, b, _ = StyleConfig.hex_to_rgba(hex_color=hex_color)
        return f"rgba({r}, {g}, {b}, {ChartConfig.AREA_FILL_ALPHA})"


# =============================================================================
# IMAGE EXPORT
# =============================================================================


def export_filename(now: datetime | None = None) -> str:
    """File name for an exported image, e.g. terrain-profile-1718000000000.png."""
    now = now or datetime.now()
    timestamp_ms = int(now.timestamp() * 1000)
    return f"{ExportConfig.FILENAME_PREFIX}-{timestamp_ms}.png"


def export_profiles_png(
    lines: list[ProfileLine],
    width: int = ChartConfig.DEFAULT_WIDTH,
    height: int = ChartConfig.COMBINED_HEIGHT,
) -> bytes:
    """Render all profiles into one PNG image using Kaleido.

    Raises:
        ValueError: If there are no lines to export
        ProfileExportError: If the image engine fails
    """
    if not lines:
        raise ValueError("No profiles to export")

    fig = ProfileChart(width=width, height=height).render_combined(lines=lines)
    try:
        image = fig.to_image(format="png", width=width, height=height, scale=ExportConfig.SCALE)
    except (ValueError, RuntimeError) as e:
        raise ProfileExportError(f"Could not render image: {e}") from e

    logger.info(f"[EXPORT] Rendered {len(lines)} profiles to PNG ({len(image)} bytes)")
    return image
