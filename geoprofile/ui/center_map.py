"""MapRenderer - Pydeck map rendering for GeoProfile.

Renders drawn profile lines on an interactive 2D map using deck.gl:
- OpenStreetMap raster basemap (Mapbox GL style dict, no API key)
- Profile lines in their palette color (PathLayer)
- Start and end points of every line (ScatterplotLayer)
- The pending start point while a segment is being drawn (ScatterplotLayer)

Pydeck conventions:
- [lon, lat] coordinate order (GeoJSON standard)
- Colors as RGBA lists [R, G, B, A] (0-255)
- Data prepared as list[dict]; pickable=True enables tooltips and picking
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import pydeck as pdk

from geoprofile.constants import ClickConfig, MapConfig, StyleConfig
from geoprofile.core.coordinate_formatter import CoordinateFormatter
from geoprofile.model.coordinate import Coordinate
from geoprofile.model.profile_line import ProfileLine

logger = logging.getLogger(__name__)

OSM_TILES = [
    "https://a.tile.openstreetmap.org/{z}/{x}/{y}.png",
    "https://b.tile.openstreetmap.org/{z}/{x}/{y}.png",
    "https://c.tile.openstreetmap.org/{z}/{x}/{y}.png",
]

# Mapbox GL style spec for a raster basemap. pydeck's TileLayer cannot render
# raster tiles without a renderSubLayers callback, so the basemap is a style dict.
OSM_STYLE: dict[str, Any] = {
    "version": 8,
    "sources": {
        "osm": {
            "type": "raster",
            "tiles": OSM_TILES,
            "tileSize": 256,
            "attribution": "© OpenStreetMap contributors",
            "maxzoom": 19,
        }
    },
    "layers": [
        {
            "id": "osm",
            "type": "raster",
            "source": "osm",
            "minzoom": 0,
            "maxzoom": 22,
        }
    ],
}


@dataclass
class LayerCollection:
    """Pydeck layers in z-order (back to front): lines, endpoints, pending marker."""

    lines: list[pdk.Layer] = field(default_factory=list)
    endpoints: list[pdk.Layer] = field(default_factory=list)
    markers: list[pdk.Layer] = field(default_factory=list)

    def get_ordered_layers(self) -> list[pdk.Layer]:
        return self.lines + self.endpoints + self.markers


class MapRenderer:
    """Renders profile lines on a Pydeck map.

    Example:
        renderer = MapRenderer()
        deck = renderer.render(lines=collection.lines, pending_start=ctx.pending_start)
        render_pydeck_map(deck=deck, key="main_map")
    """

    def __init__(
        self,
        center_lat: float = MapConfig.START_CENTER_LAT,
        center_lon: float = MapConfig.START_CENTER_LON,
        zoom: int = MapConfig.DEFAULT_ZOOM,
    ) -> None:
        self.center_lat = center_lat
        self.center_lon = center_lon
        self.zoom = zoom

    def get_view_state(self) -> pdk.ViewState:
        """Create Pydeck ViewState from current settings."""
        return pdk.ViewState(
            latitude=self.center_lat,
            longitude=self.center_lon,
            zoom=self.zoom,
            min_zoom=MapConfig.MIN_ZOOM,
            pitch=0,
            bearing=0,
        )

    def update_view(self, lat: float | None = None, lon: float | None = None, zoom: int | None = None) -> None:
        """Update view state parameters."""
        if lat is not None:
            self.center_lat = lat
        if lon is not None:
            self.center_lon = lon
        if zoom is not None:
            self.zoom = zoom

    def render(
        self,
        lines: list[ProfileLine],
        pending_start: Coordinate | None = None,
    ) -> pdk.Deck:
        """Build the deck with all profile lines and the pending start marker.

        Args:
            lines: Profile lines in creation order
            pending_start: Start point of the segment being drawn, if any

        Returns:
            pdk.Deck object ready for display.
        """
        layers = LayerCollection()
        if lines:
            layers.lines.append(self._create_line_layer(lines=lines))
            layers.endpoints.append(self._create_endpoint_layer(lines=lines))
        if pending_start is not None:
            layers.markers.append(self._create_pending_marker_layer(coord=pending_start))

        logger.debug(f"[MAP] Rendering {len(lines)} lines, pending={pending_start is not None}")

        return pdk.Deck(
            map_style=OSM_STYLE,
            map_provider="mapbox",  # Required when map_style is a dict
            initial_view_state=self.get_view_state(),
            layers=layers.get_ordered_layers(),
            tooltip=self._create_tooltip_config(),
        )

    # =========================================================================
    # LAYERS
    # =========================================================================

    @staticmethod
    def _line_datum(line: ProfileLine) -> dict[str, Any]:
        return {
            "type": ClickConfig.TYPE_PROFILE_LINE,
            "id": line.id,
            "name": line.name,
            "detail": CoordinateFormatter.format_distance_km(line.total_distance_m),
            "path": [list(p.location.lon_lat) for p in line.points],
            "color": StyleConfig.hex_to_rgba(line.color),
        }

    def _create_line_layer(self, lines: list[ProfileLine]) -> pdk.Layer:
        return pdk.Layer(
            "PathLayer",
            [self._line_datum(line) for line in lines],
            get_path="path",
            get_color="color",
            get_width=4,
            width_units="pixels",
            width_min_pixels=3,
            pickable=True,
            auto_highlight=True,
            id="profile_lines",
        )

    def _create_endpoint_layer(self, lines: list[ProfileLine]) -> pdk.Layer:
        data = []
        for line in lines:
            for label, coord in (("Start", line.start), ("End", line.end)):
                data.append(
                    {
                        "type": ClickConfig.TYPE_ENDPOINT,
                        "id": f"{line.id}_{label.lower()}",
                        "name": f"{line.name} {label}",
                        "detail": CoordinateFormatter.format_coordinate(coord),
                        "position": list(coord.lon_lat),
                        "color": StyleConfig.hex_to_rgba(line.color),
                    }
                )
        return pdk.Layer(
            "ScatterplotLayer",
            data,
            get_position="position",
            get_fill_color="color",
            get_line_color=StyleConfig.hex_to_rgba(StyleConfig.ENDPOINT_BORDER_COLOR),
            get_radius=5,
            radius_units="pixels",
            stroked=True,
            line_width_min_pixels=2,
            pickable=True,
            id="profile_endpoints",
        )

    def _create_pending_marker_layer(self, coord: Coordinate) -> pdk.Layer:
        return pdk.Layer(
            "ScatterplotLayer",
            [
                {
                    "type": ClickConfig.TYPE_PENDING,
                    "id": "pending",
                    "name": "Start point",
                    "detail": CoordinateFormatter.format_coordinate(coord),
                    "position": list(coord.lon_lat),
                    "color": StyleConfig.hex_to_rgba(StyleConfig.PENDING_MARKER_COLOR),
                }
            ],
            get_position="position",
            get_fill_color="color",
            get_line_color=StyleConfig.hex_to_rgba(StyleConfig.ENDPOINT_BORDER_COLOR),
            get_radius=6,
            radius_units="pixels",
            stroked=True,
            line_width_min_pixels=2,
            pickable=True,
            id="pending_start",
        )

    # =========================================================================
    # TOOLTIP CONFIGURATION
    # =========================================================================

    def _create_tooltip_config(self) -> dict[str, str | dict[str, str]]:
        """Tooltip with the object name and one detail line."""
        return {
            "html": "<b>{name}</b><br/>{detail}",
            "style": {
                "backgroundColor": "rgba(255, 255, 255, 0.95)",
                "color": "#333",
                "padding": "6px 10px",
                "borderRadius": "4px",
            },
        }
