"""Pydeck click handler using streamlit-deckgl.

st_deckgl reports the full deck.gl onClick event, including a [lon, lat]
coordinate for clicks on empty map, while st.pydeck_chart only reports
object selections. Drawing needs every click, so the map goes through
st_deckgl.
"""

import logging
from dataclasses import dataclass
from typing import Any

import pydeck as pdk
import streamlit as st
from streamlit_deckgl import st_deckgl  # type: ignore[import-untyped]

from geoprofile.constants import MapConfig

logger = logging.getLogger(__name__)


@dataclass
class PydeckClickResult:
    """Result from Pydeck click detection.

    Attributes:
        clicked_object: Picked layer datum (dict) or None for a click on empty map
        clicked_coordinate: [lon, lat] of the click location
    """

    clicked_object: dict[str, Any] | None
    clicked_coordinate: list[float] | None

    @property
    def is_object_click(self) -> bool:
        return self.clicked_object is not None

    @property
    def has_coordinate(self) -> bool:
        return self.clicked_coordinate is not None

    @staticmethod
    def empty() -> "PydeckClickResult":
        """Return empty result (no click detected)."""
        return PydeckClickResult(clicked_object=None, clicked_coordinate=None)


def parse_deckgl_event(event: Any) -> PydeckClickResult:
    """Convert a raw st_deckgl event into a PydeckClickResult.

    st_deckgl spreads the picked object's properties into the event dict
    instead of nesting them under "object":
    - Map click: {coordinate: [lon, lat], eventType: "click"}
    - Object click: {type: ..., id: ..., coordinate: [lon, lat], eventType: "click"}
    """
    if not event or not isinstance(event, dict):
        return PydeckClickResult.empty()

    clicked_coordinate: list[float] | None = None
    coord = event.get("coordinate")
    if isinstance(coord, (list, tuple)) and len(coord) >= 2:
        clicked_coordinate = [float(coord[0]), float(coord[1])]

    clicked_object: dict[str, Any] | None = None
    obj_type = event.get("type")
    if obj_type and obj_type != "click":
        clicked_object = {k: v for k, v in event.items() if k not in ("coordinate", "eventType")}

    return PydeckClickResult(clicked_object=clicked_object, clicked_coordinate=clicked_coordinate)


def render_pydeck_map(
    deck: pdk.Deck,
    key: str,
    height: int = MapConfig.MAP_HEIGHT,
) -> PydeckClickResult:
    """Render Pydeck map and return the latest click.

    Args:
        deck: Configured pydeck.Deck object
        key: Unique key for this component instance
        height: Height in pixels

    Returns:
        PydeckClickResult; empty when there was no click this run.
    """
    # events=["click"] is required, otherwise st_deckgl reports nothing
    event = st_deckgl(deck, key=key, height=height, events=["click"])
    result = parse_deckgl_event(event)
    if result.has_coordinate or result.is_object_click:
        logger.debug(f"Click detected: object={result.is_object_click}, coord={result.clicked_coordinate}")
    return result
