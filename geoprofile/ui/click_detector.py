"""Click detector - turns Pydeck click events into map coordinates.

The deck.gl component keeps returning its last event on every Streamlit
rerun, so the detector remembers the last processed click and ignores
repeats. Any click with a coordinate counts as a map click, including clicks
on a drawn line or endpoint: drawing may start or end on existing geometry.
"""

import logging
from dataclasses import dataclass
from typing import Any

from geoprofile.constants import ClickConfig
from geoprofile.model.coordinate import Coordinate

logger = logging.getLogger(__name__)


@dataclass
class ClickDeduplication:
    """Remembers the last processed click key."""

    last_key: str | None = None

    def is_new_click(self, key: str) -> bool:
        """Return True (and remember the key) if this click was not seen before."""
        if key == self.last_key:
            return False
        self.last_key = key
        return True

    def reset(self) -> None:
        self.last_key = None


def make_click_key(clicked_coordinate: list[float], map_version: int = 0) -> str:
    """Dedup key: map version plus the coordinate rounded to DEDUP_KEY_DECIMALS."""
    decimals = ClickConfig.DEDUP_KEY_DECIMALS
    lon, lat = clicked_coordinate[0], clicked_coordinate[1]
    return f"v{map_version}_{lon:.{decimals}f}_{lat:.{decimals}f}"


@dataclass
class ClickDetector:
    """Detects new map clicks from Pydeck event data.

    Attributes:
        dedup: Last-seen click tracking, kept in session state between reruns
    """

    dedup: ClickDeduplication

    def detect(
        self,
        clicked_object: dict[str, Any] | None,
        clicked_coordinate: list[float] | None,
        map_version: int = 0,
    ) -> Coordinate | None:
        """Return the clicked location for a new click, None otherwise.

        The longitude is kept as deck.gl reports it. Past the antimeridian it
        lies outside [-180, 180), so a segment drawn across the date line stays
        short. CoordinateFormatter normalizes it for display.
        """
        if clicked_coordinate is None:
            if clicked_object is not None:
                logger.warning(f"Object click without coordinate: {clicked_object}")
            return None

        key = make_click_key(clicked_coordinate=clicked_coordinate, map_version=map_version)
        if not self.dedup.is_new_click(key=key):
            return None

        coord = Coordinate.from_lon_lat(clicked_coordinate)
        if not -90.0 <= coord.lat <= 90.0:
            logger.warning(f"Ignoring click with invalid latitude {coord.lat}")
            return None

        if clicked_object is not None:
            logger.debug(f"Click on {clicked_object.get('type')} {clicked_object.get('id', '')}")
        logger.debug(f"Map click at {coord!r}")
        return coord
