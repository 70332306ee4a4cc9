"""Place search using the OpenStreetMap Nominatim API.

Resolves a free-text query to the best matching coordinate so the map can
fly there. Only the first result is used.
"""

import logging
from dataclasses import dataclass

import requests

from geoprofile.constants import SearchConfig
from geoprofile.model.coordinate import Coordinate

logger = logging.getLogger(__name__)


class PlaceSearchError(RuntimeError):
    """Raised when the search request fails or returns malformed data."""


@dataclass(frozen=True)
class PlaceResult:
    """Best match for a search query."""

    name: str
    location: Coordinate


class PlaceSearchService:
    """Looks up place names with Nominatim.

    Example:
        result = PlaceSearchService().search("Mont Blanc")
        if result:
            print(result.location)
    """

    def __init__(
        self,
        url: str = SearchConfig.NOMINATIM_URL,
        timeout_s: float = SearchConfig.TIMEOUT_S,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    def search(self, query: str) -> PlaceResult | None:
        """Return the best match, or None if nothing matched.

        A blank query returns None without a request.

        Raises:
            PlaceSearchError: If the request fails or the response is malformed.
        """
        query = query.strip()
        if not query:
            return None

        logger.info(f"[SEARCH] Searching for {query!r}")
        try:
            response = self.session.get(
                self.url,
                params={"format": "json", "q": query, "limit": SearchConfig.RESULT_LIMIT},
                headers={"User-Agent": SearchConfig.USER_AGENT},
                timeout=self.timeout_s,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise PlaceSearchError(f"Search failed: {e}") from e

        if not data:
            logger.info(f"[SEARCH] No results for {query!r}")
            return None

        first = data[0]
        try:
            location = Coordinate(lat=float(first["lat"]), lon=float(first["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise PlaceSearchError(f"Malformed search result: {first!r}") from e

        result = PlaceResult(name=str(first.get("display_name", query)), location=location)
        logger.info(f"[SEARCH] Found {result.name} at {location!r}")
        return result
