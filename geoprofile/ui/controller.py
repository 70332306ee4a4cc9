"""ProfileController - Explicit application state for GeoProfile.

Owns the ProfileCollection, the drawing state machine and the services, and
implements every user operation without touching Streamlit:
- Map clicks (start a segment / complete a segment and keep chaining)
- Cancelling the current drawing chain
- Deleting a profile line
- AI analysis of a profile line
- Place search (recenters the map)

Every operation returns None on success or a ToastMessage describing a
recoverable failure. Renderers receive the controller explicitly; the
Streamlit action layer (actions.py) only adds spinners, toasts and reruns.
"""

import logging

from geoprofile.constants import MapConfig
from geoprofile.core.elevation_service import ElevationService, ElevationServiceError
from geoprofile.core.place_search import PlaceSearchError, PlaceSearchService
from geoprofile.core.terrain_analyst import AnalysisFailedError, AnalysisUnavailableError, TerrainAnalyst
from geoprofile.model.coordinate import Coordinate
from geoprofile.model.message import (
    AnalysisFailedMessage,
    AnalysisInProgressMessage,
    AnalysisUnavailableMessage,
    LineNotFoundMessage,
    PlaceNotFoundMessage,
    PlaceSearchFailedMessage,
    ProfileBusyMessage,
    ProfileGenerationFailedMessage,
    ToastMessage,
)
from geoprofile.model.profile_collection import AnalysisInProgressError, ProfileCollection
from geoprofile.model.profile_line import ProfileLine
from geoprofile.ui.state_machine import DrawingStateMachine

logger = logging.getLogger(__name__)


class ProfileController:
    """Single owner of mutable application state.

    Example:
        controller = ProfileController(elevation_service=ElevationService(delay_s=0))
        asyncio.run(controller.handle_map_click(Coordinate(lat=0, lon=0)))
        asyncio.run(controller.handle_map_click(Coordinate(lat=0, lon=1)))
        assert len(controller.collection) == 1
    """

    def __init__(
        self,
        elevation_service: ElevationService | None = None,
        analyst: TerrainAnalyst | None = None,
        search_service: PlaceSearchService | None = None,
        collection: ProfileCollection | None = None,
    ) -> None:
        """Initialize controller.

        Args:
            elevation_service: Profile synthesizer (default: real delay, true randomness)
            analyst: AI terrain describer (default: environment-configured)
            search_service: Place search (default: Nominatim)
            collection: Existing collection to keep (e.g. after error recovery)
        """
        self.elevation_service = elevation_service or ElevationService()
        self.analyst = analyst or TerrainAnalyst()
        self.search_service = search_service or PlaceSearchService()
        self.collection = collection if collection is not None else ProfileCollection()
        self.sm, self.context = DrawingStateMachine.create()

    # =========================================================================
    # State Access
    # =========================================================================

    @property
    def is_idle(self) -> bool:
        return self.sm.is_idle

    @property
    def is_awaiting_second_point(self) -> bool:
        return self.sm.is_awaiting_second_point

    @property
    def is_loading(self) -> bool:
        return self.context.loading

    @property
    def pending_start(self) -> Coordinate | None:
        return self.context.pending_start

    @property
    def lines(self) -> list[ProfileLine]:
        return self.collection.lines

    def reset_drawing(self) -> None:
        """Replace the state machine with a fresh one, keeping all lines and the map view."""
        map_ctx = self.context.map
        self.sm, self.context = DrawingStateMachine.create()
        self.context.map = map_ctx
        logger.info("Drawing state reset - profile lines preserved")

    # =========================================================================
    # Drawing
    # =========================================================================

    async def handle_map_click(self, coord: Coordinate) -> ToastMessage | None:
        """Process a map click according to the drawing state.

        IDLE: the click becomes the pending start point.
        AWAITING_SECOND_POINT: a profile is generated for (pending, coord); on
        success a new line is added and coord becomes the next start point. On
        failure nothing changes so the user can retry from the same point.

        Clicks while a profile is being generated are ignored.
        """
        if self.context.loading:
            logger.info(f"Ignoring click at {coord!r} while a profile is generating")
            return ProfileBusyMessage()

        if self.sm.is_idle:
            self.sm.send("place_start", coord=coord)
            return None

        start = self.context.pending_start
        if start is None:
            raise ValueError("AwaitingSecondPoint state must have a pending start point")

        self.context.loading = True
        try:
            points = await self.elevation_service.fetch_profile(start=start, end=coord)
        except ElevationServiceError as e:
            logger.error(f"[PROFILE] Failed to fetch elevation {start!r} -> {coord!r}: {e}")
            return ProfileGenerationFailedMessage(error=str(e))
        finally:
            self.context.loading = False

        self.collection.add_line(start=start, end=coord, points=points)
        self.sm.send("complete_segment", coord=coord)
        return None

    def cancel_drawing(self) -> bool:
        """Discard the pending start point and return to IDLE.

        Lines already created in the chain are kept. No-op when IDLE or while
        a profile is generating.

        Returns:
            True if the drawing was cancelled.
        """
        if self.context.loading or not self.sm.is_awaiting_second_point:
            return False
        return self.sm.try_transition("cancel_drawing")

    # =========================================================================
    # Line Operations
    # =========================================================================

    def delete_line(self, line_id: str) -> ToastMessage | None:
        """Remove a profile line by id."""
        try:
            self.collection.delete_line(line_id=line_id)
        except KeyError:
            return LineNotFoundMessage(line_id=line_id)
        return None

    async def analyze_line(self, line_id: str) -> ToastMessage | None:
        """Request an AI terrain description for one line.

        The line's PENDING state is set before the call and left in all exit
        paths, so a failed request can be retried. A failure keeps any earlier
        result.
        """
        if line_id not in self.collection:
            return LineNotFoundMessage(line_id=line_id)

        if not self.analyst.is_configured:
            return AnalysisUnavailableMessage()

        try:
            line = self.collection.begin_analysis(line_id=line_id)
        except AnalysisInProgressError:
            return AnalysisInProgressMessage(line_name=self.collection.get_line(line_id).name)

        text: str | None = None
        try:
            text = await self.analyst.analyze(line=line)
        except AnalysisUnavailableError:
            logger.error(f"[ANALYSIS] {line_id}: no model configured")
            return AnalysisUnavailableMessage()
        except AnalysisFailedError as e:
            logger.error(f"[ANALYSIS] {line_id} failed: {e}")
            return AnalysisFailedMessage(line_name=line.name, error=str(e))
        finally:
            # Every exit leaves PENDING; the line may have been deleted meanwhile
            if line_id in self.collection:
                if text is None:
                    self.collection.fail_analysis(line_id=line_id)
                else:
                    self.collection.complete_analysis(line_id=line_id, text=text)
        return None

    # =========================================================================
    # Map Navigation
    # =========================================================================

    def search_place(self, query: str) -> ToastMessage | None:
        """Center the map on the best match for a place name."""
        if not query.strip():
            return None
        try:
            result = self.search_service.search(query=query)
        except PlaceSearchError as e:
            logger.error(f"[SEARCH] {e}")
            return PlaceSearchFailedMessage(error=str(e))

        if result is None:
            return PlaceNotFoundMessage(query=query)

        self.context.map.set_center(lon=result.location.lon, lat=result.location.lat, zoom=MapConfig.SEARCH_ZOOM)
        return None

    def __repr__(self) -> str:
        return f"ProfileController(state={self.sm.get_state_name()}, lines={len(self.collection)})"
