"""State machine for GeoProfile drawing sessions.

Uses python-statemachine for robust state management with:
- Clear state definitions
- Entry hooks for side effects
- Explicit event-driven transitions

States (2 states):
    IDLE: Nothing being drawn
    AWAITING_SECOND_POINT: A start point is placed, the next map click ends the segment

Transitions:
    IDLE -> AWAITING_SECOND_POINT: place_start (first map click)
    AWAITING_SECOND_POINT -> AWAITING_SECOND_POINT: complete_segment (profile created,
        the clicked end point becomes the next start point for chained drawing)
    AWAITING_SECOND_POINT -> IDLE: cancel_drawing (pending start point discarded)

There is no cancel transition out of IDLE; ProfileController treats it as a no-op.

complete_segment is only fired after the elevation profile exists and the new
line has been added to the ProfileCollection. A failed profile leaves the
machine and the pending start point untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from geoprofile.constants import MapConfig
from geoprofile.model.coordinate import Coordinate

logger = logging.getLogger(__name__)


@dataclass
class MapContext:
    """Map view state (center and zoom)."""

    lat: float = MapConfig.START_CENTER_LAT
    lon: float = MapConfig.START_CENTER_LON
    zoom: int = MapConfig.DEFAULT_ZOOM

    @property
    def lat_lon(self) -> tuple[float, float]:
        """Return (lat, lon) tuple - standard geographic order."""
        return (self.lat, self.lon)

    @property
    def lon_lat(self) -> tuple[float, float]:
        """Return (lon, lat) tuple - GeoJSON/Pydeck order."""
        return (self.lon, self.lat)

    def set_center(self, lon: float, lat: float, zoom: int | None = None) -> None:
        self.lon = lon
        self.lat = lat
        if zoom is not None:
            self.zoom = zoom


@dataclass
class DrawingContext:
    """Shared context/model for the drawing state machine.

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the model. It stores the current state value.

    Attributes:
        pending_start: Start of the segment being drawn (AWAITING_SECOND_POINT only)
        loading: True while an elevation profile is being generated
        segments_drawn: Segments completed since the chain was started
        map: Map center and zoom
    """

    state: str | None = None

    pending_start: Coordinate | None = None
    loading: bool = False
    segments_drawn: int = 0
    map: MapContext = field(default_factory=MapContext)

    def clear_pending(self) -> None:
        self.pending_start = None
        self.segments_drawn = 0

    def has_pending_start(self) -> bool:
        return self.pending_start is not None

    def __repr__(self) -> str:
        return (
            f"DrawingContext(state={self.state}, pending={self.pending_start!r}, "
            f"loading={self.loading}, segments={self.segments_drawn})"
        )


class TransitionLogListener:
    """Listener that logs every state transition.

    Usage:
        sm = DrawingStateMachine(context=context)
        sm.add_listener(TransitionLogListener())
    """

    def after_transition(self, event: str, source: State, target: State) -> None:
        logger.info(f"[STATE] {source.name} --({event})--> {target.name}")


class DrawingStateMachine(StateMachine):
    """State machine for the segment drawing workflow.

    See module docstring for complete transition documentation.
    """

    # ==========================================================================
    # State Definitions
    # ==========================================================================

    idle = State("Idle", initial=True)
    awaiting_second_point = State("AwaitingSecondPoint")

    # ==========================================================================
    # Transitions
    # ==========================================================================

    # First click places the start point
    place_start = idle.to(awaiting_second_point)
    # Profile created, chain continues from the end point
    complete_segment = awaiting_second_point.to(awaiting_second_point)
    # Stop drawing, discard the pending start point
    cancel_drawing = awaiting_second_point.to(idle)

    # ==========================================================================
    # State Check Properties
    # ==========================================================================

    @property
    def is_idle(self) -> bool:
        return self.idle.is_active

    @property
    def is_awaiting_second_point(self) -> bool:
        return self.awaiting_second_point.is_active

    # ==========================================================================
    # Entry Hooks
    # ==========================================================================

    def on_enter_idle(self) -> None:
        """Hook: Entering idle state."""
        self.context.clear_pending()

    # ==========================================================================
    # Transition Actions (before_* hooks)
    # ==========================================================================

    def before_place_start(self, coord: Coordinate) -> None:
        """Action before placing the first point of a chain."""
        self.context.pending_start = coord
        self.context.segments_drawn = 0

    def before_complete_segment(self, coord: Coordinate) -> None:
        """Action before continuing the chain from the new end point."""
        self.context.pending_start = coord
        self.context.segments_drawn += 1

    # ==========================================================================
    # Initialization
    # ==========================================================================

    def __init__(self, context: DrawingContext | None = None, start_value: str | None = None) -> None:
        """Initialize state machine with model pattern.

        Args:
            context: Shared context/model (creates new if None)
            start_value: Optional initial state value (for restoring state)
        """
        model = context or DrawingContext()
        super().__init__(model=model, start_value=start_value)

    # ==========================================================================
    # Utility Methods
    # ==========================================================================

    @property
    def context(self) -> DrawingContext:
        """Alias for model."""
        return self.model

    def get_state_name(self) -> str:
        """Get current state name for display."""
        return self.current_state.name

    def __repr__(self) -> str:
        return f"DrawingStateMachine(state={self.get_state_name()}, model={self.context!r})"

    def try_transition(self, event: str, **kwargs: Any) -> bool:
        """Attempt a transition, returning success/failure.

        Args:
            event: Transition event name
            **kwargs: Arguments for transition

        Returns:
            True if transition succeeded, False otherwise.
        """
        try:
            self.send(event, **kwargs)
            return True
        except TransitionNotAllowed:
            logger.warning(f"Transition '{event}' not allowed from {self.get_state_name()}")
            return False

    @staticmethod
    def create(add_log_listener: bool = True) -> tuple[DrawingStateMachine, DrawingContext]:
        """Factory method to create state machine with context and optional log listener.

        Returns:
            Tuple of (DrawingStateMachine, DrawingContext)
        """
        context = DrawingContext()
        sm = DrawingStateMachine(context=context)
        if add_log_listener:
            sm.add_listener(TransitionLogListener())
        logger.info(f"Created {sm!r}")
        return sm, context
