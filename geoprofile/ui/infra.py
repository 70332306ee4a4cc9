"""Infrastructure utilities for Streamlit UI operations.

Wraps Streamlit-specific infrastructure (st.rerun, map version, the event
loop used for async services) so tests can patch one place instead of every
caller.

Only infrastructure belongs here. The controller lives in st.session_state
and is accessed from actions.py.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, TypeVar

import streamlit as st

logger = logging.getLogger(__name__)

T = TypeVar("T")


def trigger_rerun(scope: str = "app") -> None:
    """Trigger Streamlit rerun.

    In tests, patch 'geoprofile.ui.infra.trigger_rerun' to prevent actual
    reruns (which raise StopExecution).

    Args:
        scope: Rerun scope - "app" for full rerun, "fragment" for partial.
    """
    st.rerun(scope=scope)


def bump_map_version() -> None:
    """Increment map_version to create a fresh deck.gl component.

    A new component instance has no memory of the previous click event, so
    the same click cannot be delivered twice after a state change.
    """
    old_version = st.session_state.get("map_version", 0)
    new_version = old_version + 1
    st.session_state.map_version = new_version
    logger.info(f"[MAP] Bumped map_version: {old_version} -> {new_version}")


def reload_map() -> None:
    """Reload map.

    1. Bump map version to clear stale click state
    2. Call trigger_rerun() which raises StopExecution
    """
    bump_map_version()
    trigger_rerun()


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Drive a coroutine to completion from the synchronous Streamlit script thread."""
    return asyncio.run(coro)
