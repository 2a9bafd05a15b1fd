"""Per-session state for the Streamlit app.

Streamlit re-runs the script on every interaction, so the record store and
the table's view state live in ``st.session_state``. Widget callbacks swap
in a new ``ViewState`` rather than mutating the current one.
"""

from __future__ import annotations

import logging
from typing import Callable

import streamlit as st

from config import Settings
from core import Notification, ReadError, RecordStore, ViewState, notification_for

logger = logging.getLogger(__name__)

STORE_KEY = "record_store"
VIEW_STATE_KEY = "view_state"
NOTIFICATION_KEY = "pending_notification"
UPLOADER_GENERATION_KEY = "uploader_generation"


def session_store(settings: Settings) -> RecordStore:
    """Return this session's store, restoring the saved snapshot on first use."""

    store = st.session_state.get(STORE_KEY)
    if store is None:
        store = RecordStore(snapshot_path=settings.snapshot_path)
        try:
            store.restore()
        except ReadError as exc:
            logger.warning("Ignoring unreadable snapshot: %s", exc)
            push_notification(notification_for(exc))
        st.session_state[STORE_KEY] = store
    return store


def view_state(settings: Settings) -> ViewState:
    state = st.session_state.get(VIEW_STATE_KEY)
    if state is None:
        state = ViewState(page_size=settings.page_size)
        st.session_state[VIEW_STATE_KEY] = state
    return state


def update_view_state(transition: Callable[..., ViewState], *args: object) -> None:
    """Widget callback applying ``transition(state, *args)`` to the view state."""

    st.session_state[VIEW_STATE_KEY] = transition(st.session_state[VIEW_STATE_KEY], *args)


def push_notification(notification: Notification) -> None:
    st.session_state[NOTIFICATION_KEY] = notification


def pop_notification() -> Notification | None:
    return st.session_state.pop(NOTIFICATION_KEY, None)


def uploader_key() -> str:
    return f"uploader-{st.session_state.get(UPLOADER_GENERATION_KEY, 0)}"


def reset_uploader() -> None:
    """Give the file uploader a fresh key so it forgets the processed file."""

    st.session_state[UPLOADER_GENERATION_KEY] = st.session_state.get(UPLOADER_GENERATION_KEY, 0) + 1
