"""Transactions table page: CSV import plus the searchable, sortable table."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import streamlit as st

from app.layout import card
from app.state import (
    pop_notification,
    push_notification,
    reset_uploader,
    session_store,
    update_view_state,
    uploader_key,
    view_state,
)
from config import Settings
from core import (
    IngestOutcome,
    ReadError,
    RecordCollection,
    RecordStore,
    SortSpec,
    ViewState,
    build_view,
    clear_filter,
    export_csv,
    format_cell,
    ingest_sync,
    notification_for,
    paginate,
    showing_label,
    toggle_filter_value,
    toggle_sort,
    unique_values,
    with_page,
    with_search,
)

logger = logging.getLogger(__name__)

SAMPLE_PATH = Path(__file__).resolve().parents[2] / "data" / "sample.csv"
SEARCH_KEY = "search_term"

_TOAST_ICONS = {"success": "✅", "warning": "⚠️", "error": "🚨"}


def _show_pending_notification() -> None:
    notification = pop_notification()
    if notification is None:
        return
    st.toast(
        f"**{notification.title}**  \n{notification.description}",
        icon=_TOAST_ICONS.get(notification.level, "ℹ️"),
    )


def _finish_import(outcome: IngestOutcome) -> None:
    push_notification(outcome.notification)
    reset_uploader()
    st.rerun()


def _render_import(store: RecordStore) -> None:
    upload = st.file_uploader(
        "Import transactions",
        type=["csv"],
        key=uploader_key(),
        help="Comma-separated file whose first row names the columns. Replaces the current table.",
    )
    if upload is not None:
        _finish_import(ingest_sync(upload, store))


def _render_empty_state(store: RecordStore) -> None:
    st.info("No transactions yet. Import a CSV file with a header row to get started.")
    if SAMPLE_PATH.exists() and st.button("Load sample transactions"):
        with SAMPLE_PATH.open("rb") as handle:
            outcome = ingest_sync(handle, store)
        _finish_import(outcome)


def _on_search() -> None:
    update_view_state(with_search, st.session_state.get(SEARCH_KEY, ""))


def _on_refresh(store: RecordStore) -> None:
    try:
        store.restore()
    except ReadError as exc:
        logger.warning("Refresh failed: %s", exc)
        push_notification(notification_for(exc))


def _filter_widget_key(key: str, value: str) -> str:
    return f"filter::{key}::{value}"


def _on_clear_filter(key: str, values: list[str]) -> None:
    for value in values:
        st.session_state.pop(_filter_widget_key(key, value), None)
    update_view_state(clear_filter, key)


def _render_toolbar(store: RecordStore, view: RecordCollection) -> None:
    search_col, refresh_col, export_col = st.columns((4, 1, 1), vertical_alignment="bottom")
    search_col.text_input(
        "Search",
        key=SEARCH_KEY,
        placeholder="Search...",
        on_change=_on_search,
        label_visibility="collapsed",
    )
    refresh_col.button("Refresh", on_click=_on_refresh, args=(store,), use_container_width=True)
    export_col.download_button(
        "Export",
        data=export_csv(view),
        file_name="transactions.csv",
        mime="text/csv",
        use_container_width=True,
    )


def _render_filters(collection: RecordCollection, state: ViewState, settings: Settings) -> None:
    keys = [key for key in settings.filter_columns if key in collection.schema]
    if not keys:
        return

    for column, key in zip(st.columns(len(keys)), keys):
        selected = state.selected(key)
        values = sorted(unique_values(collection, key))
        label = f"Filter {key}" + (f" ({len(selected)})" if selected else "")
        with column.popover(label, use_container_width=True):
            for value in values:
                st.checkbox(
                    value or "(blank)",
                    value=value in selected,
                    key=_filter_widget_key(key, value),
                    on_change=update_view_state,
                    args=(toggle_filter_value, key, value),
                )
            if selected:
                st.button(
                    "Clear",
                    key=f"clear::{key}",
                    on_click=_on_clear_filter,
                    args=(key, values),
                )


def _sort_label(key: str, sort: SortSpec | None) -> str:
    label = key or "(unnamed)"
    if sort is None or sort.key != key:
        return f"{label} ↕"
    return f"{label} {'↑' if sort.direction == 'asc' else '↓'}"


def _render_sort_controls(collection: RecordCollection, state: ViewState) -> None:
    keys = list(dict.fromkeys(collection.schema))
    if not keys:
        return
    for column, key in zip(st.columns(len(keys)), keys):
        column.button(
            _sort_label(key, state.sort),
            key=f"sort::{key}",
            on_click=update_view_state,
            args=(toggle_sort, key),
            use_container_width=True,
        )


def _formatted_frame(collection: RecordCollection, settings: Settings) -> pd.DataFrame:
    frame = collection.to_frame()
    for key in frame.columns:
        frame[key] = frame[key].map(
            lambda value, key=key: format_cell(
                key,
                value,
                amount_columns=settings.amount_columns,
                date_columns=settings.date_columns,
            )
        )
    return frame


def _render_table(view: RecordCollection, state: ViewState, settings: Settings) -> None:
    page = paginate(view, state.page, state.page_size)
    if not page.collection:
        st.info("No results found.")
    else:
        st.dataframe(_formatted_frame(page.collection, settings), hide_index=True, use_container_width=True)

    if page.page_count <= 1:
        return
    prev_col, label_col, next_col = st.columns((1, 2, 1))
    prev_col.button(
        "Previous",
        disabled=page.number <= 1,
        on_click=update_view_state,
        args=(with_page, page.number - 1),
    )
    label_col.caption(f"Page {page.number} of {page.page_count}")
    next_col.button(
        "Next",
        disabled=page.number >= page.page_count,
        on_click=update_view_state,
        args=(with_page, page.number + 1),
    )


def render_page(settings: Settings) -> None:
    """Render the transactions page."""

    store = session_store(settings)
    state = view_state(settings)
    _show_pending_notification()

    st.title("Transactions")
    st.caption("Manage and analyse your financial transactions.")

    with card("Import", suffix="CSV"):
        _render_import(store)

    collection = store.current()
    if collection is None:
        _render_empty_state(store)
        return

    view = build_view(collection, state)
    with card("Transactions", suffix=showing_label(len(view), len(collection))):
        _render_toolbar(store, view)
        _render_filters(collection, state, settings)
        _render_sort_controls(collection, state)
        _render_table(view, state, settings)


__all__ = ["render_page"]
