"""Core import-and-query package for the Ledgerlite dashboard."""

from .errors import IngestError, InvalidFormatError, Notification, ReadError, notification_for
from .formatting import format_cell, format_currency, format_date, showing_label
from .ingest import IngestOutcome, export_csv, ingest, ingest_sync, parse, read_source, validate_source
from .models import Page, Record, RecordCollection, SortSpec, ViewState
from .query import (
    apply_filter,
    apply_search,
    apply_sort,
    build_view,
    clear_filter,
    paginate,
    toggle_filter_value,
    toggle_sort,
    unique_values,
    with_page,
    with_search,
)
from .store import RecordStore, load_snapshot, write_snapshot

__all__ = [
    "IngestError",
    "InvalidFormatError",
    "Notification",
    "ReadError",
    "notification_for",
    "format_cell",
    "format_currency",
    "format_date",
    "showing_label",
    "IngestOutcome",
    "export_csv",
    "ingest",
    "ingest_sync",
    "parse",
    "read_source",
    "validate_source",
    "Page",
    "Record",
    "RecordCollection",
    "SortSpec",
    "ViewState",
    "apply_filter",
    "apply_search",
    "apply_sort",
    "build_view",
    "clear_filter",
    "paginate",
    "toggle_filter_value",
    "toggle_sort",
    "unique_values",
    "with_page",
    "with_search",
    "RecordStore",
    "load_snapshot",
    "write_snapshot",
]
