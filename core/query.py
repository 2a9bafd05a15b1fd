"""Search, sort, filter and paging over record collections.

Every function here is pure: it returns a new collection (or the input
itself when there is nothing to do) and never mutates the records it is
given. The table view is recomputed from scratch on every interaction.
"""

from __future__ import annotations

import math
from dataclasses import replace
from functools import cmp_to_key
from types import MappingProxyType
from typing import Iterable

from core.models import FilterSpec, Page, Record, RecordCollection, SortSpec, ViewState

__all__ = [
    "apply_filter",
    "apply_search",
    "apply_sort",
    "build_view",
    "clear_filter",
    "compare_values",
    "paginate",
    "toggle_filter_value",
    "toggle_sort",
    "unique_values",
    "with_page",
    "with_search",
]


def apply_search(collection: RecordCollection, term: str) -> RecordCollection:
    """Keep records where any value contains ``term``, ignoring case."""

    if not term:
        return collection

    needle = term.casefold()
    return collection.derive(
        record
        for record in collection
        if any(needle in value.casefold() for value in record.values())
    )


def _as_number(value: str) -> float | None:
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def compare_values(left: str, right: str) -> int:
    """Natural ordering: numeric when both sides are numbers, else by text."""

    left_number, right_number = _as_number(left), _as_number(right)
    if left_number is not None and right_number is not None:
        return (left_number > right_number) - (left_number < right_number)
    return (left > right) - (left < right)


def apply_sort(collection: RecordCollection, spec: SortSpec | None) -> RecordCollection:
    """Stable sort on ``spec.key``; ties keep their incoming order."""

    if spec is None or spec.key not in collection.schema:
        return collection

    key = spec.key
    sign = -1 if spec.direction == "desc" else 1

    def _compare(left: Record, right: Record) -> int:
        return sign * compare_values(left[key], right[key])

    return collection.derive(sorted(collection, key=cmp_to_key(_compare)))


def apply_filter(collection: RecordCollection, spec: FilterSpec) -> RecordCollection:
    """Keep records matching every column that has selected values."""

    active = {
        key: selected
        for key, selected in spec.items()
        if selected and key in collection.schema
    }
    if not active:
        return collection

    return collection.derive(
        record
        for record in collection
        if all(record[key] in selected for key, selected in active.items())
    )


def unique_values(collection: RecordCollection, key: str) -> set[str]:
    if key not in collection.schema:
        return set()
    return set(collection.column(key))


def build_view(collection: RecordCollection, state: ViewState) -> RecordCollection:
    """Compose the displayed view: filter, then search, then sort."""

    view = apply_filter(collection, state.filters)
    view = apply_search(view, state.search)
    return apply_sort(view, state.sort)


def paginate(collection: RecordCollection, page: int, page_size: int) -> Page:
    """Slice out a 1-based page, clamping ``page`` into range."""

    total = len(collection)
    if page_size <= 0:
        return Page(collection=collection, number=1, page_count=1, total=total)

    page_count = max(1, math.ceil(total / page_size))
    number = min(max(page, 1), page_count)
    start = (number - 1) * page_size
    return Page(
        collection=collection.derive(collection.records[start : start + page_size]),
        number=number,
        page_count=page_count,
        total=total,
    )


def toggle_sort(state: ViewState, key: str) -> ViewState:
    """Flip direction when ``key`` is already sorted on, else sort ascending."""

    if state.sort is not None and state.sort.key == key:
        return replace(state, sort=state.sort.flipped())
    return replace(state, sort=SortSpec(key, "asc"))


def _with_filters(state: ViewState, filters: Iterable[tuple[str, frozenset[str]]]) -> ViewState:
    return replace(state, filters=MappingProxyType(dict(filters)), page=1)


def toggle_filter_value(state: ViewState, key: str, value: str) -> ViewState:
    selected = state.selected(key)
    updated = selected - {value} if value in selected else selected | {value}
    others = ((name, values) for name, values in state.filters.items() if name != key)
    return _with_filters(state, [*others, (key, frozenset(updated))])


def clear_filter(state: ViewState, key: str) -> ViewState:
    return _with_filters(state, ((name, values) for name, values in state.filters.items() if name != key))


def with_search(state: ViewState, term: str) -> ViewState:
    if term == state.search:
        return state
    return replace(state, search=term, page=1)


def with_page(state: ViewState, page: int) -> ViewState:
    return replace(state, page=max(page, 1))
