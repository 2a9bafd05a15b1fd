"""Shared data model definitions for the Ledgerlite dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Literal, Mapping, Sequence

import pandas as pd

Schema = tuple[str, ...]
Record = dict[str, str]
FilterSpec = Mapping[str, frozenset[str]]
SortDirection = Literal["asc", "desc"]

DEFAULT_PAGE_SIZE = 25

_EMPTY_FILTERS: FilterSpec = MappingProxyType({})


@dataclass(frozen=True)
class RecordCollection:
    """An ordered set of records sharing one schema.

    Every record holds exactly the schema's columns as string values. Query
    helpers return new collections and never touch the records of this one.
    """

    schema: Schema
    records: tuple[Record, ...] = ()

    def __post_init__(self) -> None:
        expected = set(self.schema)
        for index, record in enumerate(self.records):
            if set(record) != expected:
                raise ValueError(
                    f"Record {index} keys {sorted(record)} do not match schema {list(self.schema)}"
                )

    @classmethod
    def empty(cls) -> "RecordCollection":
        return cls(schema=())

    @classmethod
    def from_rows(cls, schema: Sequence[str], rows: Iterable[Sequence[str]]) -> "RecordCollection":
        """Zip positional rows onto ``schema``.

        Extra values are dropped and missing trailing values become ``""``.
        A duplicated column name keeps the last value assigned to it.
        """

        columns = tuple(schema)
        width = len(columns)
        records: list[Record] = []
        for row in rows:
            values = list(row[:width]) + [""] * (width - len(row))
            records.append(dict(zip(columns, values)))
        return cls(schema=columns, records=tuple(records))

    def derive(self, records: Iterable[Record]) -> "RecordCollection":
        """Return a view over ``records`` with the same schema."""

        return RecordCollection(schema=self.schema, records=tuple(records))

    def column(self, key: str) -> list[str]:
        return [record[key] for record in self.records]

    def to_json_records(self) -> list[dict[str, str]]:
        return [dict(record) for record in self.records]

    def to_frame(self) -> pd.DataFrame:
        """Return the records as a string-typed dataframe in schema order."""

        columns = list(dict.fromkeys(self.schema))
        if not self.records:
            return pd.DataFrame(columns=columns, dtype="string")
        return pd.DataFrame(list(self.records), columns=columns).astype("string")

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __bool__(self) -> bool:
        return bool(self.records)


@dataclass(frozen=True)
class SortSpec:
    key: str
    direction: SortDirection = "asc"

    def flipped(self) -> "SortSpec":
        return SortSpec(self.key, "desc" if self.direction == "asc" else "asc")


@dataclass(frozen=True)
class ViewState:
    """Query parameters for a single render of the transactions table."""

    search: str = ""
    sort: SortSpec | None = None
    filters: FilterSpec = field(default_factory=lambda: _EMPTY_FILTERS)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def selected(self, key: str) -> frozenset[str]:
        return self.filters.get(key, frozenset())


@dataclass(frozen=True)
class Page:
    collection: RecordCollection
    number: int
    page_count: int
    total: int


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "FilterSpec",
    "Page",
    "Record",
    "RecordCollection",
    "Schema",
    "SortDirection",
    "SortSpec",
    "ViewState",
]
