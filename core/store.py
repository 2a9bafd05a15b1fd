"""Single-slot holder for the session's active record collection."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from core.errors import ReadError
from core.models import RecordCollection

__all__ = ["RecordStore", "load_snapshot", "write_snapshot"]

logger = logging.getLogger(__name__)


class RecordStore:
    """Holds at most one record collection, replaced wholesale on import.

    When ``snapshot_path`` is set every replace also overwrites a JSON
    snapshot there, so the collection survives a restart.
    """

    def __init__(self, snapshot_path: Path | None = None) -> None:
        self.snapshot_path = snapshot_path
        self._collection: RecordCollection | None = None

    def current(self) -> RecordCollection | None:
        return self._collection

    @property
    def is_empty(self) -> bool:
        return self._collection is None

    def replace(self, collection: RecordCollection) -> None:
        # Snapshot before swap: a failed write leaves the slot unchanged.
        if self.snapshot_path is not None:
            write_snapshot(collection, self.snapshot_path)
        self._collection = collection

    def restore(self) -> RecordCollection | None:
        """Load the persisted snapshot into the slot, if one exists."""

        if self.snapshot_path is None or not self.snapshot_path.exists():
            return self._collection
        self._collection = load_snapshot(self.snapshot_path)
        logger.info("Restored %d records from %s", len(self._collection), self.snapshot_path)
        return self._collection


def write_snapshot(collection: RecordCollection, path: Path) -> None:
    """Overwrite ``path`` with the collection as a JSON array of objects."""

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp_path.write_text(
            json.dumps(collection.to_json_records(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def load_snapshot(path: Path) -> RecordCollection:
    """Read a snapshot written by :func:`write_snapshot`.

    The first object's keys define the schema. Later objects missing a key
    get ``""``; keys outside the schema are dropped.
    """

    try:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ReadError(f"Could not read saved transactions from {path}: {exc}") from exc

    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise ReadError(f"Saved transactions in {path} are not a list of objects.")
    if not payload:
        return RecordCollection.empty()

    schema = tuple(str(key) for key in payload[0])
    records = []
    for index, item in enumerate(payload):
        extra = set(map(str, item)) - set(schema)
        if extra:
            logger.warning("Dropping unknown keys %s from saved record %d", sorted(extra), index)
        records.append({key: _as_text(item.get(key, "")) for key in schema})
    return RecordCollection(schema=schema, records=tuple(records))


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)

