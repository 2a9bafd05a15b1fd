"""CSV import for Ledgerlite's transactions table."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import Final, Protocol

from core.errors import IngestError, InvalidFormatError, Notification, ReadError, notification_for
from core.models import RecordCollection
from core.store import RecordStore

__all__ = [
    "DELIMITER",
    "IngestOutcome",
    "UploadSource",
    "export_csv",
    "ingest",
    "ingest_sync",
    "parse",
    "read_source",
    "validate_source",
]

logger = logging.getLogger(__name__)

DELIMITER: Final[str] = ","
CSV_EXTENSION: Final[str] = ".csv"
CSV_MEDIA_TYPE: Final[str] = "text/csv"
_BOM: Final[str] = "\ufeff"


class UploadSource(Protocol):
    """The parts of an uploaded file the importer relies on.

    Streamlit's ``UploadedFile`` satisfies this, as does any binary file
    object with a ``name`` attribute.
    """

    name: str

    def read(self) -> bytes: ...


@dataclass(frozen=True, slots=True)
class IngestOutcome:
    source_name: str
    notification: Notification
    collection: RecordCollection | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse(raw_text: str) -> RecordCollection:
    """Parse comma-delimited text into a record collection.

    The first non-blank line is the header. Names and values are trimmed of
    surrounding whitespace. Blank rows are skipped, extra values are dropped
    and short rows are padded with ``""``, so malformed rows never abort an
    import. Quoted values are not supported: a value
    containing a comma is split like any other.
    """

    lines = raw_text.lstrip(_BOM).splitlines()
    rows = iter(line for line in lines if line.strip())

    header = next(rows, None)
    if header is None:
        raise InvalidFormatError("The file is empty.")

    schema = [name.strip() for name in header.split(DELIMITER)]
    return RecordCollection.from_rows(
        schema,
        ([value.strip() for value in line.split(DELIMITER)] for line in rows),
    )


def validate_source(name: str, media_type: str | None = None) -> None:
    """Reject sources that are neither ``.csv`` files nor ``text/csv`` uploads."""

    if PurePath(name or "").suffix.lower() == CSV_EXTENSION:
        return
    if media_type and media_type.split(";")[0].strip().lower() == CSV_MEDIA_TYPE:
        return
    raise InvalidFormatError(f"'{name}' is not a CSV file.")


def read_source(source: UploadSource) -> str:
    """Read and decode an uploaded file as UTF-8 text."""

    try:
        payload = source.read()
    except OSError as exc:
        raise ReadError(f"Could not read '{source.name}': {exc}") from exc

    if isinstance(payload, str):
        return payload
    try:
        return payload.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ReadError(f"'{source.name}' is not valid UTF-8 text.") from exc


async def ingest(source: UploadSource, store: RecordStore) -> IngestOutcome:
    """Import ``source`` and replace the store's collection on success.

    Failures are reported through the returned outcome and leave the store
    untouched. Concurrent calls are not serialised; whichever finishes last
    owns the store.
    """

    name = getattr(source, "name", "") or ""
    try:
        validate_source(name, getattr(source, "type", None))
        raw_text = await asyncio.to_thread(read_source, source)
        collection = parse(raw_text)
        store.replace(collection)
    except IngestError as exc:
        logger.warning("Rejected import of %r: %s", name, exc)
        return IngestOutcome(source_name=name, notification=notification_for(exc), error=exc)
    except Exception as exc:
        logger.exception("Unexpected failure importing %r", name)
        return IngestOutcome(source_name=name, notification=notification_for(exc), error=exc)

    logger.info("Imported %d records with %d columns from %r", len(collection), len(collection.schema), name)
    return IngestOutcome(
        source_name=name,
        collection=collection,
        notification=Notification(
            title="Import complete",
            description=f"{len(collection)} transactions imported from {PurePath(name).name}.",
            level="success",
        ),
    )


def ingest_sync(source: UploadSource, store: RecordStore) -> IngestOutcome:
    """Run :func:`ingest` to completion from synchronous code."""

    return asyncio.run(ingest(source, store))


def export_csv(collection: RecordCollection) -> str:
    """Render ``collection`` back into the delimited format :func:`parse` reads."""

    lines = [DELIMITER.join(collection.schema)]
    lines.extend(DELIMITER.join(record[key] for key in collection.schema) for record in collection)
    return "\n".join(lines) + "\n"
