"""Import failures and the notifications shown for them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

__all__ = [
    "IngestError",
    "InvalidFormatError",
    "Notification",
    "ReadError",
    "notification_for",
]


class IngestError(RuntimeError):
    """Raised when a transactions file cannot be imported."""

    title = "Import failed"


class InvalidFormatError(IngestError):
    """Raised for sources that are not CSV or carry no header line."""

    title = "Invalid format"


class ReadError(IngestError):
    """Raised when the source contents cannot be read or decoded."""

    title = "Read failure"


@dataclass(frozen=True, slots=True)
class Notification:
    title: str
    description: str
    level: Literal["success", "warning", "error"] = "error"


def notification_for(exc: BaseException) -> Notification:
    """Map an import failure onto a user-facing notification."""

    if isinstance(exc, InvalidFormatError):
        return Notification(
            title=exc.title,
            description=str(exc) or "Please choose a CSV file with a header row.",
            level="warning",
        )
    if isinstance(exc, IngestError):
        return Notification(title=exc.title, description=str(exc) or "The file could not be read.")
    return Notification(
        title="Unexpected error",
        description="Something went wrong while importing the file. Your existing data was kept.",
    )
