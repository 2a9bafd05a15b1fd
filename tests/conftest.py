"""Shared fixtures for the Ledgerlite test suite."""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from pathlib import Path

import pytest
import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core import RecordCollection, parse


SAMPLE_CSV = """id,date,category,amount,type
1,2023-06-01,Loyer,914.99,Charges fixes
2,2023-06-02,Courses alimentaires,150.00,Besoins
3,2023-06-05,Internet,37.99,Charges fixes
4,2023-06-10,Formations,116.10,Besoins
5,2023-06-28,Aide familiale,100.00,Urgences
"""


@dataclass
class FakeUpload:
    """Minimal stand-in for Streamlit's ``UploadedFile``."""

    name: str
    payload: bytes | Exception = b""
    type: str | None = None
    delay: float = 0.0

    def read(self) -> bytes:
        if self.delay:
            time.sleep(self.delay)
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


@pytest.fixture(autouse=True)
def clear_streamlit_secrets(monkeypatch):
    """Provide an empty secrets mapping so tests don't rely on Streamlit runtime."""

    monkeypatch.setattr(st, "secrets", {}, raising=False)


@pytest.fixture()
def sample_text() -> str:
    return SAMPLE_CSV


@pytest.fixture()
def sample_collection() -> RecordCollection:
    return parse(SAMPLE_CSV)


@pytest.fixture()
def make_upload():
    def _make(
        text: str = SAMPLE_CSV,
        name: str = "transactions.csv",
        payload: bytes | Exception | None = None,
        **kwargs,
    ) -> FakeUpload:
        return FakeUpload(name=name, payload=text.encode("utf-8") if payload is None else payload, **kwargs)

    return _make
