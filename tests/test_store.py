"""Tests for the record store and its JSON snapshot."""

from __future__ import annotations

import json

import pytest
import streamlit as st

from config import Settings, get_settings
from core import ReadError, RecordCollection, RecordStore, export_csv, ingest_sync, load_snapshot, parse, write_snapshot


def test_store_starts_empty():
    store = RecordStore()

    assert store.is_empty
    assert store.current() is None


def test_replace_swaps_whole_collection(sample_collection):
    store = RecordStore()
    store.replace(sample_collection)
    replacement = parse("a\n1\n")

    store.replace(replacement)

    assert store.current() is replacement


def test_replace_writes_snapshot_as_flat_objects(tmp_path, sample_collection):
    path = tmp_path / "state" / "ledger.json"
    store = RecordStore(snapshot_path=path)

    store.replace(sample_collection)

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert isinstance(payload, list) and len(payload) == 5
    assert payload[0] == {
        "id": "1",
        "date": "2023-06-01",
        "category": "Loyer",
        "amount": "914.99",
        "type": "Charges fixes",
    }


def test_snapshot_is_overwritten_not_appended(tmp_path, sample_collection):
    path = tmp_path / "ledger.json"
    store = RecordStore(snapshot_path=path)
    store.replace(sample_collection)

    store.replace(parse("a\n1\n"))

    assert json.loads(path.read_text(encoding="utf-8")) == [{"a": "1"}]


def test_restore_loads_snapshot_into_new_store(tmp_path, sample_collection):
    path = tmp_path / "ledger.json"
    RecordStore(snapshot_path=path).replace(sample_collection)

    store = RecordStore(snapshot_path=path)
    restored = store.restore()

    assert restored == sample_collection
    assert store.current() == sample_collection


def test_restore_without_snapshot_keeps_slot(tmp_path):
    store = RecordStore(snapshot_path=tmp_path / "missing.json")

    assert store.restore() is None
    assert store.is_empty


def test_snapshot_round_trips_through_csv(tmp_path, sample_collection):
    path = tmp_path / "ledger.json"
    write_snapshot(sample_collection, path)

    reingested = parse(export_csv(load_snapshot(path)))

    assert list(reingested) == list(sample_collection)


def test_load_snapshot_normalises_divergent_objects(tmp_path):
    path = tmp_path / "ledger.json"
    path.write_text(
        json.dumps([{"date": "2023-06-01", "amount": "10"}, {"amount": 12.5, "extra": "x"}, {"date": None}]),
        encoding="utf-8",
    )

    collection = load_snapshot(path)

    assert collection.schema == ("date", "amount")
    assert list(collection) == [
        {"date": "2023-06-01", "amount": "10"},
        {"date": "", "amount": "12.5"},
        {"date": "", "amount": ""},
    ]


def test_load_snapshot_empty_array(tmp_path):
    path = tmp_path / "ledger.json"
    path.write_text("[]", encoding="utf-8")

    assert load_snapshot(path) == RecordCollection.empty()


@pytest.mark.parametrize("content", ["{not json", '{"date": "2023-06-01"}', "[1, 2]"])
def test_load_snapshot_rejects_bad_content(tmp_path, content):
    path = tmp_path / "ledger.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ReadError):
        load_snapshot(path)


def test_failed_snapshot_write_leaves_store_untouched(tmp_path, make_upload, sample_collection):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = RecordStore()
    store.replace(sample_collection)
    store.snapshot_path = blocker / "ledger.json"

    outcome = ingest_sync(make_upload("a\n1\n"), store)

    assert not outcome.ok
    assert outcome.notification.title == "Unexpected error"
    assert store.current() is sample_collection


def test_settings_snapshot_path(tmp_path):
    settings = Settings(storage_dir=tmp_path, storage_key="budget")

    assert settings.snapshot_path == tmp_path / "budget.json"
    assert Settings(persist=False).snapshot_path is None


def test_failed_snapshot_move_removes_temporary_file(tmp_path, monkeypatch, sample_collection):
    path = tmp_path / "ledger.json"
    write_snapshot(parse("a\n1\n"), path)

    def _refuse(src, dst):
        raise OSError("read-only target")

    monkeypatch.setattr("core.store.os.replace", _refuse)

    with pytest.raises(OSError, match="read-only target"):
        write_snapshot(sample_collection, path)

    assert sorted(p.name for p in tmp_path.iterdir()) == ["ledger.json"]
    assert json.loads(path.read_text(encoding="utf-8")) == [{"a": "1"}]


def test_streamlit_secrets_override_column_roles(monkeypatch):
    monkeypatch.setattr(
        st,
        "secrets",
        {
            "ledgerlite": {
                "amount_columns": ["montant"],
                "date_columns": ["jour"],
                "filter_columns": ["type", "category"],
                "page_size": 10,
            }
        },
        raising=False,
    )
    get_settings.cache_clear()
    try:
        settings = get_settings()
    finally:
        get_settings.cache_clear()

    assert settings.amount_columns == ("montant",)
    assert settings.date_columns == ("jour",)
    assert settings.filter_columns == ("type", "category")
    assert settings.page_size == 10
