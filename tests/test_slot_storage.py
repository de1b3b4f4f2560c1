"""
Smoke tests for the slot backends (SQLite via SQLAlchemy, JSON file, memory).
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the catalog package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.core import config as core_config  # noqa: E402
from catalog.db.create_tables import create_all  # noqa: E402
from catalog.db import session as db_session  # noqa: E402
from catalog.repositories.base import MemorySlotStorage, StorageError  # noqa: E402
from catalog.repositories.json_storage import JsonFileSlotStorage  # noqa: E402
from catalog.repositories.sql_storage import SQLSlotStorage  # noqa: E402


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point the engine at a temporary SQLite file and reset cached settings/engine."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("STORAGE_BACKEND", "sql")
    core_config.get_settings.cache_clear()
    db_session.reset_engine()

    assert "storage_slots" in create_all()

    yield db_file

    db_session.reset_engine()
    core_config.get_settings.cache_clear()


def _exercise(storage) -> None:
    assert storage.get_item("k") is None
    storage.set_item("k", '{"a": 1}')
    assert storage.get_item("k") == '{"a": 1}'
    storage.set_item("k", "second")
    assert storage.get_item("k") == "second"
    storage.set_item("other", "x")
    storage.remove_item("k")
    assert storage.get_item("k") is None
    assert storage.get_item("other") == "x"
    storage.remove_item("missing")


def test_sql_slot_storage(temp_db):
    _exercise(SQLSlotStorage())


def test_sql_slots_are_shared_between_instances(temp_db):
    SQLSlotStorage().set_item("k", "shared")
    assert SQLSlotStorage().get_item("k") == "shared"


def test_json_slot_storage(tmp_path):
    _exercise(JsonFileSlotStorage(tmp_path / "slots.json"))


def test_json_slot_storage_creates_parent_dirs(tmp_path):
    path = tmp_path / "nested" / "dir" / "slots.json"
    JsonFileSlotStorage(path).set_item("k", "v")
    assert path.exists()
    assert JsonFileSlotStorage(path).get_item("k") == "v"


def test_json_slot_storage_unreadable_file(tmp_path):
    path = tmp_path / "slots.json"
    path.write_text("{broken", encoding="utf-8")
    storage = JsonFileSlotStorage(path)
    with pytest.raises(StorageError):
        storage.get_item("k")
    storage.set_item("k", "v")
    assert storage.get_item("k") == "v"


def test_json_slot_storage_moves_unreadable_file_aside(tmp_path):
    path = tmp_path / "slots.json"
    original = '{"other": "keep me", "k": '
    path.write_text(original, encoding="utf-8")
    JsonFileSlotStorage(path).set_item("k", "v")
    assert (tmp_path / "slots.json.corrupt").read_text(encoding="utf-8") == original
    assert JsonFileSlotStorage(path).get_item("k") == "v"


def test_memory_slot_storage():
    _exercise(MemorySlotStorage())


def test_catalog_round_trip_through_sql_slot(temp_db):
    from catalog.repositories.document_store import build_document_store
    from catalog.services.catalog_service import CatalogService

    store = build_document_store(core_config.get_settings())
    assert isinstance(store.storage, SQLSlotStorage)
    pen = CatalogService(store).create_product("Pen", "100")

    reloaded = CatalogService(build_document_store(core_config.get_settings()))
    assert [p.id for p in reloaded.search("")] == [pen.id]
