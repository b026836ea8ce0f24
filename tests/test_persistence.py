"""Mini README: Tests for the document stores.

Structure:
    * first load seeds and saves the default document.
    * saved documents load back unchanged (memory and JSON file backends).
    * older documents are merged with defaults without losing data.
    * unreadable documents and failed writes are reported clearly.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from messmate.clock import FixedClock
from messmate.domain import PersistenceFailedError, default_state
from messmate.ledger import LedgerEngine
from messmate.persistence import JsonFileStore, MemoryStore

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _populated_state():
    engine = LedgerEngine(default_state(), clock=FixedClock(NOW))
    customer = engine.enroll("Asha \"Didi\"", "98765", "plan_2")
    engine.record_meal(customer.id, "m1", "half", 2)
    engine.add_break(customer.id, 4)
    engine.add_transaction("expense", 780.5, "Gas refill", "Gas Cylinder")
    engine.update_settings(meal_threshold=9)
    engine.login("staff", "0000")
    engine.toggle_dark_mode()
    return engine.state


def test_first_load_seeds_and_saves_defaults() -> None:
    store = MemoryStore()

    state = store.load()

    assert [plan.id for plan in state.plans] == ["plan_1", "plan_2", "plan_3"]
    assert len(state.menu_items) == 5
    assert state.settings.subscription_days == 3
    assert state.settings.meal_threshold == 5
    assert state.settings.balance_threshold == pytest.approx(1000.0)
    assert store.storage_key in store.blobs


def test_memory_store_round_trip() -> None:
    store = MemoryStore()
    state = _populated_state()

    store.save(state)

    assert store.load() == state


def test_json_file_store_round_trip(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path / "data", storage_key="mess")
    state = _populated_state()

    store.save(state)

    assert store.path == tmp_path / "data" / "mess.json"
    assert JsonFileStore(tmp_path / "data", storage_key="mess").load() == state


def test_older_document_is_merged_with_defaults() -> None:
    """Missing fields get defaults; existing fields, nested settings included, survive."""

    store = MemoryStore()
    store.blobs[store.storage_key] = json.dumps(
        {
            "customers": [
                {
                    "id": "c1",
                    "name": "Asha",
                    "phone": "98765",
                    "planId": "plan_1",
                    "startDate": "2024-05-01T06:30:00.000Z",
                    "expiryDate": "2024-05-31T06:30:00.000Z",
                    "mealsRemaining": 12,
                    "balance": 150,
                    "isActive": True,
                }
            ],
            "transactions": [],
            "plans": [
                {"id": "custom", "name": "Weekend", "cost": 900, "totalMeals": 8, "validityDays": 30}
            ],
            "settings": {"subscriptionDays": 7},
        }
    )

    state = store.load()

    assert state.settings.subscription_days == 7
    assert state.settings.meal_threshold == 5
    assert state.settings.balance_threshold == pytest.approx(1000.0)
    assert [plan.id for plan in state.plans] == ["custom"]
    assert len(state.menu_items) == 5
    assert state.dark_mode is False
    (customer,) = state.customers
    assert customer.total_break_days == 0
    assert customer.expiry_date == datetime(2024, 5, 31, 6, 30, tzinfo=timezone.utc)


def test_unreadable_document_falls_back_without_overwriting() -> None:
    store = MemoryStore()
    store.blobs[store.storage_key] = "{not json"

    state = store.load()

    assert state.customers == []
    assert store.blobs[store.storage_key] == "{not json"


def test_failed_write_raises_persistence_error(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path)
    store.path.mkdir()

    with pytest.raises(PersistenceFailedError):
        store.save(default_state())


class _UnwritableStore(MemoryStore):
    def _write(self, payload: str) -> None:
        raise OSError("disk full")


def test_first_load_survives_failed_seed_write() -> None:
    """Seeded defaults are still returned when the first write fails."""

    store = _UnwritableStore()

    state = store.load()

    assert [plan.id for plan in state.plans] == ["plan_1", "plan_2", "plan_3"]
    assert store.blobs == {}


def test_engine_starts_when_seed_write_fails() -> None:
    engine = LedgerEngine.from_store(_UnwritableStore(), clock=FixedClock(NOW))

    with pytest.raises(PersistenceFailedError) as excinfo:
        engine.enroll("Asha", "98765", "plan_1")

    assert engine.state.customers == [excinfo.value.result]


def test_explicit_empty_menu_is_kept() -> None:
    store = MemoryStore()
    document = default_state().as_dict()
    document["menuItems"] = []
    store.blobs[store.storage_key] = json.dumps(document)

    assert store.load().menu_items == []


def test_missing_or_null_menu_falls_back_to_catalogue() -> None:
    store = MemoryStore()
    document = default_state().as_dict()
    document["menuItems"] = None
    store.blobs[store.storage_key] = json.dumps(document)

    assert len(store.load().menu_items) == 5


def test_failed_write_leaves_no_temp_file(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path)
    store.path.mkdir()

    with pytest.raises(PersistenceFailedError):
        store.save(default_state())

    assert not store.path.with_suffix(".json.tmp").exists()
