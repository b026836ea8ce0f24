"""Mini README: Shared fixtures for the MessMate test-suite.

Provides a pinned clock, deterministic identifiers and a ledger engine over
an in-memory store so tests never depend on wall-clock time or disk.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timezone

import pytest

from messmate.clock import FixedClock
from messmate.domain import MenuItem, default_state
from messmate.ledger import LedgerEngine
from messmate.persistence import MemoryStore

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def engine(clock: FixedClock, store: MemoryStore) -> LedgerEngine:
    """Engine over the default catalogue plus a round-priced test dish."""

    state = default_state()
    state.menu_items.append(MenuItem(id="t1", name="Test Plate", price_full=100.0, price_half=60.0))
    counter = itertools.count(1)
    return LedgerEngine(
        state,
        store=store,
        clock=clock,
        id_factory=lambda: f"id_{next(counter):04d}",
    )
