"""Mini README: Core package initializer for MessMate.

MessMate tracks meal-plan customers for a small catering business: plan
purchases, meal consumption against a prepaid allowance, overflow billing,
leave that shifts expiry dates, cash entries, and renewal/payment alerts.
Import ``LedgerEngine`` for the operations and ``JsonFileStore`` to persist
them.
"""

from .clock import FixedClock, SystemClock
from .ledger import LedgerEngine
from .logging_utils import get_logger
from .persistence import JsonFileStore, MemoryStore

__all__ = ["FixedClock", "JsonFileStore", "LedgerEngine", "MemoryStore", "SystemClock", "get_logger"]
