"""Mini README: Storage backends for the MessMate application document.

The engine only depends on ``DocumentStore.load``/``save``; swap the JSON
file backend for another medium by subclassing ``DocumentStore``.
"""

from .store import (
    DEFAULT_STORAGE_KEY,
    DocumentStore,
    JsonFileStore,
    MemoryStore,
    merge_with_defaults,
)

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "DocumentStore",
    "JsonFileStore",
    "MemoryStore",
    "merge_with_defaults",
]
