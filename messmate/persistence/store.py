"""Mini README: Persistence adapters for the application document.

Structure:
    * merge_with_defaults - forward-compatible merge of an older document.
    * DocumentStore - load/save contract the engine depends on.
    * JsonFileStore - one JSON file per storage key inside a data directory.
    * MemoryStore - serialised documents held in a dict (tests, scratch sessions).

A missing document yields the seeded default document, which is written
immediately. Stored documents are merged field by field over the defaults,
with a nested merge for ``settings``, so fields added in newer releases
never discard what an older document already holds.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from ..domain.catalog import default_state
from ..domain.exceptions import PersistenceFailedError
from ..domain.models import ApplicationState
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

DEFAULT_STORAGE_KEY = "messmate_db_v2"


def merge_with_defaults(document: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay a stored document onto the default document."""

    defaults = default_state().as_dict()
    merged = {**defaults, **document}
    merged["settings"] = {**defaults["settings"], **(document.get("settings") or {})}
    if document.get("menuItems") is None:
        merged["menuItems"] = defaults["menuItems"]
    for key in ("customers", "transactions", "plans"):
        if merged.get(key) is None:
            merged[key] = defaults[key]
    return merged


class DocumentStore(ABC):
    """Load and save the whole application document."""

    @abstractmethod
    def _read(self) -> Optional[str]:
        """Return the raw document or ``None`` when nothing is stored."""

    @abstractmethod
    def _write(self, payload: str) -> None:
        """Overwrite the stored document."""

    def load(self) -> ApplicationState:
        """Return the stored document, seeding defaults on first use."""

        raw = self._read()
        if raw is None:
            LOGGER.info("No stored document found; seeding defaults")
            state = default_state()
            try:
                self.save(state)
            except PersistenceFailedError as error:
                LOGGER.error("Seeded defaults are in memory only until the next save: %s", error)
            return state
        try:
            document = json.loads(raw)
            state = ApplicationState.from_dict(merge_with_defaults(document))
        except (ValueError, KeyError, TypeError) as error:
            LOGGER.error("Stored document is unreadable, falling back to defaults: %s", error)
            return default_state()
        LOGGER.debug(
            "Loaded document with %s customers and %s transactions",
            len(state.customers),
            len(state.transactions),
        )
        return state

    def save(self, state: ApplicationState) -> None:
        """Serialise and overwrite the stored document."""

        payload = json.dumps(state.as_dict(), indent=2)
        try:
            self._write(payload)
        except OSError as error:
            LOGGER.error("Could not save document: %s", error)
            raise PersistenceFailedError(f"Could not save document: {error}") from error


class JsonFileStore(DocumentStore):
    """File-based store keyed by storage key."""

    def __init__(self, data_directory: Path, storage_key: str = DEFAULT_STORAGE_KEY) -> None:
        self._data_directory = Path(data_directory)
        self._data_directory.mkdir(parents=True, exist_ok=True)
        self.path = self._data_directory / f"{storage_key}.json"

    def _read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def _write(self, payload: str) -> None:
        temp_path = self.path.with_suffix(".json.tmp")
        try:
            temp_path.write_text(payload, encoding="utf-8")
            temp_path.replace(self.path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise


class MemoryStore(DocumentStore):
    """Key-value store keeping serialised documents in memory."""

    def __init__(self, storage_key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage_key = storage_key
        self.blobs: Dict[str, str] = {}

    def _read(self) -> Optional[str]:
        return self.blobs.get(self.storage_key)

    def _write(self, payload: str) -> None:
        self.blobs[self.storage_key] = payload
