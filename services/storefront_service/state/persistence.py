"""Versioned persisted records for client stores.

Each store owns one record under a stable key, replaced wholesale on every
save::

    {"state": {...}, "version": 0}

Readers treat an absent, unreadable or wrong-version record as "no saved
state" so a store always starts, falling back to empty.
"""

import json
from typing import Any, Optional

from libs.common.logging import get_logger
from libs.common.storage import StateStorage

logger = get_logger(__name__)


class PersistedState:
    def __init__(self, storage: StateStorage, key: str, version: int = 0):
        self.storage = storage
        self.key = key
        self.version = version

    def load(self) -> Optional[dict[str, Any]]:
        """Return the saved state dict, or None when there is nothing usable."""
        try:
            raw = self.storage.get_item(self.key)
        except (OSError, UnicodeDecodeError):
            logger.warning("Could not read persisted %s", self.key, exc_info=True)
            return None
        if raw is None:
            return None

        try:
            record = json.loads(raw)
        except ValueError:
            logger.warning("Discarding malformed persisted %s", self.key)
            return None

        if not isinstance(record, dict) or not isinstance(record.get("state"), dict):
            logger.warning("Discarding persisted %s with unexpected shape", self.key)
            return None
        if record.get("version", 0) != self.version:
            logger.warning(
                "Discarding persisted %s (version %s, expected %s)",
                self.key,
                record.get("version"),
                self.version,
            )
            return None
        return record["state"]

    def save(self, state: dict[str, Any]) -> None:
        """Replace the record. Write failures are logged; in-memory state stays."""
        record = {"state": state, "version": self.version}
        try:
            self.storage.set_item(self.key, json.dumps(record, default=str))
        except OSError:
            logger.error("Could not persist %s", self.key, exc_info=True)

    def clear(self) -> None:
        try:
            self.storage.remove_item(self.key)
        except OSError:
            logger.error("Could not remove persisted %s", self.key, exc_info=True)
