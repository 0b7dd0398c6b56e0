"""
Persistence port for the mission collection.

The whole collection is one ordered JSON array stored under one key. The
base class owns (de)serialization and failure containment; backends only
move raw strings::

    _read_raw()  -> str | None     # None = nothing stored yet
    _write_raw(payload: str)       # replace the stored value

Failure policy:
  - Any exception while reading, or a payload that is not valid JSON, not
    a list, or holds a record that fails ``Mission`` validation, is logged
    and treated as an empty collection.
  - Any exception while writing is logged and dropped.
Neither ever reaches the lifecycle manager's callers.

Writes are whole-collection replacements with no locking; one writer at
a time is assumed.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from mission_command.models.mission import Mission

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "HASLUN_MISSIONS_V1"

_MISSION_LIST = TypeAdapter(list[Mission])


class MissionStore(ABC):
    """Load/save the full mission collection under ``storage_key``.

    Attributes:
        storage_key: Name the collection is stored under.
    """

    def __init__(self, storage_key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage_key = storage_key

    @abstractmethod
    def _read_raw(self) -> Optional[str]:
        """Return the stored payload, or ``None`` if nothing is stored."""

    @abstractmethod
    def _write_raw(self, payload: str) -> None:
        """Replace the stored payload."""

    def load_missions(self) -> list[Mission]:
        """Return every stored mission in stored order; ``[]`` on any failure."""
        try:
            payload = self._read_raw()
        except Exception:
            logger.exception("Failed to read missions from %s", self.describe())
            return []

        if payload is None:
            return []

        try:
            return _MISSION_LIST.validate_json(payload)
        except ValidationError as exc:
            logger.error(
                "Discarding malformed mission collection in %s: %d validation error(s)",
                self.describe(), exc.error_count(),
            )
            return []

    def save_missions(self, missions: Sequence[Mission]) -> None:
        """Replace the stored collection with ``missions``. Failures are logged only."""
        try:
            payload = _MISSION_LIST.dump_json(list(missions)).decode("utf-8")
            self._write_raw(payload)
        except Exception:
            logger.exception("Failed to save %d missions to %s", len(missions), self.describe())
            return
        logger.debug("Saved %d missions to %s", len(missions), self.describe())

    def describe(self) -> str:
        """Human-readable location for log lines."""
        return f"{type(self).__name__}[{self.storage_key}]"

