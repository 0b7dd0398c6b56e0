"""Dict-backed mission store, a key/value analogue of browser localStorage."""

from __future__ import annotations

from typing import Optional

from mission_command.storage.base import DEFAULT_STORAGE_KEY, MissionStore


class MemoryMissionStore(MissionStore):
    """Keep payloads in a plain dict.

    Several stores may share one ``backing`` dict to model multiple keys
    in the same storage area.
    """

    def __init__(
        self,
        storage_key: str = DEFAULT_STORAGE_KEY,
        backing: Optional[dict[str, str]] = None,
    ) -> None:
        super().__init__(storage_key)
        self.backing: dict[str, str] = backing if backing is not None else {}

    def _read_raw(self) -> Optional[str]:
        return self.backing.get(self.storage_key)

    def _write_raw(self, payload: str) -> None:
        self.backing[self.storage_key] = payload
