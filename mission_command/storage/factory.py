"""Build the configured ``MissionStore`` backend."""

from __future__ import annotations

import logging

from mission_command.config import StorageConfig
from mission_command.storage.base import MissionStore
from mission_command.storage.json_file import JsonFileMissionStore
from mission_command.storage.memory import MemoryMissionStore
from mission_command.storage.sqlite import SqliteMissionStore

logger = logging.getLogger(__name__)


def build_mission_store(config: StorageConfig) -> MissionStore:
    """Return a store for ``config.backend`` (``json``, ``sqlite`` or ``memory``)."""
    if config.backend == "sqlite":
        store: MissionStore = SqliteMissionStore(
            config.db_path,
            storage_key=config.storage_key,
            wal_mode=config.wal_mode,
            busy_timeout_ms=config.busy_timeout_ms,
        )
    elif config.backend == "memory":
        store = MemoryMissionStore(storage_key=config.storage_key)
    else:
        store = JsonFileMissionStore(config.json_path, storage_key=config.storage_key)

    logger.debug("Mission store: %s", store.describe())
    return store
