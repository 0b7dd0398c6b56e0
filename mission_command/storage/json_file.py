"""
JSON file mission store.

File layout (other keys written by other tools are preserved)::

    {
      "HASLUN_MISSIONS_V1": [ {mission}, {mission}, ... ],
      "...": ...
    }

Writes go to a sibling ``.tmp`` file which then replaces the original,
so a crash mid-write leaves the previous file intact.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from mission_command.storage.base import DEFAULT_STORAGE_KEY, MissionStore

logger = logging.getLogger(__name__)


class JsonFileMissionStore(MissionStore):
    """Persist the mission collection under one key of a JSON object file.

    Attributes:
        path: Location of the JSON file (parent dirs created on first save).
    """

    def __init__(self, path: str | Path, storage_key: str = DEFAULT_STORAGE_KEY) -> None:
        super().__init__(storage_key)
        self.path = Path(path)

    def describe(self) -> str:
        return f"{self.path}[{self.storage_key}]"

    def _read_document(self) -> dict[str, Any]:
        with self.path.open("r", encoding="utf-8") as f:
            document = json.load(f)
        if not isinstance(document, dict):
            raise ValueError(f"{self.path} must contain a JSON object.")
        return document

    def _read_raw(self) -> Optional[str]:
        if not self.path.exists():
            return None
        document = self._read_document()
        if self.storage_key not in document:
            return None
        return json.dumps(document[self.storage_key])

    def _write_raw(self, payload: str) -> None:
        document: dict[str, Any] = {}
        if self.path.exists():
            try:
                document = self._read_document()
            except (OSError, ValueError):
                logger.warning("Replacing unreadable mission file %s", self.path)
                document = {}

        document[self.storage_key] = json.loads(payload)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(document, f, indent=2, ensure_ascii=False)
        tmp_path.replace(self.path)
