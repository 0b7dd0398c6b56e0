"""
File-backed bar provider for chart exports.

File layout::

    data/bars/
      RKLB.json
      ASTS.json

Each file is a JSON array of bar objects using the chart export field
names (``time``, ``close``, ``kernelRegression``, ``volumeMA``, ``G200``,
``A1``..``F5`` …). Files may be in any order; bars are sorted by ``time``
before the newest ``lookback`` are returned.

A missing file is not an error here: it yields an empty list (logged at
WARNING) and the environment builder raises ``InsufficientDataError``.
Malformed JSON or a record that fails ``Bar`` validation propagates.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from mission_command.models.bar import Bar
from mission_command.providers.base import BarSeriesProvider, tail_sorted

logger = logging.getLogger(__name__)


class JsonFileBarProvider(BarSeriesProvider):
    """Read ``<bars_dir>/<TICKER>.json`` on each request.

    Attributes:
        bars_dir: Directory holding one JSON export per ticker.
    """

    def __init__(self, bars_dir: str | Path) -> None:
        self.bars_dir = Path(bars_dir)

    def path_for(self, ticker: str) -> Path:
        return self.bars_dir / f"{ticker.upper()}.json"

    async def get_recent_bars(self, ticker: str, lookback: int) -> list[Bar]:
        path = self.path_for(ticker)
        bars = await asyncio.to_thread(self._read_bars, path)
        logger.debug("Loaded %d bars for %s from %s", len(bars), ticker.upper(), path)
        return tail_sorted(bars, lookback)

    def _read_bars(self, path: Path) -> list[Bar]:
        if not path.exists():
            logger.warning("No bar export found at %s", path)
            return []

        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)

        if not isinstance(raw, list):
            raise ValueError(f"Bar export {path} must contain a JSON array.")

        return [Bar.model_validate(record) for record in raw]
