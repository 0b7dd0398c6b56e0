"""
Abstract base for bar series providers.

Contract:
  - ``get_recent_bars(ticker, lookback)`` is a coroutine.
  - Bars are returned in ascending ``time`` order (oldest first).
  - At most ``lookback`` bars are returned; fewer is allowed and is the
    caller's problem (the environment builder raises on < 5).
  - Cancellation and timeouts follow the provider's own I/O stack.

Usage::

    class MyProvider(BarSeriesProvider):
        async def get_recent_bars(self, ticker: str, lookback: int) -> list[Bar]:
            ...

    env = await compute_environment("RKLB", MyProvider(), lookback=32)
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from mission_command.models.bar import Bar


class BarSeriesProvider(ABC):
    """Source of ordered indicator bars for a ticker."""

    @abstractmethod
    async def get_recent_bars(self, ticker: str, lookback: int) -> list[Bar]:
        """Return up to ``lookback`` most recent bars for ``ticker``, oldest first."""


def tail_sorted(bars: list[Bar], lookback: int) -> list[Bar]:
    """Sort ``bars`` ascending by time and keep the newest ``lookback``."""
    if lookback <= 0:
        return []
    ordered = sorted(bars, key=lambda b: b.time)
    return ordered[-lookback:]
