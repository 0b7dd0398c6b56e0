"""In-memory bar provider backed by a ticker → bars mapping."""

from __future__ import annotations

from typing import Mapping, Sequence

from mission_command.models.bar import Bar
from mission_command.providers.base import BarSeriesProvider, tail_sorted


class StaticBarProvider(BarSeriesProvider):
    """Serve pre-loaded bar series. Ticker lookup is case-insensitive.

    Unknown tickers yield an empty list.
    """

    def __init__(self, series: Mapping[str, Sequence[Bar]]) -> None:
        self._series = {ticker.upper(): list(bars) for ticker, bars in series.items()}

    async def get_recent_bars(self, ticker: str, lookback: int) -> list[Bar]:
        return tail_sorted(self._series.get(ticker.upper(), []), lookback)
