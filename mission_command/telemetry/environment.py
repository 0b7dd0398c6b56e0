"""
Environment builder: run the five computators and assemble a snapshot.

``build_environment`` is the pure core (bars in, snapshot out).
``compute_environment`` adds the single suspension point of the engine:
awaiting the bar provider.

Given identical bars and ``computed_at``, ``build_environment`` returns
an identical snapshot.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from mission_command.models.bar import Bar
from mission_command.models.environment import (
    EnvironmentSnapshot,
    LatestBarSummary,
    StatRationale,
)
from mission_command.providers.base import BarSeriesProvider
from mission_command.telemetry.stats import (
    compute_firepower,
    compute_fuel,
    compute_hull,
    compute_sensors,
    compute_threat,
    require_min_bars,
)
from mission_command.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK = 32


def build_environment(
    ticker: str,
    bars: Sequence[Bar],
    computed_at: Optional[datetime] = None,
) -> EnvironmentSnapshot:
    """Compute all five stats for ``bars`` and wrap them in a snapshot.

    Args:
        ticker: Symbol the bars belong to (upper-cased in the snapshot).
        bars: Ordered bars, oldest first.
        computed_at: Snapshot timestamp. Defaults to now (UTC).

    Returns:
        A frozen ``EnvironmentSnapshot``.

    Raises:
        InsufficientDataError: If fewer than 5 bars are supplied.
    """
    ticker = ticker.upper()
    require_min_bars(bars, ticker)

    hull = compute_hull(bars)
    firepower = compute_firepower(bars)
    sensors = compute_sensors(bars)
    fuel = compute_fuel(bars)
    threat = compute_threat(bars)

    latest = bars[-1]
    return EnvironmentSnapshot(
        ticker=ticker,
        computed_at=computed_at or utcnow(),
        bars_used=len(bars),
        hull=hull.value,
        firepower=firepower.value,
        sensors=sensors.value,
        fuel=fuel.value,
        threat=threat.value,
        why=StatRationale(
            hull=hull.why,
            firepower=firepower.why,
            sensors=sensors.why,
            fuel=fuel.why,
            threat=threat.why,
        ),
        latest_bar=LatestBarSummary(
            time=datetime.fromtimestamp(latest.time, tz=timezone.utc),
            close=latest.close,
            volume=latest.volume,
        ),
    )


async def compute_environment(
    ticker: str,
    provider: BarSeriesProvider,
    lookback: int = DEFAULT_LOOKBACK,
) -> EnvironmentSnapshot:
    """Fetch recent bars for ``ticker`` and build its environment snapshot.

    Args:
        ticker: Symbol to compute.
        provider: Bar source; awaited once.
        lookback: Maximum number of bars to request.

    Returns:
        A frozen ``EnvironmentSnapshot``.

    Raises:
        InsufficientDataError: If the provider returns fewer than 5 bars.
    """
    bars = await provider.get_recent_bars(ticker, lookback)
    env = build_environment(ticker, bars)
    logger.info(
        "Environment %s (%d bars): hull=%d firepower=%d sensors=%d fuel=%d threat=%d",
        env.ticker, env.bars_used, env.hull, env.firepower, env.sensors, env.fuel, env.threat,
    )
    return env
