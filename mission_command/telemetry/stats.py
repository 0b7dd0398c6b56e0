"""
Stat computators: reduce an ordered bar sequence to five vessel stats.

Every computator takes the full bar sequence (oldest first) and returns a
``StatReading`` with an integer value in [0, 100] and a rationale string.
They are pure and side-effect free. A bar missing an optional field (or
carrying NaN) is skipped for that feature only; a sequence shorter than
``MIN_BARS`` raises ``InsufficientDataError``.

Stat formulas
-------------
HULL (trend stability)::

    slope_score  = min(|OLS slope of KRE| * 500, 50)
    chop_penalty = min(sign flips of (close − KRE) * 3, 30)
    anchor_score = max(0, 30 − |close − G200| / close * 200)
    hull         = clamp(round(40 + slope_score + anchor_score − chop_penalty))

FIREPOWER (volatility / thrust)::

    atr_score  = normalize(mean (high − low) / close, 0.01, 0.06) * 0.6
    hist_score = normalize(mean |histogram|, 0, 0.3) * 0.4

SENSORS (flow clarity)::

    normalize(mean volume / volumeMA, 0.7, 1.5) * 0.5 + fraction(ratio > 1) * 50

FUEL (patience)::

    normalize(bars since last buy/sell signal, 0, 32) * 0.6
    + max(0, 40 − chop flips * 4)

THREAT (regime risk)::

    band_score (|position within A1..F5 envelope − 0.5| * 2 * 50, else 50)
    + normalize(histogram sign flips, 0, n / 2) * 30
    + firepower / 100 * 20
"""

from __future__ import annotations

from typing import Optional, Sequence

from mission_command.models.bar import Bar
from mission_command.models.environment import StatReading
from mission_command.telemetry.primitives import (
    clamp,
    count_sign_flips,
    is_finite,
    linear_regression_slope,
    normalize,
    round_half_up,
)

MIN_BARS = 5

# |KRE slope| above this counts as directional
_SLOPE_FLAT_THRESHOLD = 0.001

# Bars-since-signal horizon for full persistence (≈ one session at 45m)
_FUEL_PERSISTENCE_BARS = 32

# Mid-range ATR ratio used when no bar has usable high/low/close
_DEFAULT_ATR_RATIO = 0.03

_NEUTRAL_SCORE = 50


class InsufficientDataError(ValueError):
    """Raised when fewer than ``MIN_BARS`` bars are available.

    Attributes:
        bars_available: Number of bars actually supplied.
        ticker:         Symbol being computed, when known.
    """

    def __init__(self, bars_available: int, ticker: Optional[str] = None) -> None:
        self.bars_available = bars_available
        self.ticker = ticker
        subject = f" for {ticker}" if ticker else ""
        super().__init__(
            f"Insufficient data{subject}: only {bars_available} bars "
            f"(need at least {MIN_BARS})."
        )


def require_min_bars(bars: Sequence[Bar], ticker: Optional[str] = None) -> None:
    """Raise ``InsufficientDataError`` when ``bars`` is shorter than ``MIN_BARS``."""
    if len(bars) < MIN_BARS:
        raise InsufficientDataError(len(bars), ticker)


# ── Shared feature extraction ─────────────────────────────────────────────────


def _kre_series(bars: Sequence[Bar]) -> list[float]:
    return [b.kernel_regression for b in bars if is_finite(b.kernel_regression)]


def _kre_deviations(bars: Sequence[Bar]) -> list[float]:
    """``close − KRE`` for bars where both are valid, in bar order."""
    return [
        b.close - b.kernel_regression
        for b in bars
        if is_finite(b.close) and is_finite(b.kernel_regression)
    ]


def _chop_flips(bars: Sequence[Bar]) -> int:
    deviations = _kre_deviations(bars)
    return count_sign_flips(deviations) if len(deviations) >= 2 else 0


def _latest_g200(bars: Sequence[Bar]) -> Optional[float]:
    for bar in reversed(bars):
        if is_finite(bar.g200):
            return bar.g200
    return None


def _has_signal(value: Optional[float]) -> bool:
    return is_finite(value) and value != 0


# ── Computators ───────────────────────────────────────────────────────────────


def compute_hull(bars: Sequence[Bar]) -> StatReading:
    """HULL: trend stability from KRE slope, KRE chop and G200 proximity."""
    require_min_bars(bars)

    kre = _kre_series(bars)
    slope = linear_regression_slope(kre) if len(kre) >= 2 else 0.0
    slope_score = min(abs(slope) * 500, 50)

    flips = _chop_flips(bars)
    chop_penalty = min(flips * 3, 30)

    latest_close = bars[-1].close
    anchor = _latest_g200(bars)
    if anchor is None:
        anchor = latest_close
    if is_finite(latest_close) and latest_close != 0:
        anchor_dist = abs((latest_close - anchor) / latest_close)
    else:
        anchor_dist = 0.0
    anchor_score = max(0.0, 30 - anchor_dist * 200)

    hull = int(clamp(round_half_up(40 + slope_score + anchor_score - chop_penalty), 0, 100))

    if not kre:
        slope_desc = "KRE unavailable"
    elif slope > _SLOPE_FLAT_THRESHOLD:
        slope_desc = "KRE slope upward"
    elif slope < -_SLOPE_FLAT_THRESHOLD:
        slope_desc = "KRE slope downward"
    else:
        slope_desc = "KRE slope flat"

    if flips <= 5:
        chop_desc = "low chop"
    elif flips <= 10:
        chop_desc = "moderate chop"
    else:
        chop_desc = "high chop"

    if anchor_dist < 0.03:
        anchor_desc = "close to G200"
    elif anchor_dist < 0.08:
        anchor_desc = "moderate distance from G200"
    else:
        anchor_desc = "far from G200"

    return StatReading(
        value=hull,
        why=f"{slope_desc}; {chop_desc} ({flips} flips); {anchor_desc}",
    )


def compute_firepower(bars: Sequence[Bar]) -> StatReading:
    """FIREPOWER: volatility from mean bar range plus histogram magnitude."""
    require_min_bars(bars)

    ranges = [
        (b.high - b.low) / b.close
        for b in bars
        if is_finite(b.high) and is_finite(b.low) and is_finite(b.close) and b.close != 0
    ]
    avg_atr = sum(ranges) / len(ranges) if ranges else _DEFAULT_ATR_RATIO
    atr_score = normalize(avg_atr, 0.01, 0.06) * 0.6

    magnitudes = [abs(b.histogram) for b in bars if is_finite(b.histogram)]
    if magnitudes:
        avg_hist = sum(magnitudes) / len(magnitudes)
        hist_score = normalize(avg_hist, 0, 0.3) * 0.4
        if avg_hist < 0.1:
            hist_desc = "weak momentum"
        elif avg_hist < 0.2:
            hist_desc = "moderate momentum"
        else:
            hist_desc = "strong momentum"
    else:
        hist_score = 0.0
        hist_desc = "momentum unavailable"

    firepower = int(clamp(round_half_up(atr_score + hist_score), 0, 100))

    if avg_atr < 0.02:
        atr_desc = "low range"
    elif avg_atr < 0.04:
        atr_desc = "moderate range"
    else:
        atr_desc = "high range"

    return StatReading(
        value=firepower,
        why=f"{atr_desc} ({avg_atr * 100:.1f}% ATR); {hist_desc}",
    )


def compute_sensors(bars: Sequence[Bar]) -> StatReading:
    """SENSORS: flow quality from volume relative to its moving average."""
    require_min_bars(bars)

    ratios = [
        b.volume / b.volume_ma
        for b in bars
        if is_finite(b.volume) and is_finite(b.volume_ma) and b.volume_ma > 0
    ]
    if not ratios:
        return StatReading(value=_NEUTRAL_SCORE, why="No volume data; flow unavailable")

    avg_ratio = sum(ratios) / len(ratios)
    above_ma = sum(1 for r in ratios if r > 1) / len(ratios)

    ratio_score = normalize(avg_ratio, 0.7, 1.5) * 0.5
    consistency_score = above_ma * 50
    sensors = int(clamp(round_half_up(ratio_score + consistency_score), 0, 100))

    if avg_ratio < 0.9:
        flow_desc = "below-average flow"
    elif avg_ratio < 1.1:
        flow_desc = "neutral flow"
    else:
        flow_desc = "above-average flow"

    if above_ma < 0.4:
        consist_desc = "inconsistent"
    elif above_ma < 0.6:
        consist_desc = "mixed"
    else:
        consist_desc = "consistent"

    return StatReading(
        value=sensors,
        why=(
            f"{flow_desc} ({avg_ratio:.2f}x MA); "
            f"{consist_desc} ({round_half_up(above_ma * 100)}% above MA)"
        ),
    )


def compute_fuel(bars: Sequence[Bar]) -> StatReading:
    """FUEL: patience buffer from signal age and low KRE chop."""
    require_min_bars(bars)

    n = len(bars)
    bars_since_signal = n
    for i in range(n - 1, -1, -1):
        if _has_signal(bars[i].buy) or _has_signal(bars[i].sell):
            bars_since_signal = n - 1 - i
            break

    persistence_score = normalize(bars_since_signal, 0, _FUEL_PERSISTENCE_BARS) * 0.6

    flips = _chop_flips(bars)
    low_chop_bonus = max(0, 40 - flips * 4)

    fuel = int(clamp(round_half_up(persistence_score + low_chop_bonus), 0, 100))

    if bars_since_signal < 5:
        persist_desc = "recent signal"
    elif bars_since_signal < 15:
        persist_desc = "signal aging"
    else:
        persist_desc = "mature trend"

    if flips <= 5:
        chop_desc = "steady path"
    elif flips <= 10:
        chop_desc = "some turbulence"
    else:
        chop_desc = "choppy conditions"

    return StatReading(
        value=fuel,
        why=f"{persist_desc} ({bars_since_signal} bars ago); {chop_desc}",
    )


def compute_threat(bars: Sequence[Bar]) -> StatReading:
    """THREAT: regime risk from band position, histogram chop and volatility.

    With no band levels or no finite close on the latest bar (or a
    zero-width envelope) the band score stays at the neutral 50, which is
    also the largest value a real band position can produce. The
    rationale is derived from that number, so a bandless bar reads as
    "near band extreme".
    """
    require_min_bars(bars)

    n = len(bars)
    latest = bars[-1]

    band_score = float(_NEUTRAL_SCORE)
    bands = latest.band_values()
    if bands and is_finite(latest.close):
        lower, upper = min(bands), max(bands)
        if upper > lower:
            pos = (latest.close - lower) / (upper - lower)
            dist_from_center = abs(pos - 0.5) * 2
            band_score = dist_from_center * 50

    histogram = [b.histogram for b in bars if is_finite(b.histogram)]
    flips = count_sign_flips(histogram)
    flip_score = normalize(flips, 0, n / 2) * 30

    firepower = compute_firepower(bars).value
    vol_contribution = firepower / 100 * 20

    threat = int(clamp(round_half_up(band_score + flip_score + vol_contribution), 0, 100))

    if band_score < 20:
        band_desc = "mid-range"
    elif band_score < 35:
        band_desc = "approaching bands"
    else:
        band_desc = "near band extreme"

    if flips <= 5:
        flip_desc = "stable regime"
    elif flips <= 12:
        flip_desc = "some chop"
    else:
        flip_desc = "high chop"

    if firepower < 40:
        vol_desc = "low"
    elif firepower < 70:
        vol_desc = "moderate"
    else:
        vol_desc = "elevated"

    return StatReading(
        value=threat,
        why=f"{band_desc}; histogram {flip_desc} ({flips} flips); volatility {vol_desc}",
    )
