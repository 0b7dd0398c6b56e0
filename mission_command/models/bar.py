"""
Bar model - one sampled interval of market and indicator data.

Bars arrive from a ``BarSeriesProvider`` in ascending time order
(index 0 = oldest, last index = most recent). Only ``time`` and ``close``
are required; every indicator field is optional and may also be NaN when
the upstream chart export had a gap. Computators treat ``None``, NaN and
infinities identically: the bar is skipped for that feature.

Field aliases follow the chart export naming (``kernelRegression``,
``volumeMA``, ``G200``, ``A1``..``F5``) so raw JSON validates directly;
Python code uses the snake_case names.

The thirty band levels are explicit fields rather than a dynamic mapping,
so the set of bands is fixed and checked at model definition time.
"""

from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

BAND_LETTERS = ("A", "B", "C", "D", "E", "F")
BAND_DEPTHS = (1, 2, 3, 4, 5)

# Chart-export band names in A1..F5 order
BAND_KEYS: tuple[str, ...] = tuple(
    f"{letter}{depth}" for letter in BAND_LETTERS for depth in BAND_DEPTHS
)
# Matching attribute names on ``Bar``
BAND_FIELDS: tuple[str, ...] = tuple(key.lower() for key in BAND_KEYS)


class Bar(BaseModel):
    """A single OHLCV bar plus optional technical-indicator readings.

    Attributes:
        time: Bar open time as integer epoch seconds.
        close: Closing price.
        open / high / low: Remaining OHLC prices, if exported.
        volume: Traded volume.
        volume_ma: Volume moving average.
        kernel_regression: Kernel regression estimate (KRE) trend line.
        g200: Long-window anchor level.
        histogram: Momentum oscillator histogram value.
        buy / sell: Non-zero when a discrete signal fired on this bar.
        a1 .. f5: Nested volatility-envelope boundary levels.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    time: int
    close: float
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    volume: Optional[float] = None
    volume_ma: Optional[float] = Field(default=None, alias="volumeMA")
    kernel_regression: Optional[float] = Field(default=None, alias="kernelRegression")
    g200: Optional[float] = Field(default=None, alias="G200")
    histogram: Optional[float] = None
    buy: Optional[float] = None
    sell: Optional[float] = None

    a1: Optional[float] = Field(default=None, alias="A1")
    a2: Optional[float] = Field(default=None, alias="A2")
    a3: Optional[float] = Field(default=None, alias="A3")
    a4: Optional[float] = Field(default=None, alias="A4")
    a5: Optional[float] = Field(default=None, alias="A5")
    b1: Optional[float] = Field(default=None, alias="B1")
    b2: Optional[float] = Field(default=None, alias="B2")
    b3: Optional[float] = Field(default=None, alias="B3")
    b4: Optional[float] = Field(default=None, alias="B4")
    b5: Optional[float] = Field(default=None, alias="B5")
    c1: Optional[float] = Field(default=None, alias="C1")
    c2: Optional[float] = Field(default=None, alias="C2")
    c3: Optional[float] = Field(default=None, alias="C3")
    c4: Optional[float] = Field(default=None, alias="C4")
    c5: Optional[float] = Field(default=None, alias="C5")
    d1: Optional[float] = Field(default=None, alias="D1")
    d2: Optional[float] = Field(default=None, alias="D2")
    d3: Optional[float] = Field(default=None, alias="D3")
    d4: Optional[float] = Field(default=None, alias="D4")
    d5: Optional[float] = Field(default=None, alias="D5")
    e1: Optional[float] = Field(default=None, alias="E1")
    e2: Optional[float] = Field(default=None, alias="E2")
    e3: Optional[float] = Field(default=None, alias="E3")
    e4: Optional[float] = Field(default=None, alias="E4")
    e5: Optional[float] = Field(default=None, alias="E5")
    f1: Optional[float] = Field(default=None, alias="F1")
    f2: Optional[float] = Field(default=None, alias="F2")
    f3: Optional[float] = Field(default=None, alias="F3")
    f4: Optional[float] = Field(default=None, alias="F4")
    f5: Optional[float] = Field(default=None, alias="F5")

    def band_values(self) -> list[float]:
        """Return the finite band levels present on this bar, in A1..F5 order."""
        values: list[float] = []
        for name in BAND_FIELDS:
            v = getattr(self, name)
            if v is not None and math.isfinite(v):
                values.append(v)
        return values
