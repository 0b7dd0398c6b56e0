"""
Environment snapshot models.

An ``EnvironmentSnapshot`` is the five-stat summary of one ticker's
indicator state at one point in time. It is produced fresh by the
environment builder on every request, never mutated, and handed to the
recommendation engine (and optionally embedded in a new Mission).

``StatReading`` is the intermediate output of a single stat computator:
an integer score in [0, 100] and the rationale string that explains it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from mission_command.taxonomy.mission_taxonomy import StatName


@dataclass(frozen=True)
class StatReading:
    """One computator result.

    Attributes:
        value: Bounded integer score, 0–100.
        why:   Human-readable rationale for the score.
    """

    value: int
    why: str


class StatRationale(BaseModel):
    """Rationale strings keyed by stat name, parallel to the stat values."""

    model_config = ConfigDict(frozen=True)

    hull: str
    firepower: str
    sensors: str
    fuel: str
    threat: str

    def for_stat(self, name: StatName) -> str:
        return getattr(self, StatName(name).value)


class LatestBarSummary(BaseModel):
    """Price context from the most recent bar used in a snapshot."""

    model_config = ConfigDict(frozen=True)

    time: datetime
    close: float
    volume: Optional[float] = None


class EnvironmentSnapshot(BaseModel):
    """Immutable five-stat environment for one ticker.

    Attributes:
        ticker: Upper-cased symbol the bars belong to.
        computed_at: UTC time the snapshot was built.
        bars_used: Number of bars the computators consumed.
        hull: Trend stability, 0–100.
        firepower: Volatility / thrust, 0–100.
        sensors: Flow quality / signal clarity, 0–100.
        fuel: Trend persistence / patience buffer, 0–100.
        threat: Regime risk, 0–100.
        why: Rationale string for each stat.
        latest_bar: Time, close and volume of the newest bar.
    """

    model_config = ConfigDict(frozen=True)

    ticker: str
    computed_at: datetime
    bars_used: int
    hull: int
    firepower: int
    sensors: int
    fuel: int
    threat: int
    why: StatRationale
    latest_bar: LatestBarSummary

    @field_validator("hull", "firepower", "sensors", "fuel", "threat")
    @classmethod
    def validate_stat_range(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"Stat values must be in [0, 100], got {v}.")
        return v

    @field_validator("bars_used")
    @classmethod
    def validate_bars_used(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"bars_used must be non-negative, got {v}.")
        return v

    def stat(self, name: StatName) -> int:
        """Return the value of one stat by name."""
        return getattr(self, StatName(name).value)

    def stats(self) -> dict[StatName, int]:
        """Return all five stats in canonical order."""
        return {name: self.stat(name) for name in StatName}
