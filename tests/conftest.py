"""
Shared pytest fixtures for the Mission Command test suite.

Provides:
  - ``bar_factory`` / ``bars_factory``: Bar factories. ``bars_factory(n)`` is the
    quiet-market series used throughout (constant close, KRE and G200,
    2% range, zero histogram, volume equal to its MA, no signals, no bands).
  - ``env_factory``: EnvironmentSnapshot factory taking the five stats.
  - ``memory_store`` / ``manager``: a dict-backed store and a
    MissionManager on top of it with a fixed clock.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import pytest

from mission_command.missions.lifecycle import MissionManager
from mission_command.models.bar import Bar
from mission_command.models.environment import (
    EnvironmentSnapshot,
    LatestBarSummary,
    StatRationale,
)
from mission_command.storage.memory import MemoryMissionStore

BASE_TIME = 1_700_000_000
BAR_SPACING = 86_400
FIXED_NOW = datetime(2024, 9, 15, 12, 0, 0, tzinfo=timezone.utc)


# ── Bar factories ─────────────────────────────────────────────────────────────

def make_bar(index: int = 0, **overrides) -> Bar:
    """One quiet bar at ``BASE_TIME + index * BAR_SPACING``; overrides win."""
    fields = dict(
        time=BASE_TIME + index * BAR_SPACING,
        open=100.0,
        high=101.0,
        low=99.0,
        close=100.0,
        volume=1000.0,
        volume_ma=1000.0,
        kernel_regression=100.0,
        g200=100.0,
        histogram=0.0,
    )
    fields.update(overrides)
    return Bar(**fields)


def flat_bars(n: int = 10, **overrides) -> list[Bar]:
    return [make_bar(i, **overrides) for i in range(n)]


@pytest.fixture
def bar_factory() -> Callable[..., Bar]:
    return make_bar


@pytest.fixture
def bars_factory() -> Callable[..., list[Bar]]:
    return flat_bars


# ── Environment factory ───────────────────────────────────────────────────────

def make_env(
    hull: int = 50,
    firepower: int = 50,
    sensors: int = 50,
    fuel: int = 50,
    threat: int = 50,
    ticker: str = "RKLB",
) -> EnvironmentSnapshot:
    return EnvironmentSnapshot(
        ticker=ticker,
        computed_at=FIXED_NOW,
        bars_used=32,
        hull=hull,
        firepower=firepower,
        sensors=sensors,
        fuel=fuel,
        threat=threat,
        why=StatRationale(
            hull="test", firepower="test", sensors="test", fuel="test", threat="test"
        ),
        latest_bar=LatestBarSummary(time=FIXED_NOW, close=12.5, volume=1_000_000.0),
    )


@pytest.fixture
def env_factory() -> Callable[..., EnvironmentSnapshot]:
    return make_env


@pytest.fixture
def sample_env() -> EnvironmentSnapshot:
    """A calm, trending environment (hull 75, firepower 30, sensors 65, fuel 70, threat 25)."""
    return make_env(hull=75, firepower=30, sensors=65, fuel=70, threat=25)


# ── Mission fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def memory_store() -> MemoryMissionStore:
    return MemoryMissionStore()


@pytest.fixture
def manager(memory_store: MemoryMissionStore) -> MissionManager:
    return MissionManager(memory_store, clock=lambda: FIXED_NOW)
