"""
Mission taxonomy: archetype ids, stat names, mission states and log types.

Everything that downstream code dispatches on is a ``StrEnum`` so values
serialize to plain strings and typos fail loudly at validation time.

``VALID_TRANSITIONS`` is the mission state machine::

    PLANNING ──► ACTIVE ──► COMPLETED
        │          │
        └──────────┴──────► ABANDONED

COMPLETED and ABANDONED are terminal.

This module has NO imports from any other ``mission_command`` package.
"""

from enum import StrEnum


class MissionTypeId(StrEnum):
    """Identifier of a mission archetype in the catalog."""

    RECON = "RECON"
    """Regime/flow awareness: rewards clear Sensors and low Threat."""

    CARGO = "CARGO"
    """Theta/time cost: rewards Hull, Fuel and a calm sector."""

    ESCORT = "ESCORT"
    """Structure/hedging: rewards Hull and a moderate Threat near 45."""

    STRIKE = "STRIKE"
    """Convexity/asymmetry: rewards Firepower and directional Hull."""

    HARVEST = "HARVEST"
    """Range/mean reversion: rewards low Firepower and low Threat."""


class StatName(StrEnum):
    """The five vessel stats carried by an environment snapshot."""

    HULL = "hull"
    FIREPOWER = "firepower"
    SENSORS = "sensors"
    FUEL = "fuel"
    THREAT = "threat"


class MissionStatus(StrEnum):
    """Lifecycle state of a persisted mission."""

    PLANNING = "PLANNING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    ABANDONED = "ABANDONED"


class LogEntryType(StrEnum):
    """Category of a mission log entry."""

    SYSTEM = "system"
    INFO = "info"
    NOTE = "note"
    WARNING = "warning"


class OutcomeResult(StrEnum):
    """How a completed mission resolved."""

    SUCCESS = "SUCCESS"
    PARTIAL = "PARTIAL"
    FAILURE = "FAILURE"


class DurationBand(StrEnum):
    """Bar interval a mission is planned against."""

    MIN_45 = "45m"
    HOUR_4 = "4H"
    DAY_1 = "1D"
    WEEK_1 = "1W"
    WEEK_2 = "2W"
    MONTH_1 = "1M"


VALID_TRANSITIONS: dict[MissionStatus, frozenset[MissionStatus]] = {
    MissionStatus.PLANNING: frozenset({MissionStatus.ACTIVE, MissionStatus.ABANDONED}),
    MissionStatus.ACTIVE: frozenset({MissionStatus.COMPLETED, MissionStatus.ABANDONED}),
    MissionStatus.COMPLETED: frozenset(),
    MissionStatus.ABANDONED: frozenset(),
}

TERMINAL_STATUSES: frozenset[MissionStatus] = frozenset(
    status for status, targets in VALID_TRANSITIONS.items() if not targets
)
