"""
Mission models - the one mutable, persisted entity.

A ``Mission`` is created in ``PLANNING`` from a catalog archetype and an
optional environment snapshot, then moves through the state machine in
``mission_command.taxonomy.mission_taxonomy.VALID_TRANSITIONS``. Its
``log`` is append-only: lifecycle operations add entries, nothing edits
or removes them.

``Mission`` is NOT frozen: ``status``, ``started_at``, ``completed_at``,
``outcome`` and ``log`` are updated by the lifecycle manager. Every
nested part (duration, thesis, log entries, outcome, snapshot) is frozen.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mission_command.models.environment import EnvironmentSnapshot
from mission_command.taxonomy.mission_taxonomy import (
    DurationBand,
    LogEntryType,
    MissionStatus,
    MissionTypeId,
    OutcomeResult,
)


class MissionDuration(BaseModel):
    """Planned length of a mission: a bar interval and a bar count."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    unit: DurationBand = DurationBand.DAY_1
    target_bars: int = Field(default=32, alias="targetBars")

    @field_validator("target_bars")
    @classmethod
    def validate_target_bars(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"target_bars must be >= 1, got {v}.")
        return v


class MissionThesis(BaseModel):
    """Primary thesis text plus free-form notes."""

    model_config = ConfigDict(frozen=True)

    primary: str
    notes: str = ""


class MissionLogEntry(BaseModel):
    """One timestamped event in a mission's log."""

    model_config = ConfigDict(frozen=True)

    time: datetime
    event: str
    type: LogEntryType = LogEntryType.INFO


class MissionOutcome(BaseModel):
    """Resolution recorded when a mission completes.

    Attributes:
        result: How the mission resolved.
        notes: Free-form debrief.
        close_at_resolution: Underlying close when the mission was resolved,
            if the caller supplied one.
    """

    model_config = ConfigDict(frozen=True)

    result: OutcomeResult
    notes: str = ""
    close_at_resolution: Optional[float] = None


class MissionOptions(BaseModel):
    """Caller-supplied overrides for ``create_mission``.

    Every field is optional; ``None`` means "use the manager's default"
    (difficulty and duration) or "derive from the archetype" (thesis).
    """

    model_config = ConfigDict(frozen=True)

    difficulty: Optional[int] = None
    duration: Optional[MissionDuration] = None
    thesis: Optional[str] = None
    notes: str = ""
    env: Optional[EnvironmentSnapshot] = None

    @field_validator("difficulty")
    @classmethod
    def validate_difficulty(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not 1 <= v <= 3:
            raise ValueError(f"difficulty must be 1, 2 or 3, got {v}.")
        return v


class Mission(BaseModel):
    """A planned, running or resolved mission on one ticker.

    Attributes:
        id: Unique id, ``MSN-<base36 ms>-<4 chars>``.
        created_at: UTC creation time.
        ticker: Upper-cased symbol.
        type: Archetype id.
        type_name: Archetype display name at creation time.
        icon: Archetype icon at creation time.
        difficulty: 1–3 stars.
        duration: Planned bar interval and count.
        thesis: What the mission is betting on.
        env: Environment snapshot captured at creation, if any.
        status: Current lifecycle state.
        started_at: When the mission went ACTIVE.
        completed_at: When the mission reached a terminal state.
        outcome: Resolution details for COMPLETED missions.
        log: Append-only event log, oldest first.
    """

    # Not frozen: status, timestamps, outcome and log change over the lifecycle
    model_config = ConfigDict(frozen=False)

    id: str
    created_at: datetime
    ticker: str
    type: MissionTypeId
    type_name: str
    icon: str
    difficulty: int = 2
    duration: MissionDuration = MissionDuration()
    thesis: MissionThesis
    env: Optional[EnvironmentSnapshot] = None
    status: MissionStatus = MissionStatus.PLANNING
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    outcome: Optional[MissionOutcome] = None
    log: list[MissionLogEntry] = Field(default_factory=list)

    @field_validator("ticker")
    @classmethod
    def validate_ticker(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("ticker must not be empty.")
        return v

    @field_validator("difficulty")
    @classmethod
    def validate_difficulty(cls, v: int) -> int:
        if not 1 <= v <= 3:
            raise ValueError(f"difficulty must be 1, 2 or 3, got {v}.")
        return v
