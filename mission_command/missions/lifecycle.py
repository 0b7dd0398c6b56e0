"""
Mission lifecycle: creation, logging and state transitions.

Every mutating operation is a whole-collection read-modify-write against
the ``MissionStore``::

    missions = store.load_missions()
    ...find by id, mutate, append log entry...
    store.save_missions(missions)

There is no row-level update and no locking: one writer at a time is
assumed. Storage failures are contained by the store (logged, never
raised), so lifecycle calls never fail because of persistence.

State machine (see ``VALID_TRANSITIONS``)::

    PLANNING --start--> ACTIVE --complete--> COMPLETED
        |                 |
        +----abandon------+-----abandon----> ABANDONED

Each transition stamps the relevant timestamp and appends a ``system``
log entry.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime
from typing import Callable, Optional

from mission_command.missions.catalog import require_mission_type
from mission_command.models.mission import (
    Mission,
    MissionDuration,
    MissionLogEntry,
    MissionOptions,
    MissionOutcome,
    MissionThesis,
)
from mission_command.storage.base import MissionStore
from mission_command.taxonomy.mission_taxonomy import (
    VALID_TRANSITIONS,
    LogEntryType,
    MissionStatus,
    MissionTypeId,
    OutcomeResult,
)
from mission_command.utils.time_utils import epoch_millis, to_base36, utcnow

logger = logging.getLogger(__name__)

MISSION_ID_PREFIX = "MSN"
_SUFFIX_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_SUFFIX_LENGTH = 4

DEFAULT_DIFFICULTY = 2
DEFAULT_DURATION = MissionDuration(unit="1D", target_bars=32)
DEFAULT_MAX_ACTIVE = 3


# ── Custom exceptions ─────────────────────────────────────────────────────────


class MissionNotFoundError(LookupError):
    """Raised when a lifecycle operation names an unknown mission id.

    Attributes:
        mission_id: The id that was not found.
    """

    def __init__(self, mission_id: str) -> None:
        self.mission_id = mission_id
        super().__init__(f"Mission '{mission_id}' not found.")


class InvalidMissionTransitionError(RuntimeError):
    """Raised when a transition is not allowed from the mission's status.

    Attributes:
        mission_id: Mission being transitioned.
        current:    Its current status.
        target:     The requested status.
    """

    def __init__(self, mission_id: str, current: MissionStatus, target: MissionStatus) -> None:
        self.mission_id = mission_id
        self.current = current
        self.target = target
        allowed = sorted(s.value for s in VALID_TRANSITIONS[current]) or ["none (terminal)"]
        super().__init__(
            f"Mission '{mission_id}' cannot move {current.value} → {target.value}.  "
            f"Allowed from {current.value}: {', '.join(allowed)}."
        )


class ActiveMissionLimitError(RuntimeError):
    """Raised when starting a mission would exceed the active-mission cap.

    Attributes:
        max_active: The configured cap.
    """

    def __init__(self, max_active: int) -> None:
        self.max_active = max_active
        super().__init__(
            f"Already running {max_active} active mission(s).  "
            "Complete or abandon one before launching another."
        )


# ── Construction ──────────────────────────────────────────────────────────────


def generate_mission_id(now: Optional[datetime] = None) -> str:
    """Return ``MSN-<base36 epoch ms>-<4 random base36 chars>``, upper-case."""
    stamp = to_base36(epoch_millis(now or utcnow()))
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"{MISSION_ID_PREFIX}-{stamp}-{suffix}"


def build_mission(
    ticker: str,
    type_id: MissionTypeId | str,
    options: Optional[MissionOptions] = None,
    *,
    default_difficulty: int = DEFAULT_DIFFICULTY,
    default_duration: MissionDuration = DEFAULT_DURATION,
    now: Optional[datetime] = None,
) -> Mission:
    """Construct a new PLANNING mission without persisting it.

    Args:
        ticker: Symbol (upper-cased on the mission).
        type_id: Catalog archetype id.
        options: Overrides; unset fields fall back to the defaults or, for
            the thesis, to the archetype's ``betting_on`` text.
        default_difficulty: Difficulty when ``options.difficulty`` is unset.
        default_duration: Duration when ``options.duration`` is unset.
        now: Creation time. Defaults to now (UTC).

    Returns:
        A ``Mission`` with one ``system`` "Mission created" log entry.

    Raises:
        UnknownMissionTypeError: If ``type_id`` is not in the catalog.
    """
    mission_type = require_mission_type(type_id)
    options = options or MissionOptions()
    now = now or utcnow()

    return Mission(
        id=generate_mission_id(now),
        created_at=now,
        ticker=ticker,
        type=mission_type.id,
        type_name=mission_type.name,
        icon=mission_type.icon,
        difficulty=options.difficulty or default_difficulty,
        duration=options.duration or default_duration,
        thesis=MissionThesis(
            primary=options.thesis or mission_type.betting_on,
            notes=options.notes,
        ),
        env=options.env,
        status=MissionStatus.PLANNING,
        log=[MissionLogEntry(time=now, event="Mission created", type=LogEntryType.SYSTEM)],
    )


# ── Manager ───────────────────────────────────────────────────────────────────


class MissionManager:
    """Owns every mission record in one ``MissionStore``.

    Attributes:
        store: Persistence backend.
        max_active: Cap on simultaneously ACTIVE missions.
        default_difficulty: Difficulty for new missions without an override.
        default_duration: Duration for new missions without an override.
    """

    def __init__(
        self,
        store: MissionStore,
        max_active: int = DEFAULT_MAX_ACTIVE,
        default_difficulty: int = DEFAULT_DIFFICULTY,
        default_duration: MissionDuration = DEFAULT_DURATION,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.store = store
        self.max_active = max_active
        self.default_difficulty = default_difficulty
        self.default_duration = default_duration
        self._clock = clock

    # ── Queries ───────────────────────────────────────────────────────────────

    def list_missions(self, status: Optional[MissionStatus] = None) -> list[Mission]:
        """All stored missions in stored order, optionally filtered by status."""
        missions = self.store.load_missions()
        if status is None:
            return missions
        return [m for m in missions if m.status == status]

    def get_mission(self, mission_id: str) -> Optional[Mission]:
        return _find(self.store.load_missions(), mission_id)

    # ── Creation / deletion ───────────────────────────────────────────────────

    def create_mission(
        self,
        ticker: str,
        type_id: MissionTypeId | str,
        options: Optional[MissionOptions] = None,
    ) -> Mission:
        """Build a PLANNING mission and append it to the stored collection.

        Raises:
            UnknownMissionTypeError: If ``type_id`` is not in the catalog;
                nothing is written in that case.
        """
        mission = build_mission(
            ticker,
            type_id,
            options,
            default_difficulty=self.default_difficulty,
            default_duration=self.default_duration,
            now=self._clock(),
        )
        missions = self.store.load_missions()
        missions.append(mission)
        self.store.save_missions(missions)
        logger.info("Created mission %s (%s on %s)", mission.id, mission.type.value, mission.ticker)
        return mission

    def delete_mission(self, mission_id: str) -> bool:
        """Remove a mission from the collection. Returns ``False`` if absent."""
        missions = self.store.load_missions()
        remaining = [m for m in missions if m.id != mission_id]
        if len(remaining) == len(missions):
            return False
        self.store.save_missions(remaining)
        logger.info("Deleted mission %s", mission_id)
        return True

    # ── Log ───────────────────────────────────────────────────────────────────

    def add_mission_log(
        self,
        mission_id: str,
        event: str,
        type: LogEntryType | str = LogEntryType.INFO,
    ) -> Optional[Mission]:
        """Append a log entry to a stored mission.

        Returns:
            The updated mission, or ``None`` if ``mission_id`` is unknown
            (logged at WARNING; nothing is written).
        """
        missions = self.store.load_missions()
        mission = _find(missions, mission_id)
        if mission is None:
            logger.warning("Cannot log to unknown mission %s", mission_id)
            return None

        self._append_log(mission, event, LogEntryType(type))
        self.store.save_missions(missions)
        return mission

    # ── Transitions ───────────────────────────────────────────────────────────

    def start_mission(self, mission_id: str) -> Mission:
        """PLANNING → ACTIVE.

        Raises:
            MissionNotFoundError, InvalidMissionTransitionError,
            ActiveMissionLimitError.
        """
        missions = self.store.load_missions()
        mission = self._require(missions, mission_id)
        _check_transition(mission, MissionStatus.ACTIVE)

        active = sum(1 for m in missions if m.status == MissionStatus.ACTIVE)
        if active >= self.max_active:
            raise ActiveMissionLimitError(self.max_active)

        now = self._clock()
        mission.status = MissionStatus.ACTIVE
        mission.started_at = now
        self._append_log(mission, "Mission launched", LogEntryType.SYSTEM, now)
        self.store.save_missions(missions)
        logger.info("Started mission %s", mission_id)
        return mission

    def complete_mission(
        self,
        mission_id: str,
        result: OutcomeResult | str,
        notes: str = "",
        close: Optional[float] = None,
    ) -> Mission:
        """ACTIVE → COMPLETED with an outcome.

        Raises:
            MissionNotFoundError, InvalidMissionTransitionError.
        """
        missions = self.store.load_missions()
        mission = self._require(missions, mission_id)
        _check_transition(mission, MissionStatus.COMPLETED)

        outcome = MissionOutcome(result=OutcomeResult(result), notes=notes, close_at_resolution=close)
        now = self._clock()
        mission.status = MissionStatus.COMPLETED
        mission.completed_at = now
        mission.outcome = outcome
        self._append_log(
            mission, f"Mission completed: {outcome.result.value}", LogEntryType.SYSTEM, now
        )
        self.store.save_missions(missions)
        logger.info("Completed mission %s (%s)", mission_id, outcome.result.value)
        return mission

    def abandon_mission(self, mission_id: str, reason: str = "") -> Mission:
        """PLANNING or ACTIVE → ABANDONED.

        Raises:
            MissionNotFoundError, InvalidMissionTransitionError.
        """
        missions = self.store.load_missions()
        mission = self._require(missions, mission_id)
        _check_transition(mission, MissionStatus.ABANDONED)

        now = self._clock()
        mission.status = MissionStatus.ABANDONED
        mission.completed_at = now
        event = f"Mission abandoned: {reason}" if reason else "Mission abandoned"
        self._append_log(mission, event, LogEntryType.SYSTEM, now)
        self.store.save_missions(missions)
        logger.info("Abandoned mission %s", mission_id)
        return mission

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _require(self, missions: list[Mission], mission_id: str) -> Mission:
        mission = _find(missions, mission_id)
        if mission is None:
            raise MissionNotFoundError(mission_id)
        return mission

    def _append_log(
        self,
        mission: Mission,
        event: str,
        type: LogEntryType,
        when: Optional[datetime] = None,
    ) -> None:
        mission.log.append(MissionLogEntry(time=when or self._clock(), event=event, type=type))


def _find(missions: list[Mission], mission_id: str) -> Optional[Mission]:
    return next((m for m in missions if m.id == mission_id), None)


def _check_transition(mission: Mission, target: MissionStatus) -> None:
    if target not in VALID_TRANSITIONS[mission.status]:
        raise InvalidMissionTransitionError(mission.id, mission.status, target)
