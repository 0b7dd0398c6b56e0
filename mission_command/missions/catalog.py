"""
Mission catalog: the closed, immutable set of five mission archetypes.

The catalog is built once at import time and exposed through a read-only
mapping. Callers look archetypes up by id; nothing can add, remove or
edit entries at runtime.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from mission_command.models.mission_type import MissionType
from mission_command.taxonomy.mission_taxonomy import DurationBand, MissionTypeId, StatName


class UnknownMissionTypeError(LookupError):
    """Raised when a mission type id is not in the catalog.

    Attributes:
        type_id: The id that failed to resolve.
    """

    def __init__(self, type_id: object) -> None:
        self.type_id = type_id
        super().__init__(
            f"Unknown mission type: {type_id!s}. "
            f"Must be one of {[t.value for t in MissionTypeId]}."
        )


_CATALOG_ENTRIES: tuple[MissionType, ...] = (
    MissionType(
        id=MissionTypeId.RECON,
        name="RECON SWEEP",
        icon="🛰️",
        concept="Teaches regime/flow awareness",
        description=(
            "Scout the sector for signal clarity and flow patterns. "
            "High sensor readings improve success."
        ),
        teaches="How to read market flow and identify regime changes before committing capital.",
        betting_on="Information quality and timing",
        duration_bands=(DurationBand.MIN_45, DurationBand.HOUR_4, DurationBand.DAY_1),
        ideal_conditions=((StatName.SENSORS, "high"), (StatName.THREAT, "low-moderate")),
        risk_profile="Low capital at risk, high information value",
    ),
    MissionType(
        id=MissionTypeId.CARGO,
        name="CARGO RUN",
        icon="📦",
        concept="Teaches theta/time cost",
        description=(
            "Transport value across time. "
            "Stable hull and fuel reserves are critical for the journey."
        ),
        teaches="How time decay (theta) erodes option value, and why patience has a cost.",
        betting_on="Time passage without adverse movement",
        duration_bands=(DurationBand.DAY_1, DurationBand.WEEK_1, DurationBand.WEEK_2),
        ideal_conditions=(
            (StatName.HULL, "high"),
            (StatName.FUEL, "high"),
            (StatName.THREAT, "low"),
        ),
        risk_profile="Moderate capital, success requires discipline",
    ),
    MissionType(
        id=MissionTypeId.ESCORT,
        name="ESCORT FORMATION",
        icon="🛡️",
        concept="Teaches structure/hedging reduces variance",
        description=(
            "Protect the convoy with coordinated positioning. "
            "Spreads and hedges reduce damage exposure."
        ),
        teaches="How structured positions (spreads) trade upside for reduced risk.",
        betting_on="Defined risk/reward within a range",
        duration_bands=(DurationBand.WEEK_1, DurationBand.WEEK_2, DurationBand.MONTH_1),
        ideal_conditions=((StatName.HULL, "moderate-high"), (StatName.THREAT, "moderate")),
        risk_profile="Capped loss, capped gain, high probability",
    ),
    MissionType(
        id=MissionTypeId.STRIKE,
        name="DEEP SPACE STRIKE",
        icon="⚔️",
        concept="Teaches convexity/asymmetry sizing",
        description=(
            "High-risk assault on distant targets. "
            "Requires firepower and directional conviction."
        ),
        teaches="How to size asymmetric bets where small losses can lead to large gains.",
        betting_on="Large directional movement",
        duration_bands=(DurationBand.WEEK_1, DurationBand.WEEK_2, DurationBand.MONTH_1),
        ideal_conditions=((StatName.FIREPOWER, "high"), (StatName.HULL, "directionally clear")),
        risk_profile="High risk of total loss, potential for outsized returns",
    ),
    MissionType(
        id=MissionTypeId.HARVEST,
        name="HARVEST OPERATION",
        icon="🌾",
        concept="Teaches range/mean reversion / premium intuition",
        description=(
            "Extract value from stable zones. "
            "Low volatility and clear boundaries maximize yield."
        ),
        teaches="How to profit from range-bound conditions by selling premium.",
        betting_on="Price staying within a defined range",
        duration_bands=(DurationBand.MIN_45, DurationBand.DAY_1, DurationBand.WEEK_1),
        ideal_conditions=((StatName.FIREPOWER, "low-moderate"), (StatName.THREAT, "low")),
        risk_profile="High win rate, occasional large losses",
    ),
)

MISSION_CATALOG: Mapping[MissionTypeId, MissionType] = MappingProxyType(
    {entry.id: entry for entry in _CATALOG_ENTRIES}
)


def _coerce_type_id(type_id: object) -> Optional[MissionTypeId]:
    if isinstance(type_id, MissionTypeId):
        return type_id
    if isinstance(type_id, str):
        try:
            return MissionTypeId(type_id.strip().upper())
        except ValueError:
            return None
    return None


def get_mission_type(type_id: MissionTypeId | str) -> Optional[MissionType]:
    """Return the archetype for ``type_id`` (case-insensitive), or ``None``."""
    key = _coerce_type_id(type_id)
    return MISSION_CATALOG.get(key) if key is not None else None


def require_mission_type(type_id: MissionTypeId | str) -> MissionType:
    """Return the archetype for ``type_id``.

    Raises:
        UnknownMissionTypeError: If ``type_id`` is not in the catalog.
    """
    mission_type = get_mission_type(type_id)
    if mission_type is None:
        raise UnknownMissionTypeError(type_id)
    return mission_type


def get_all_mission_types() -> tuple[MissionType, ...]:
    """All archetypes in catalog order."""
    return tuple(MISSION_CATALOG.values())
