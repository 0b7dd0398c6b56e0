"""
Per-archetype scoring: suitability, difficulty and "why now" text.

Each archetype owns one ``ArchetypeScoring`` entry in ``ARCHETYPE_SCORING``;
there is no fallback branch, so an archetype without scoring rules is a
lookup failure rather than a silent default.

Suitability (weighted sum, not clamped)
---------------------------------------
    RECON   = sensors * 0.5 + (100 − threat) * 0.3 + fuel * 0.2
    CARGO   = hull * 0.35 + fuel * 0.35 + (100 − threat) * 0.3
    ESCORT  = hull * 0.5 + (50 − |threat − 45| * 0.5) + sensors * 0.2
    STRIKE  = firepower * 0.5 + hull * 0.3 + (100 − threat) * 0.2
    HARVEST = (100 − firepower) * 0.4 + (100 − threat) * 0.4 + sensors * 0.2

ESCORT peaks at 120 (hull 100, threat 45, sensors 100); values above 100
are kept as-is.

Difficulty (1–3 stars)
----------------------
    RECON   : threat > 60 → 3, > 35 → 2, else 1; then sensors >= 70 eases
              one star (floor 1) and sensors <= 35 adds one (ceiling 3)
    CARGO   : risk = threat * 0.5 + (100 − fuel) * 0.5; > 60 → 3, > 35 → 2
    ESCORT  : threat > 70 or threat < 20 → 2, else 1
    STRIKE  : threat > 65 → 3, > 40 → 2, else 1
    HARVEST : risk = firepower * 0.5 + threat * 0.5; > 55 → 3, > 35 → 2

Why now
-------
Rules are evaluated in order per archetype; first match wins, otherwise
the archetype's generic sentence is returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

from mission_command.missions.catalog import UnknownMissionTypeError, get_mission_type
from mission_command.models.environment import EnvironmentSnapshot
from mission_command.taxonomy.mission_taxonomy import MissionTypeId

# Threat level ESCORT formations are tuned for
ESCORT_THREAT_TARGET = 45


@dataclass(frozen=True)
class ArchetypeScoring:
    """Scoring rules for one archetype.

    Attributes:
        suitability: Raw weighted fit score (float, unclamped).
        difficulty:  1–3 star rating.
        why_now:     Rationale sentence.
    """

    suitability: Callable[[EnvironmentSnapshot], float]
    difficulty: Callable[[EnvironmentSnapshot], int]
    why_now: Callable[[EnvironmentSnapshot], str]


def _tiered(value: float, hard_above: float, medium_above: float) -> int:
    if value > hard_above:
        return 3
    if value > medium_above:
        return 2
    return 1


# ── RECON ─────────────────────────────────────────────────────────────────────

def _recon_suitability(env: EnvironmentSnapshot) -> float:
    return env.sensors * 0.5 + (100 - env.threat) * 0.3 + env.fuel * 0.2


def _recon_difficulty(env: EnvironmentSnapshot) -> int:
    stars = _tiered(env.threat, 60, 35)
    # Clear signals make scouting easier, noisy data makes it harder
    if env.sensors >= 70 and stars > 1:
        stars -= 1
    if env.sensors <= 35 and stars < 3:
        stars += 1
    return stars


def _recon_why_now(env: EnvironmentSnapshot) -> str:
    if env.sensors >= 60:
        return "Flow signals are clear—good conditions for reconnaissance."
    if env.threat < 40:
        return "Low threat environment allows for safe scouting."
    return "Standard conditions for sector reconnaissance."


# ── CARGO ─────────────────────────────────────────────────────────────────────

def _cargo_suitability(env: EnvironmentSnapshot) -> float:
    return env.hull * 0.35 + env.fuel * 0.35 + (100 - env.threat) * 0.3


def _cargo_difficulty(env: EnvironmentSnapshot) -> int:
    risk = env.threat * 0.5 + (100 - env.fuel) * 0.5
    return _tiered(risk, 60, 35)


def _cargo_why_now(env: EnvironmentSnapshot) -> str:
    if env.hull >= 60 and env.fuel >= 60:
        return "Stable trend with high fuel reserves—ideal for time-based transport."
    if env.threat < 35:
        return "Calm sector reduces journey risk."
    return "Conditions acceptable for cargo operations."


# ── ESCORT ────────────────────────────────────────────────────────────────────

def _escort_suitability(env: EnvironmentSnapshot) -> float:
    threat_penalty = abs(env.threat - ESCORT_THREAT_TARGET) * 0.5
    return env.hull * 0.5 + (50 - threat_penalty) + env.sensors * 0.2


def _escort_difficulty(env: EnvironmentSnapshot) -> int:
    return 2 if env.threat > 70 or env.threat < 20 else 1


def _escort_why_now(env: EnvironmentSnapshot) -> str:
    if 30 <= env.threat <= 60:
        return "Moderate threat level—hedged formations add value here."
    if env.hull >= 55:
        return "Solid hull integrity supports structured positioning."
    return "Standard escort formation conditions."


# ── STRIKE ────────────────────────────────────────────────────────────────────

def _strike_suitability(env: EnvironmentSnapshot) -> float:
    return env.firepower * 0.5 + env.hull * 0.3 + (100 - env.threat) * 0.2


def _strike_difficulty(env: EnvironmentSnapshot) -> int:
    return _tiered(env.threat, 65, 40)


def _strike_why_now(env: EnvironmentSnapshot) -> str:
    if env.firepower >= 65:
        return "High volatility provides thrust for directional assault."
    if env.hull >= 60 and env.firepower >= 50:
        return "Clear trend direction with adequate firepower."
    return "Conditions support tactical strike operations."


# ── HARVEST ───────────────────────────────────────────────────────────────────

def _harvest_suitability(env: EnvironmentSnapshot) -> float:
    return (100 - env.firepower) * 0.4 + (100 - env.threat) * 0.4 + env.sensors * 0.2


def _harvest_difficulty(env: EnvironmentSnapshot) -> int:
    risk = env.firepower * 0.5 + env.threat * 0.5
    return _tiered(risk, 55, 35)


def _harvest_why_now(env: EnvironmentSnapshot) -> str:
    if env.firepower <= 40 and env.threat <= 40:
        return "Low volatility, low threat—prime harvesting conditions."
    if env.sensors >= 55:
        return "Clear flow signals help identify range boundaries."
    return "Range conditions may support premium collection."


ARCHETYPE_SCORING: Mapping[MissionTypeId, ArchetypeScoring] = MappingProxyType({
    MissionTypeId.RECON:   ArchetypeScoring(_recon_suitability,   _recon_difficulty,   _recon_why_now),
    MissionTypeId.CARGO:   ArchetypeScoring(_cargo_suitability,   _cargo_difficulty,   _cargo_why_now),
    MissionTypeId.ESCORT:  ArchetypeScoring(_escort_suitability,  _escort_difficulty,  _escort_why_now),
    MissionTypeId.STRIKE:  ArchetypeScoring(_strike_suitability,  _strike_difficulty,  _strike_why_now),
    MissionTypeId.HARVEST: ArchetypeScoring(_harvest_suitability, _harvest_difficulty, _harvest_why_now),
})


def scoring_for(type_id: MissionTypeId | str) -> ArchetypeScoring:
    """Return the scoring rules for ``type_id`` (case-insensitive, like the catalog).

    Raises:
        UnknownMissionTypeError: If ``type_id`` has no scoring rules.
    """
    mission_type = get_mission_type(type_id)
    if mission_type is None or mission_type.id not in ARCHETYPE_SCORING:
        raise UnknownMissionTypeError(type_id)
    return ARCHETYPE_SCORING[mission_type.id]


def compute_suitability(type_id: MissionTypeId | str, env: EnvironmentSnapshot) -> float:
    """Raw (unrounded, unclamped) suitability of an archetype for ``env``."""
    return scoring_for(type_id).suitability(env)


def compute_difficulty(type_id: MissionTypeId | str, env: EnvironmentSnapshot) -> int:
    """1–3 star difficulty of an archetype under ``env``."""
    return scoring_for(type_id).difficulty(env)


def generate_why_now(type_id: MissionTypeId | str, env: EnvironmentSnapshot) -> str:
    """Rule-selected explanation of why an archetype fits ``env`` now."""
    return scoring_for(type_id).why_now(env)
