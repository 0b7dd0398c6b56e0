"""
Recommendation ranker: scores every catalog archetype against one
environment snapshot and orders the result.

Usage flow
----------
1. generate_recommendations(env)
   -> list[Recommendation]  (one per archetype, best first)

2. top_recommendation(env)
   -> Recommendation | None  (best entry flagged as recommended)

Ordering is a stable sort on rounded suitability, descending; ties keep
catalog order. ``recommended`` is decided on the same rounded value the
entry reports, so ``recommended == (suitability >= 55)`` always holds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from mission_command.missions.catalog import get_all_mission_types
from mission_command.models.environment import EnvironmentSnapshot
from mission_command.models.mission_type import MissionType
from mission_command.recommendations.scorer import scoring_for
from mission_command.telemetry.primitives import round_half_up
from mission_command.taxonomy.mission_taxonomy import MissionTypeId

RECOMMEND_THRESHOLD = 55


@dataclass(frozen=True)
class Recommendation:
    """One archetype scored against one environment.

    Attributes:
        mission_type: The catalog archetype.
        suitability:  Rounded fit score; may exceed 100 (ESCORT tops out at 120).
        difficulty:   1–3 stars.
        why_now:      Rationale sentence.
        recommended:  ``suitability >= RECOMMEND_THRESHOLD``.
    """

    mission_type: MissionType
    suitability: int
    difficulty: int
    why_now: str
    recommended: bool

    @property
    def type_id(self) -> MissionTypeId:
        return self.mission_type.id

    def to_dict(self) -> dict[str, Any]:
        """Mission-type fields spread alongside the recommendation fields."""
        payload = self.mission_type.model_dump(mode="json")
        payload["ideal_conditions"] = self.mission_type.ideal_conditions_map
        payload.update(
            type=self.mission_type.id.value,
            suitability=self.suitability,
            difficulty=self.difficulty,
            why_now=self.why_now,
            recommended=self.recommended,
        )
        return payload


def score_archetype(mission_type: MissionType, env: EnvironmentSnapshot) -> Recommendation:
    """Score a single archetype against ``env``."""
    rules = scoring_for(mission_type.id)
    suitability = round_half_up(rules.suitability(env))
    return Recommendation(
        mission_type=mission_type,
        suitability=suitability,
        difficulty=rules.difficulty(env),
        why_now=rules.why_now(env),
        recommended=suitability >= RECOMMEND_THRESHOLD,
    )


def generate_recommendations(env: EnvironmentSnapshot) -> list[Recommendation]:
    """Score all five archetypes and sort them by suitability, best first.

    Args:
        env: Environment snapshot to score against.

    Returns:
        Exactly one ``Recommendation`` per catalog archetype.
    """
    recs = [score_archetype(mission_type, env) for mission_type in get_all_mission_types()]
    # sorted() is stable: equal scores keep catalog order
    return sorted(recs, key=lambda r: r.suitability, reverse=True)


def top_recommendation(env: EnvironmentSnapshot) -> Optional[Recommendation]:
    """Best-scoring archetype if it clears the threshold, else ``None``."""
    best = generate_recommendations(env)[0]
    return best if best.recommended else None
