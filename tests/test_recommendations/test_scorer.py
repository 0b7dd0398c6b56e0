"""
Tests for mission_command/recommendations/scorer.py.

What we test
------------
compute_suitability():
  - Each archetype follows its weighted formula.
  - ESCORT is penalised by distance from threat 45 and can exceed 100.

compute_difficulty():
  - Archetype step functions and their boundaries.
  - RECON sensors adjustment (eases at >= 70, worsens at <= 35, 1..3 bounds).

generate_why_now():
  - First matching rule wins; generic fallback otherwise.

scoring_for():
  - Every archetype has rules; unknown ids raise.
"""

from __future__ import annotations

import pytest

from mission_command.missions.catalog import UnknownMissionTypeError
from mission_command.recommendations.scorer import (
    ARCHETYPE_SCORING,
    compute_difficulty,
    compute_suitability,
    generate_why_now,
    scoring_for,
)
from mission_command.taxonomy.mission_taxonomy import MissionTypeId


# ── Suitability ───────────────────────────────────────────────────────────────

class TestSuitability:
    @pytest.mark.parametrize(
        "type_id, expected",
        [
            (MissionTypeId.RECON, 69.0),     # 65*.5 + 75*.3 + 70*.2
            (MissionTypeId.CARGO, 73.25),    # 75*.35 + 70*.35 + 75*.3
            (MissionTypeId.ESCORT, 90.5),    # 75*.5 + (50 - 20*.5) + 65*.2
            (MissionTypeId.STRIKE, 52.5),    # 30*.5 + 75*.3 + 75*.2
            (MissionTypeId.HARVEST, 71.0),   # 70*.4 + 75*.4 + 65*.2
        ],
    )
    def test_weighted_formulas(self, sample_env, type_id, expected):
        assert compute_suitability(type_id, sample_env) == pytest.approx(expected)

    def test_escort_peaks_above_100(self, env_factory):
        env = env_factory(hull=100, threat=45, sensors=100)
        assert compute_suitability(MissionTypeId.ESCORT, env) == pytest.approx(120.0)

    def test_escort_symmetric_around_target(self, env_factory):
        low = compute_suitability(MissionTypeId.ESCORT, env_factory(threat=35))
        high = compute_suitability(MissionTypeId.ESCORT, env_factory(threat=55))
        assert low == pytest.approx(high)

    def test_recon_rewards_sensors(self, env_factory):
        quiet = compute_suitability(MissionTypeId.RECON, env_factory(sensors=20))
        clear = compute_suitability(MissionTypeId.RECON, env_factory(sensors=90))
        assert clear > quiet

    def test_harvest_penalises_firepower(self, env_factory):
        calm = compute_suitability(MissionTypeId.HARVEST, env_factory(firepower=10))
        wild = compute_suitability(MissionTypeId.HARVEST, env_factory(firepower=90))
        assert calm > wild

    def test_accepts_string_ids(self, sample_env):
        assert compute_suitability("CARGO", sample_env) == pytest.approx(73.25)

    @pytest.mark.parametrize("type_id", ["cargo", " Cargo "])
    def test_string_ids_are_case_insensitive(self, sample_env, type_id):
        assert compute_suitability(type_id, sample_env) == pytest.approx(73.25)
        assert compute_difficulty(type_id, sample_env) == compute_difficulty(
            MissionTypeId.CARGO, sample_env
        )


# ── Difficulty ────────────────────────────────────────────────────────────────

class TestReconDifficulty:
    @pytest.mark.parametrize(
        "threat, sensors, expected",
        [
            (70, 50, 3),   # high threat tier, no adjustment
            (70, 30, 3),   # worsened but capped at 3
            (70, 80, 2),   # eased one star
            (50, 50, 2),
            (50, 30, 3),
            (50, 80, 1),
            (20, 50, 1),
            (20, 30, 2),
            (20, 80, 1),   # eased but floored at 1
        ],
    )
    def test_tiers_and_sensor_adjustment(self, env_factory, threat, sensors, expected):
        env = env_factory(threat=threat, sensors=sensors)
        assert compute_difficulty(MissionTypeId.RECON, env) == expected

    @pytest.mark.parametrize("threat", [10, 36, 61, 90])
    def test_more_sensors_never_harder(self, env_factory, threat):
        noisy = compute_difficulty(MissionTypeId.RECON, env_factory(threat=threat, sensors=35))
        clear = compute_difficulty(MissionTypeId.RECON, env_factory(threat=threat, sensors=70))
        assert clear < noisy or clear == 1


class TestOtherDifficulty:
    @pytest.mark.parametrize(
        "type_id, stats, expected",
        [
            (MissionTypeId.CARGO, dict(threat=80, fuel=20), 3),
            (MissionTypeId.CARGO, dict(threat=40, fuel=60), 2),
            (MissionTypeId.CARGO, dict(threat=20, fuel=80), 1),
            (MissionTypeId.ESCORT, dict(threat=75), 2),
            (MissionTypeId.ESCORT, dict(threat=10), 2),
            (MissionTypeId.ESCORT, dict(threat=70), 1),
            (MissionTypeId.ESCORT, dict(threat=20), 1),
            (MissionTypeId.STRIKE, dict(threat=66), 3),
            (MissionTypeId.STRIKE, dict(threat=65), 2),
            (MissionTypeId.STRIKE, dict(threat=41), 2),
            (MissionTypeId.STRIKE, dict(threat=40), 1),
            (MissionTypeId.HARVEST, dict(firepower=60, threat=60), 3),
            (MissionTypeId.HARVEST, dict(firepower=40, threat=40), 2),
            (MissionTypeId.HARVEST, dict(firepower=30, threat=30), 1),
        ],
    )
    def test_step_functions(self, env_factory, type_id, stats, expected):
        assert compute_difficulty(type_id, env_factory(**stats)) == expected

    @pytest.mark.parametrize("type_id", list(MissionTypeId))
    def test_sensors_only_affect_recon(self, env_factory, type_id):
        low = compute_difficulty(type_id, env_factory(threat=50, sensors=10))
        high = compute_difficulty(type_id, env_factory(threat=50, sensors=90))
        if type_id == MissionTypeId.RECON:
            assert low != high
        else:
            assert low == high


# ── Why now ───────────────────────────────────────────────────────────────────

class TestWhyNow:
    def test_sample_environment(self, sample_env):
        assert generate_why_now(MissionTypeId.RECON, sample_env) == (
            "Flow signals are clear—good conditions for reconnaissance."
        )
        assert generate_why_now(MissionTypeId.CARGO, sample_env) == (
            "Stable trend with high fuel reserves—ideal for time-based transport."
        )
        assert generate_why_now(MissionTypeId.ESCORT, sample_env) == (
            "Solid hull integrity supports structured positioning."
        )
        assert generate_why_now(MissionTypeId.STRIKE, sample_env) == (
            "Conditions support tactical strike operations."
        )
        assert generate_why_now(MissionTypeId.HARVEST, sample_env) == (
            "Low volatility, low threat—prime harvesting conditions."
        )

    def test_first_matching_rule_wins(self, env_factory):
        # sensors >= 60 is checked before threat < 40
        env = env_factory(sensors=80, threat=10)
        assert generate_why_now(MissionTypeId.RECON, env).startswith("Flow signals")

    def test_fallbacks(self, env_factory):
        env = env_factory(hull=40, firepower=50, sensors=40, fuel=40, threat=65)
        assert generate_why_now(MissionTypeId.RECON, env) == (
            "Standard conditions for sector reconnaissance."
        )
        assert generate_why_now(MissionTypeId.CARGO, env) == (
            "Conditions acceptable for cargo operations."
        )
        assert generate_why_now(MissionTypeId.ESCORT, env) == (
            "Standard escort formation conditions."
        )
        assert generate_why_now(MissionTypeId.HARVEST, env) == (
            "Range conditions may support premium collection."
        )

    def test_escort_moderate_threat_band(self, env_factory):
        for threat in (30, 45, 60):
            assert generate_why_now(MissionTypeId.ESCORT, env_factory(threat=threat)).startswith(
                "Moderate threat level"
            )

    def test_strike_high_firepower(self, env_factory):
        assert generate_why_now(MissionTypeId.STRIKE, env_factory(firepower=65)) == (
            "High volatility provides thrust for directional assault."
        )
        assert generate_why_now(MissionTypeId.STRIKE, env_factory(hull=60, firepower=50)) == (
            "Clear trend direction with adequate firepower."
        )


# ── Dispatch ──────────────────────────────────────────────────────────────────

class TestScoringFor:
    def test_every_archetype_has_rules(self):
        assert set(ARCHETYPE_SCORING) == set(MissionTypeId)

    def test_unknown_id_raises(self, sample_env):
        with pytest.raises(UnknownMissionTypeError):
            scoring_for("WARP")
        with pytest.raises(UnknownMissionTypeError):
            compute_suitability("WARP", sample_env)

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            ARCHETYPE_SCORING[MissionTypeId.RECON] = None  # type: ignore[index]
