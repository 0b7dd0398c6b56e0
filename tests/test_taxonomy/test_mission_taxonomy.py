"""Tests for mission taxonomy integrity: enum values and the state machine."""

from __future__ import annotations

import pytest

from mission_command.taxonomy.mission_taxonomy import (
    TERMINAL_STATUSES,
    VALID_TRANSITIONS,
    DurationBand,
    LogEntryType,
    MissionStatus,
    MissionTypeId,
    OutcomeResult,
    StatName,
)

ALL_ENUMS = [MissionTypeId, StatName, MissionStatus, LogEntryType, OutcomeResult, DurationBand]


class TestEnums:
    @pytest.mark.parametrize("enum_cls", ALL_ENUMS)
    def test_all_values_are_strings(self, enum_cls):
        for member in enum_cls:
            assert isinstance(member.value, str)
            assert member == member.value

    @pytest.mark.parametrize("enum_cls", ALL_ENUMS)
    def test_no_duplicate_values(self, enum_cls):
        values = [m.value for m in enum_cls]
        assert len(values) == len(set(values)), f"{enum_cls.__name__} has duplicate values"

    def test_five_archetypes(self):
        assert {m.value for m in MissionTypeId} == {"RECON", "CARGO", "ESCORT", "STRIKE", "HARVEST"}

    def test_stat_order(self):
        assert [s.value for s in StatName] == ["hull", "firepower", "sensors", "fuel", "threat"]

    def test_duration_band_labels(self):
        assert [b.value for b in DurationBand] == ["45m", "4H", "1D", "1W", "2W", "1M"]


class TestStateMachine:
    def test_every_status_has_an_entry(self):
        assert set(VALID_TRANSITIONS) == set(MissionStatus)

    def test_planning_edges(self):
        assert VALID_TRANSITIONS[MissionStatus.PLANNING] == {
            MissionStatus.ACTIVE,
            MissionStatus.ABANDONED,
        }

    def test_active_edges(self):
        assert VALID_TRANSITIONS[MissionStatus.ACTIVE] == {
            MissionStatus.COMPLETED,
            MissionStatus.ABANDONED,
        }

    def test_terminal_statuses(self):
        assert TERMINAL_STATUSES == {MissionStatus.COMPLETED, MissionStatus.ABANDONED}

    def test_no_edges_back_to_planning(self):
        for targets in VALID_TRANSITIONS.values():
            assert MissionStatus.PLANNING not in targets
