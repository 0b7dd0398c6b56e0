"""Tests for mission_command/config.py: TOML loading, overrides and validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mission_command.config import (
    AppConfig,
    MissionsConfig,
    StorageConfig,
    TelemetryConfig,
    _deep_merge,
    load_config,
)
from mission_command.taxonomy.mission_taxonomy import DurationBand

_ENV_VARS = [
    "MISSION_COMMAND_STORAGE_BACKEND",
    "MISSION_COMMAND_DB_PATH",
    "MISSION_COMMAND_BARS_DIR",
    "MISSION_COMMAND_LOG_LEVEL",
    "MISSION_COMMAND_DEBUG",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaultConfig:
    def test_loads_committed_defaults(self):
        config = load_config()
        assert isinstance(config, AppConfig)
        assert config.storage.backend == "json"
        assert config.storage.storage_key == "HASLUN_MISSIONS_V1"
        assert config.telemetry.default_lookback == 32
        assert config.missions.max_active == 3
        assert config.missions.default_duration_unit == DurationBand.DAY_1
        assert config.logging.level == "INFO"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")


class TestTomlLoading:
    def test_explicit_file_and_local_override(self, tmp_path):
        (tmp_path / "app.toml").write_text(
            '[storage]\nbackend = "sqlite"\ndb_path = "a.db"\n'
            "[missions]\nmax_active = 5\n",
            encoding="utf-8",
        )
        (tmp_path / "local.toml").write_text(
            '[storage]\ndb_path = "b.db"\n', encoding="utf-8"
        )
        config = load_config(tmp_path / "app.toml")
        assert config.storage.backend == "sqlite"
        assert config.storage.db_path == "b.db"
        assert config.missions.max_active == 5

    def test_env_overrides(self, tmp_path, monkeypatch):
        (tmp_path / "app.toml").write_text('[storage]\nbackend = "json"\n', encoding="utf-8")
        monkeypatch.setenv("MISSION_COMMAND_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("MISSION_COMMAND_BARS_DIR", "/tmp/bars")
        monkeypatch.setenv("MISSION_COMMAND_LOG_LEVEL", "debug")
        monkeypatch.setenv("MISSION_COMMAND_DEBUG", "true")

        config = load_config(tmp_path / "app.toml")

        assert config.storage.backend == "memory"
        assert config.telemetry.bars_dir == "/tmp/bars"
        assert config.logging.level == "DEBUG"
        assert config.debug is True

    def test_invalid_value_raises(self, tmp_path):
        (tmp_path / "app.toml").write_text('[storage]\nbackend = "redis"\n', encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(tmp_path / "app.toml")


class TestSectionValidation:
    def test_lookback_floor(self):
        with pytest.raises(ValidationError):
            TelemetryConfig(default_lookback=4)

    def test_max_active_positive(self):
        with pytest.raises(ValidationError):
            MissionsConfig(max_active=0)

    def test_default_difficulty_range(self):
        with pytest.raises(ValidationError):
            MissionsConfig(default_difficulty=4)

    def test_backend_case_insensitive(self):
        assert StorageConfig(backend="SQLite").backend == "sqlite"

    def test_blank_storage_key(self):
        with pytest.raises(ValidationError):
            StorageConfig(storage_key="  ")

    def test_frozen(self):
        config = AppConfig()
        with pytest.raises(ValidationError):
            config.debug = True  # type: ignore[misc]


class TestDeepMerge:
    def test_nested_merge(self):
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        merged = _deep_merge(base, {"a": {"y": 3}, "c": 4})
        assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
        assert base == {"a": {"x": 1, "y": 2}, "b": 1}
