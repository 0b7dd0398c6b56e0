"""
Configuration for Mission Command.

Settings come from four layers, later ones winning:

  config/default.toml   committed defaults
  config/local.toml     per-machine overrides, merged table by table
  .env                  loaded into the process environment (python-dotenv)
  MISSION_COMMAND_*     environment variables, see ``_ENV_OVERRIDES``

The merged tables are validated into frozen pydantic models. Commands
take the resulting ``AppConfig``; nothing else reads the environment.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from mission_command.taxonomy.mission_taxonomy import DurationBand

# ── Sub-config models ─────────────────────────────────────────────────────────

VALID_STORAGE_BACKENDS = frozenset({"json", "sqlite", "memory"})
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class StorageConfig(BaseModel):
    """Where the mission collection is persisted."""

    model_config = ConfigDict(frozen=True)

    backend: str = "json"
    json_path: str = "data/missions/missions.json"
    db_path: str = "data/db/mission_command.db"
    storage_key: str = "HASLUN_MISSIONS_V1"
    wal_mode: bool = True
    busy_timeout_ms: int = 5000

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in VALID_STORAGE_BACKENDS:
            raise ValueError(
                f"Storage backend must be one of {sorted(VALID_STORAGE_BACKENDS)}, got '{v}'."
            )
        return v

    @field_validator("storage_key")
    @classmethod
    def validate_storage_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("storage_key must not be empty.")
        return v


class TelemetryConfig(BaseModel):
    """Bar source and lookback for environment builds."""

    model_config = ConfigDict(frozen=True)

    default_lookback: int = 32
    bars_dir: str = "data/bars"

    @field_validator("default_lookback")
    @classmethod
    def validate_lookback(cls, v: int) -> int:
        if v < 5:
            raise ValueError(f"default_lookback must be >= 5 bars, got {v}.")
        return v


class MissionsConfig(BaseModel):
    """Mission lifecycle defaults."""

    model_config = ConfigDict(frozen=True)

    max_active: int = 3
    default_difficulty: int = 2
    default_duration_unit: DurationBand = DurationBand.DAY_1
    default_target_bars: int = 32

    @field_validator("max_active", "default_target_bars")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Value must be >= 1, got {v}.")
        return v

    @field_validator("default_difficulty")
    @classmethod
    def validate_difficulty(cls, v: int) -> int:
        if not 1 <= v <= 3:
            raise ValueError(f"default_difficulty must be 1, 2 or 3, got {v}.")
        return v


class ReportingConfig(BaseModel):
    """Output locations for written reports."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs/recommendations"


class LoggingConfig(BaseModel):
    """Log level, optional log file (empty string disables it) and JSON-lines switch."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/mission_command.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{v}'; expected one of {LOG_LEVELS}.")
        return level


class AppConfig(BaseModel):
    """Every config section plus the ``debug`` switch (forces DEBUG logging)."""

    model_config = ConfigDict(frozen=True)

    storage: StorageConfig = StorageConfig()
    telemetry: TelemetryConfig = TelemetryConfig()
    missions: MissionsConfig = MissionsConfig()
    reporting: ReportingConfig = ReportingConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_CONFIG_DIRNAME = "config"
_DEFAULT_CONFIG_NAME = "default.toml"
_LOCAL_CONFIG_NAME = "local.toml"

# env var -> (section, key); section None means a top-level key
_ENV_OVERRIDES: dict[str, tuple[Optional[str], str]] = {
    "MISSION_COMMAND_STORAGE_BACKEND": ("storage", "backend"),
    "MISSION_COMMAND_DB_PATH": ("storage", "db_path"),
    "MISSION_COMMAND_BARS_DIR": ("telemetry", "bars_dir"),
    "MISSION_COMMAND_LOG_LEVEL": ("logging", "level"),
    "MISSION_COMMAND_DEBUG": (None, "debug"),
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _project_root() -> Path:
    """Nearest ancestor of this package holding ``pyproject.toml``.

    Falls back to the package's parent directory for non-editable installs.
    """
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents[:4]):
        if (candidate / "pyproject.toml").is_file():
            return candidate
    return here.parent


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build the validated ``AppConfig`` from every configuration layer.

    Args:
        config_path: TOML file to start from. Defaults to
            ``<project_root>/config/default.toml``. A ``local.toml`` next to
            it, if present, is merged on top.

    Returns:
        Frozen ``AppConfig``.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist.
        pydantic.ValidationError: If a merged value fails validation.
    """
    root = _project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    base_path = Path(config_path) if config_path else root / _CONFIG_DIRNAME / _DEFAULT_CONFIG_NAME
    if not base_path.is_file():
        raise FileNotFoundError(
            f"Config file not found: {base_path}. "
            f"Create {_CONFIG_DIRNAME}/{_DEFAULT_CONFIG_NAME} or pass --config."
        )

    raw = _read_toml(base_path)
    local_path = base_path.with_name(_LOCAL_CONFIG_NAME)
    if local_path.is_file():
        raw = _deep_merge(raw, _read_toml(local_path))

    return _build_app_config(_apply_env_overrides(raw))


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` merged in; nested tables merge key by key."""
    merged = {**base}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _deep_merge(current, value)
        merged[key] = value
    return merged


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Overlay the ``MISSION_COMMAND_*`` variables listed in ``_ENV_OVERRIDES``."""
    for var, (section, key) in _ENV_OVERRIDES.items():
        value: Any = os.environ.get(var)
        if not value:
            continue
        if key == "debug":
            value = value.strip().lower() in _TRUTHY
        target = raw if section is None else raw.setdefault(section, {})
        target[key] = value
    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Validate the merged TOML tables into ``AppConfig``.

    ``debug`` may sit at the top level or under ``[project]``; the top
    level wins.
    """
    project = raw.get("project", {})
    return AppConfig(
        storage=StorageConfig(**raw.get("storage", {})),
        telemetry=TelemetryConfig(**raw.get("telemetry", {})),
        missions=MissionsConfig(**raw.get("missions", {})),
        reporting=ReportingConfig(**raw.get("reporting", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
