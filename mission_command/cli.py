"""
Mission Command CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (environment build, mission transition, etc.).
  5. Report result to stdout.

Install and run::

    pip install -e .
    mission-command --help
    mission-command mission-types
    mission-command environment RKLB
    mission-command recommend RKLB --json-out
    mission-command create-mission RKLB STRIKE --attach-env
    mission-command start-mission MSN-XXXXXXXX-XXXX
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="mission-command",
    help="Mission Command: telemetry-driven mission planning CLI.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from mission_command.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from mission_command.utils.logging import configure_logging
    configure_logging(config.logging, debug=config.debug)


def _setup(config_path: Optional[str]):
    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    return config


def _build_manager(config):
    from mission_command.missions.lifecycle import MissionManager
    from mission_command.models.mission import MissionDuration
    from mission_command.storage.factory import build_mission_store

    return MissionManager(
        build_mission_store(config.storage),
        max_active=config.missions.max_active,
        default_difficulty=config.missions.default_difficulty,
        default_duration=MissionDuration(
            unit=config.missions.default_duration_unit,
            target_bars=config.missions.default_target_bars,
        ),
    )


def _compute_env_or_exit(config, ticker: str, lookback: Optional[int]):
    from mission_command.providers.json_file import JsonFileBarProvider
    from mission_command.telemetry.environment import compute_environment
    from mission_command.telemetry.stats import InsufficientDataError

    provider = JsonFileBarProvider(config.telemetry.bars_dir)
    try:
        return asyncio.run(
            compute_environment(ticker, provider, lookback or config.telemetry.default_lookback)
        )
    except InsufficientDataError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] Could not read bars for {ticker.upper()}: {exc}", err=True)
        raise typer.Exit(code=1)


def _format_mission_line(mission) -> str:
    return (
        f"  {mission.id}  {mission.status.value:<9}  {mission.ticker:<6}  "
        f"{mission.icon} {mission.type_name:<18}  {'*' * mission.difficulty:<3}  "
        f"{mission.duration.target_bars}x{mission.duration.unit.value}"
    )


# ── Configuration / setup ─────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
    show_full: bool = typer.Option(False, "--full", help="Print full config as JSON."),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Storage backend:  {config.storage.backend}")
    typer.echo(f"  Storage key:      {config.storage.storage_key}")
    typer.echo(f"  Bars directory:   {config.telemetry.bars_dir}")
    typer.echo(f"  Default lookback: {config.telemetry.default_lookback}")
    typer.echo(f"  Max active:       {config.missions.max_active}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("init-db")
def init_db(
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Create the SQLite mission store. Safe to run repeatedly."""
    from mission_command.db.connection import get_connection
    from mission_command.db.schema import ALL_TABLE_NAMES, apply_schema

    config = _setup(config_path)
    target_path = db_path or config.storage.db_path
    typer.echo(f"Initializing database at: {target_path}")

    with get_connection(
        target_path,
        wal_mode=config.storage.wal_mode,
        busy_timeout_ms=config.storage.busy_timeout_ms,
    ) as conn:
        apply_schema(conn)

    typer.echo(f"  Tables: {len(ALL_TABLE_NAMES)} created/verified.")
    typer.echo("[OK] Database ready.")


# ── Telemetry / recommendations ───────────────────────────────────────────────

@app.command("mission-types")
def mission_types() -> None:
    """List the mission archetypes in the catalog."""
    from mission_command.missions.catalog import get_all_mission_types

    for mt in get_all_mission_types():
        bands = ", ".join(b.value for b in mt.duration_bands)
        typer.echo(f"{mt.icon} {mt.id.value:<8} {mt.name}")
        typer.echo(f"    {mt.concept}. Betting on: {mt.betting_on}.")
        typer.echo(f"    Durations: {bands}  |  Risk: {mt.risk_profile}")


@app.command("environment")
def environment(
    ticker: str = typer.Argument(..., help="Ticker symbol, e.g. RKLB."),
    lookback: Optional[int] = typer.Option(None, "--lookback", min=5, help="Bars to use."),
    as_json: bool = typer.Option(False, "--json", help="Print the snapshot as JSON."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Compute the five vessel stats for TICKER."""
    from mission_command.recommendations.reporter import format_environment_panel

    config = _setup(config_path)
    env = _compute_env_or_exit(config, ticker, lookback)

    if as_json:
        typer.echo(json.dumps(env.model_dump(mode="json"), indent=2))
    else:
        typer.echo(format_environment_panel(env))


@app.command("recommend")
def recommend(
    ticker: str = typer.Argument(..., help="Ticker symbol, e.g. RKLB."),
    lookback: Optional[int] = typer.Option(None, "--lookback", min=5, help="Bars to use."),
    json_out: bool = typer.Option(
        False, "--json-out", help="Also write a JSON report to the reporting output dir."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Rank the mission archetypes for TICKER's current environment."""
    from mission_command.recommendations.ranker import generate_recommendations
    from mission_command.recommendations.reporter import (
        format_environment_panel,
        format_recommendations_table,
        write_recommendations_json,
    )

    config = _setup(config_path)
    env = _compute_env_or_exit(config, ticker, lookback)
    recs = generate_recommendations(env)

    typer.echo(format_environment_panel(env))
    typer.echo("")
    typer.echo(format_recommendations_table(recs))

    if json_out:
        path = write_recommendations_json(env, recs, Path(config.reporting.output_dir))
        typer.echo("")
        typer.echo(f"[OK] Report written: {path}")


# ── Mission lifecycle ─────────────────────────────────────────────────────────

@app.command("create-mission")
def create_mission(
    ticker: str = typer.Argument(..., help="Ticker symbol."),
    mission_type: str = typer.Argument(..., help="RECON, CARGO, ESCORT, STRIKE or HARVEST."),
    difficulty: Optional[int] = typer.Option(None, "--difficulty", min=1, max=3),
    unit: Optional[str] = typer.Option(None, "--unit", help="Duration band, e.g. 1D or 1W."),
    target_bars: Optional[int] = typer.Option(None, "--target-bars", min=1),
    thesis: Optional[str] = typer.Option(None, "--thesis", help="Primary thesis text."),
    notes: str = typer.Option("", "--notes"),
    attach_env: bool = typer.Option(
        False, "--attach-env", help="Compute and embed the current environment snapshot."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Plan a new mission on TICKER."""
    from pydantic import ValidationError

    from mission_command.missions.catalog import UnknownMissionTypeError, require_mission_type
    from mission_command.models.mission import MissionDuration, MissionOptions

    config = _setup(config_path)
    manager = _build_manager(config)

    try:
        require_mission_type(mission_type)
        duration = None
        if unit is not None or target_bars is not None:
            duration = MissionDuration(
                unit=unit or config.missions.default_duration_unit,
                target_bars=target_bars or config.missions.default_target_bars,
            )
        env = _compute_env_or_exit(config, ticker, None) if attach_env else None
        options = MissionOptions(
            difficulty=difficulty, duration=duration, thesis=thesis, notes=notes, env=env
        )
        mission = manager.create_mission(ticker, mission_type, options)
    except UnknownMissionTypeError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid mission options: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(_format_mission_line(mission))
    typer.echo(f"[OK] Mission {mission.id} created.")


@app.command("list-missions")
def list_missions(
    status: Optional[str] = typer.Option(
        None, "--status", help="PLANNING, ACTIVE, COMPLETED or ABANDONED."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """List stored missions."""
    from mission_command.taxonomy.mission_taxonomy import MissionStatus

    config = _setup(config_path)
    try:
        status_filter = MissionStatus(status.upper()) if status else None
    except ValueError:
        typer.echo(f"[ERROR] Unknown status '{status}'.", err=True)
        raise typer.Exit(code=1)

    missions = _build_manager(config).list_missions(status_filter)
    if not missions:
        typer.echo("  (no missions)")
        return
    for mission in missions:
        typer.echo(_format_mission_line(mission))


@app.command("log-mission")
def log_mission(
    mission_id: str = typer.Argument(...),
    message: str = typer.Argument(...),
    entry_type: str = typer.Option("info", "--type", help="system, info, note or warning."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Append a log entry to a mission."""
    from mission_command.taxonomy.mission_taxonomy import LogEntryType

    config = _setup(config_path)
    try:
        log_type = LogEntryType(entry_type.lower())
    except ValueError:
        typer.echo(f"[ERROR] Unknown log type '{entry_type}'.", err=True)
        raise typer.Exit(code=1)

    if _build_manager(config).add_mission_log(mission_id, message, log_type) is None:
        typer.echo(f"[ERROR] Mission '{mission_id}' not found.", err=True)
        raise typer.Exit(code=1)
    typer.echo("[OK] Log entry added.")


def _run_transition(config_path: Optional[str], action) -> None:
    from mission_command.missions.lifecycle import (
        ActiveMissionLimitError,
        InvalidMissionTransitionError,
        MissionNotFoundError,
    )

    config = _setup(config_path)
    try:
        mission = action(_build_manager(config))
    except (MissionNotFoundError, InvalidMissionTransitionError, ActiveMissionLimitError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(_format_mission_line(mission))
    typer.echo(f"[OK] Mission {mission.id} is now {mission.status.value}.")


@app.command("start-mission")
def start_mission(
    mission_id: str = typer.Argument(...),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Launch a planned mission (PLANNING → ACTIVE)."""
    _run_transition(config_path, lambda m: m.start_mission(mission_id))


@app.command("complete-mission")
def complete_mission(
    mission_id: str = typer.Argument(...),
    result: str = typer.Option(..., "--result", help="SUCCESS, PARTIAL or FAILURE."),
    notes: str = typer.Option("", "--notes"),
    close: Optional[float] = typer.Option(None, "--close", help="Underlying close at resolution."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Resolve an active mission (ACTIVE → COMPLETED)."""
    from mission_command.taxonomy.mission_taxonomy import OutcomeResult

    try:
        outcome = OutcomeResult(result.upper())
    except ValueError:
        typer.echo(f"[ERROR] Unknown result '{result}'.", err=True)
        raise typer.Exit(code=1)
    _run_transition(
        config_path, lambda m: m.complete_mission(mission_id, outcome, notes=notes, close=close)
    )


@app.command("abandon-mission")
def abandon_mission(
    mission_id: str = typer.Argument(...),
    reason: str = typer.Option("", "--reason"),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Abandon a planned or active mission."""
    _run_transition(config_path, lambda m: m.abandon_mission(mission_id, reason=reason))


@app.command("delete-mission")
def delete_mission(
    mission_id: str = typer.Argument(...),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Remove a mission from storage."""
    config = _setup(config_path)
    if not _build_manager(config).delete_mission(mission_id):
        typer.echo(f"[ERROR] Mission '{mission_id}' not found.", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"[OK] Mission {mission_id} deleted.")


if __name__ == "__main__":
    app()
