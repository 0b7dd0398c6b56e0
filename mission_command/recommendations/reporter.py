"""
Recommendation report output: ASCII panels for the CLI and a JSON file.

All formatters return plain multi-line strings suitable for ``typer.echo()``.
No third-party dependencies (no ``rich``, no ``colorama``).

JSON output::

    data/outputs/recommendations/
      recommendations_RKLB_20261019T150000Z.json

Each file contains::

    {
      "_meta": {"schema_version": "v1", "ticker": "RKLB", "generated_at": "..."},
      "environment": { ...EnvironmentSnapshot... },
      "recommendations": [ {rank, type, name, ..., suitability, difficulty, ...} ]
    }
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from mission_command.models.environment import EnvironmentSnapshot
from mission_command.recommendations.ranker import Recommendation
from mission_command.taxonomy.mission_taxonomy import StatName
from mission_command.utils.time_utils import format_utc_stamp, utcnow

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1"

_BAR_WIDTH = 20


def _stat_bar(value: int) -> str:
    filled = max(0, min(_BAR_WIDTH, value * _BAR_WIDTH // 100))
    return "#" * filled + "." * (_BAR_WIDTH - filled)


def _stars(difficulty: int) -> str:
    return "*" * difficulty + "-" * (3 - difficulty)


def format_environment_panel(env: EnvironmentSnapshot) -> str:
    """Render the five stats with bars and rationale, one line each::

        RKLB  32 bars  close 24.18 @ 2026-10-19T15:00:00Z
          HULL        72  ##############......  KRE slope upward; low chop (2 flips); ...
    """
    lines = [
        f"  {env.ticker}  {env.bars_used} bars  "
        f"close {env.latest_bar.close:.2f} @ {env.latest_bar.time.isoformat()}",
    ]
    for name in StatName:
        value = env.stat(name)
        lines.append(
            f"    {name.value.upper():<10} {value:>3}  {_stat_bar(value)}  {env.why.for_stat(name)}"
        )
    return "\n".join(lines)


def format_recommendations_table(recs: list[Recommendation]) -> str:
    """Render ranked recommendations as an ASCII table::

        Rank  Mission              Fit  Diff  Rec  Why now
        ---------------------------------------------------
           1  HARVEST OPERATION     78  *--   yes  Low volatility, low threat—...
    """
    if not recs:
        return "  (no recommendations)"

    header = f"  {'Rank':>4}  {'Mission':<20} {'Fit':>4}  {'Diff':<4}  {'Rec':<3}  Why now"
    lines = [header, "  " + "-" * (len(header) - 2)]
    for rank, rec in enumerate(recs, start=1):
        lines.append(
            f"  {rank:>4}  {rec.mission_type.name:<20} {rec.suitability:>4}  "
            f"{_stars(rec.difficulty):<4}  {'yes' if rec.recommended else 'no':<3}  {rec.why_now}"
        )
    return "\n".join(lines)


def write_recommendations_json(
    env: EnvironmentSnapshot,
    recs: list[Recommendation],
    output_dir: Path,
    generated_at: Optional[datetime] = None,
) -> Path:
    """Write the snapshot and its ranked recommendations to a JSON file.

    Args:
        env:          Environment the recommendations were scored against.
        recs:         Output of ``generate_recommendations(env)``.
        output_dir:   Target directory (created if missing).
        generated_at: Timestamp for filename and metadata. Defaults to now.

    Returns:
        Path to the written JSON file.
    """
    generated_at = generated_at or utcnow()
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"recommendations_{env.ticker}_{format_utc_stamp(generated_at)}.json"

    payload = {
        "_meta": {
            "schema_version": SCHEMA_VERSION,
            "ticker": env.ticker,
            "generated_at": generated_at.isoformat(),
        },
        "environment": env.model_dump(mode="json"),
        "recommendations": [
            {"rank": rank, **rec.to_dict()} for rank, rec in enumerate(recs, start=1)
        ],
    }

    with json_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)

    logger.info("Recommendation JSON written: %s (%d entries)", json_path, len(recs))
    return json_path
