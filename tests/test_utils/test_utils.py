"""Tests for mission_command/utils: time helpers and logging setup."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from mission_command.config import LoggingConfig
from mission_command.utils.logging import _JsonLineFormatter, configure_logging
from mission_command.utils.time_utils import (
    epoch_millis,
    format_utc_stamp,
    to_base36,
    utcnow,
)


class TestTimeUtils:
    def test_utcnow_is_aware(self):
        assert utcnow().tzinfo is not None

    def test_epoch_millis(self):
        assert epoch_millis(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)) == 1000

    @pytest.mark.parametrize("value, expected", [(0, "0"), (35, "Z"), (36, "10"), (1295, "ZZ")])
    def test_to_base36(self, value, expected):
        assert to_base36(value) == expected

    def test_to_base36_rejects_negative(self):
        with pytest.raises(ValueError):
            to_base36(-1)

    def test_format_utc_stamp_converts_to_utc(self):
        moment = datetime(2026, 10, 19, 17, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_utc_stamp(moment) == "20261019T150000Z"


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLogging:
    def test_configure_sets_level_and_file(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "logs" / "app.log"
        configure_logging(LoggingConfig(level="WARNING", log_file=str(log_file)))

        logging.getLogger("mission_command.test").warning("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert logging.getLogger().level == logging.WARNING
        assert "hello file" in log_file.read_text(encoding="utf-8")

    def test_no_file_handler_when_blank(self, restore_root_logger):
        configure_logging(LoggingConfig(log_file=""))
        assert not any(
            isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers
        )

    def test_json_formatter_includes_extras(self):
        record = logging.LogRecord(
            "mission_command.x", logging.INFO, __file__, 1, "built %s", ("RKLB",), None
        )
        record.ticker = "RKLB"
        payload = json.loads(_JsonLineFormatter().format(record))
        assert payload["msg"] == "built RKLB"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "mission_command.x"
        assert payload["ticker"] == "RKLB"
