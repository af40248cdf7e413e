from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from ebr.errors import EbrSettingsInvalidError
from ebr.log import configure_logging
from ebr.models import RetryPolicy
from ebr.settings import RetrySettings, executor_from_env, load_settings, load_settings_from_env


def test_load_settings_from_env_uses_defaults_when_unset() -> None:
    settings = load_settings_from_env({})

    assert settings == RetrySettings(max_retries=3, base_delay_ms=100, backoff_factor=2.0)


def test_load_settings_from_env_parses_values() -> None:
    settings = load_settings_from_env(
        {
            "EBR_MAX_RETRIES": "5",
            "EBR_BASE_DELAY_MS": " 250 ",
            "EBR_BACKOFF_FACTOR": "1.5",
        }
    )

    assert settings.to_policy() == RetryPolicy(max_retries=5, base_delay_ms=250.0, backoff_factor=1.5)


def test_blank_env_values_fall_back_to_defaults() -> None:
    settings = load_settings_from_env({"EBR_MAX_RETRIES": "  "})

    assert settings.max_retries == 3


def test_unparsable_env_value_raises_coded_error() -> None:
    with pytest.raises(EbrSettingsInvalidError) as exc_info:
        load_settings_from_env({"EBR_BACKOFF_FACTOR": "fast"})

    assert exc_info.value.code == "EBR_SETTINGS_INVALID"
    assert exc_info.value.field == "backoff_factor"
    assert exc_info.value.value == "fast"


def test_settings_do_not_clamp_out_of_range_values() -> None:
    settings = load_settings({"max_retries": 0, "base_delay_ms": 0, "backoff_factor": 0.25})

    assert settings.to_policy() == RetryPolicy(max_retries=0, base_delay_ms=0, backoff_factor=0.25)


def test_executor_from_env_builds_executor_with_policy() -> None:
    delays: list[float] = []
    executor = executor_from_env(
        {"EBR_MAX_RETRIES": "2", "EBR_BASE_DELAY_MS": "40", "EBR_BACKOFF_FACTOR": "2"},
        sleep_fn=delays.append,
    )

    result = executor.execute("OK", lambda: "NG").result(timeout=5)

    assert result == "NG"
    assert [round(delay * 1000) for delay in delays] == [40, 80]


def test_configure_logging_adds_handlers_once(tmp_path: Path) -> None:
    logger = logging.getLogger("ebr")
    original_handlers = list(logger.handlers)
    try:
        configure_logging(level_name="debug", log_dir=tmp_path)
        configure_logging(level_name="debug", log_dir=tmp_path)

        added = [handler for handler in logger.handlers if handler not in original_handlers]
        file_handlers = [handler for handler in added if isinstance(handler, TimedRotatingFileHandler)]
        stream_handlers = [handler for handler in added if not isinstance(handler, logging.FileHandler)]

        assert logger.level == logging.DEBUG
        assert len(file_handlers) == 1
        assert len(stream_handlers) <= 1
        assert (tmp_path / "ebr.log").exists()
    finally:
        for handler in list(logger.handlers):
            if handler not in original_handlers:
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(logging.NOTSET)
