"""Tests for shared observability logging."""

import logging
import time

import pytest

from collab_engine.observability.logging import UnknownLogLevelError, get_logger, set_log_level


def test_get_logger_formats_utc_timestamps(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    fixed = time.struct_time((2020, 1, 2, 3, 4, 5, 3, 2, 0))

    def fake_gmtime(_: float | None = None) -> time.struct_time:
        return fixed

    monkeypatch.setattr(time, "gmtime", fake_gmtime)

    name = "collab_engine.test.logging"
    logger = get_logger(name)
    logger.info("Hello")

    captured = capsys.readouterr()
    assert "2020-01-02T03:04:05+0000 INFO collab_engine.test.logging: Hello" in captured.err


def test_get_logger_is_singleton_per_name() -> None:
    name = "collab_engine.test.logging.singleton"
    logger = get_logger(name)
    logger_again = get_logger(name)

    assert logger is logger_again
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
    assert logger.propagate is False


def test_set_log_level_applies_to_engine_loggers_only() -> None:
    engine_logger = get_logger("collab_engine.test.logging.levels")
    other_logger = logging.getLogger("someone_else.logging.levels")
    other_logger.setLevel(logging.INFO)

    try:
        assert set_log_level("DEBUG") == logging.DEBUG
        assert engine_logger.level == logging.DEBUG
        assert other_logger.level == logging.INFO
    finally:
        set_log_level("info")


def test_set_log_level_rejects_unknown_names() -> None:
    with pytest.raises(UnknownLogLevelError, match="verbose"):
        set_log_level("verbose")
