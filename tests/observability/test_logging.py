"""Tests for shared observability logging."""

import logging
import time
from collections.abc import Iterator

import pytest

from docpub.observability import logging as logging_module
from docpub.observability.logging import UnknownLogLevelError, get_logger, set_log_level


@pytest.fixture(autouse=True)
def restore_level() -> Iterator[None]:
    yield
    set_log_level(logging.INFO)


def test_get_logger_formats_utc_timestamps(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    fixed = time.struct_time((2020, 1, 2, 3, 4, 5, 3, 2, 0))

    def fake_gmtime(_: float | None = None) -> time.struct_time:
        return fixed

    monkeypatch.setattr(time, "gmtime", fake_gmtime)

    logger = get_logger("docpub.test.logging")
    logger.warning("Retrying request")

    captured = capsys.readouterr()
    assert "2020-01-02T03:04:05+0000 WARNING docpub.test.logging: Retrying request" in captured.err


def test_get_logger_is_singleton_per_name() -> None:
    name = "docpub.test.logging.singleton"
    logger = get_logger(name)
    logger_again = get_logger(name)

    assert logger is logger_again
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
    assert logger.propagate is False


def test_set_log_level_updates_existing_and_new_loggers() -> None:
    existing = get_logger("docpub.test.logging.existing")

    applied = set_log_level("error")
    created = get_logger("docpub.test.logging.created")

    assert applied == logging.ERROR
    assert existing.level == logging.ERROR
    assert created.level == logging.ERROR
    assert logging_module._level == logging.ERROR


def test_set_log_level_rejects_unknown_names() -> None:
    with pytest.raises(UnknownLogLevelError, match="chatty"):
        set_log_level("chatty")
