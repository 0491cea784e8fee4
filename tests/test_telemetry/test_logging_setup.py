from __future__ import annotations

import io
import json
import logging
from pathlib import Path

import pytest

from datebuilder import InvalidArgumentError, from_formatted_string
from datebuilder.config.models import BuilderSettings, LoggingSettings
from datebuilder.telemetry import configure_logging, configure_logging_from_settings


def _close(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_configure_logging_should_emit_json_lines() -> None:
    stream = io.StringIO()
    logger = configure_logging(level="debug", logger_name="datebuilder_test.json", stream=stream)
    try:
        logger.info("built date", extra={"zone": "UTC", "epoch_millis": 146966400000})
    finally:
        _close(logger)
    lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert lines[0]["message"] == "JSON logging configured"
    record = lines[-1]
    assert record["level"] == "INFO"
    assert record["name"] == "datebuilder_test.json"
    assert record["zone"] == "UTC"
    assert record["epoch_millis"] == 146966400000
    assert record["timestamp"].endswith("Z")
    assert "lineno" not in record


def test_configure_logging_should_serialize_exceptions() -> None:
    stream = io.StringIO()
    logger = configure_logging(logger_name="datebuilder_test.exc", stream=stream)
    try:
        try:
            from_formatted_string("not_a_date_foo")
        except InvalidArgumentError:
            logger.exception("parse failed")
    finally:
        _close(logger)
    record = json.loads(stream.getvalue().splitlines()[-1])
    assert "InvalidArgumentError" in record["exception"]


def test_configure_logging_should_write_file(tmp_path: Path) -> None:
    logger = configure_logging(log_dir=tmp_path / "logs", logger_name="datebuilder_test.file", stream=io.StringIO())
    try:
        logger.warning("file entry")
    finally:
        _close(logger)
    content = (tmp_path / "logs" / "datebuilder.jsonl").read_text(encoding="utf-8")
    assert json.loads(content.splitlines()[-1])["message"] == "file entry"


def test_configure_logging_from_settings_should_apply_level() -> None:
    settings = BuilderSettings(logging=LoggingSettings(level="WARNING", logger_name="datebuilder_test.settings"))
    logger = configure_logging_from_settings(settings, stream=io.StringIO())
    try:
        assert logger.level == logging.WARNING
        assert logger.propagate is False
    finally:
        _close(logger)


def test_builder_should_log_rejected_strings(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="datebuilder.builder")
    with pytest.raises(InvalidArgumentError):
        from_formatted_string("02_30_2013")
    assert any(record.getMessage() == "Rejected date string" for record in caplog.records)


def test_builder_should_log_construction(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="datebuilder.builder")
    from_formatted_string("08_29_1974")
    created = [record for record in caplog.records if record.getMessage() == "Builder created"]
    assert created
    assert created[-1].epoch_millis == 146966400000


@pytest.mark.parametrize("mutation", [lambda b: b.in_month(13), lambda b: b.on_day(31)])
def test_builder_should_log_range_rejections(caplog: pytest.LogCaptureFixture, mutation) -> None:
    builder = from_formatted_string("02_10_2013")
    caplog.set_level(logging.DEBUG, logger="datebuilder.builder")
    with pytest.raises(InvalidArgumentError):
        mutation(builder)
    assert any(record.getMessage() == "Rejected builder operation" for record in caplog.records)
