"""
Tests for logging setup, formatters and the file handler fallback.
"""

import json
import logging

import pytest

from holter_clinic.core.logging_config import (
    ConsoleFormatter,
    JSONFormatter,
    log_performance,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            handler.close()
            root.removeHandler(handler)
    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved_level)


def _record(message="Appointment booked", level=logging.INFO):
    return logging.LogRecord(
        name="holter_clinic.test",
        level=level,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )


def test_json_formatter_includes_context():
    record = _record()
    record.context = {"appointment_id": "APP-1"}

    data = json.loads(JSONFormatter().format(record))

    assert data["level"] == "INFO"
    assert data["message"] == "Appointment booked"
    assert data["context"] == {"appointment_id": "APP-1"}


def test_console_formatter_leaves_record_untouched():
    record = _record(level=logging.WARNING)

    output = ConsoleFormatter("%(levelname)s %(message)s").format(record)

    assert "WARNING" in output
    assert "\033[33m" in output
    assert record.levelname == "WARNING"


def test_json_formatter_uses_record_creation_time():
    record = _record()
    record.created = 1721469600.0  # 2024-07-20 10:00:00 UTC

    data = json.loads(JSONFormatter().format(record))

    assert data["timestamp"].startswith("2024-07-20T10:00:00")
    assert "context" not in data


def test_console_formatter_appends_context_pairs():
    record = _record()
    record.context = {"appointment_id": "APP-1", "holter_id": "HR-1"}

    output = ConsoleFormatter("%(message)s").format(record)

    assert output == "Appointment booked [appointment_id=APP-1 holter_id=HR-1]"
    assert record.getMessage() == "Appointment booked"


def test_setup_logging_writes_log_files(tmp_path, restore_root_logger):
    setup_logging(log_level="DEBUG", log_to_file=True, log_dir=tmp_path)

    logging.getLogger("holter_clinic.test").error("Scan failed")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert restore_root_logger.level == logging.DEBUG
    assert (tmp_path / "holter_clinic.log").exists()
    errors = (tmp_path / "holter_clinic_errors.log").read_text(encoding="utf-8")
    assert json.loads(errors.splitlines()[-1])["message"] == "Scan failed"


def test_setup_logging_falls_back_to_console(tmp_path, restore_root_logger):
    not_a_dir = tmp_path / "occupied"
    not_a_dir.write_text("")

    setup_logging(log_to_file=True, log_dir=not_a_dir)

    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0], logging.StreamHandler)


def test_log_performance_context(caplog):
    with caplog.at_level(logging.INFO, logger="holter_clinic.performance"):
        log_performance("scan_overdue", 12.3456, new_notifications=2)

    record = caplog.records[-1]
    assert record.context == {
        "function": "scan_overdue",
        "duration_ms": 12.35,
        "new_notifications": 2,
    }
