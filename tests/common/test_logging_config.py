import json
import logging
import sys

import pytest

from common.logging_config import CONSOLE_FORMAT, JSONFormatter, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Drop the handlers setup_logging installs on the root logger."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        formatter = handler.formatter
        if isinstance(formatter, JSONFormatter) or (
            formatter is not None and formatter._fmt == CONSOLE_FORMAT
        ):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_setup_logging_console_only():
    logger = setup_logging("remote-sensing-setup", log_level="DEBUG")

    root = logging.getLogger()
    assert logger.name == "remote-sensing-setup"
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)
    assert root.handlers[0].stream is sys.stdout


def test_setup_logging_invalid_level_falls_back_to_info():
    setup_logging("remote-sensing-setup", log_level="LOUD")

    assert logging.getLogger().level == logging.INFO


def test_setup_logging_level_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")

    setup_logging("remote-sensing-setup")

    assert logging.getLogger().level == logging.WARNING


def test_setup_logging_writes_json_file(tmp_path):
    log_file = tmp_path / "logs" / "setup.log"

    logger = setup_logging(
        "remote-sensing-setup",
        log_level="INFO",
        enable_console=False,
        log_file_path=log_file,
    )
    logger.info("Installing formulae: gdal", extra={"phase": "brew"})
    for handler in logging.getLogger().handlers:
        handler.flush()

    entries = [json.loads(line) for line in log_file.read_text().splitlines()]
    assert len(entries) == 1
    entry = entries[0]
    assert entry["level"] == "INFO"
    assert entry["service"] == "remote-sensing-setup"
    assert entry["logger"] == "remote-sensing-setup"
    assert entry["message"] == "Installing formulae: gdal"
    assert entry["extra"] == {"phase": "brew"}


def test_json_formatter_includes_exception():
    formatter = JSONFormatter("remote-sensing-setup")
    try:
        raise RuntimeError("conda not found")
    except RuntimeError:
        record = logging.getLogger("test").makeRecord(
            "test",
            logging.ERROR,
            __file__,
            1,
            "Task failed",
            None,
            exc_info=sys.exc_info(),
        )

    entry = json.loads(formatter.format(record))

    assert entry["message"] == "Task failed"
    assert "RuntimeError: conda not found" in entry["exception"]
    assert "extra" not in entry


def test_setup_logging_closes_replaced_handlers(tmp_path):
    setup_logging(
        "remote-sensing-setup",
        enable_console=False,
        log_file_path=tmp_path / "first.log",
    )
    first = logging.getLogger().handlers[0]

    setup_logging(
        "remote-sensing-setup",
        enable_console=False,
        log_file_path=tmp_path / "second.log",
    )

    assert first not in logging.getLogger().handlers
    assert first.stream is None
