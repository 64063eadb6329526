from __future__ import annotations

import logging
from io import StringIO

import sheetdiff.logging.init
from sheetdiff.logging.init import LabeledFormatter, enable_debug, get_logger, log_summary, setup_logging


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()

    assert logger.name == "sheetdiff"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_logging_labeled_prefixes():
    captured_output = StringIO()

    logger = logging.getLogger("test_sheetdiff_labels")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(25, "SUMMARY")
    handler = logging.StreamHandler(captured_output)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(25, "Test summary message")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_get_logger_returns_configured_logger():
    setup_logger = setup_logging()
    assert get_logger() is setup_logger


def test_setup_logging_idempotent():
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 1


def test_module_loggers_share_handler(capsys):
    setup_logging()
    logging.getLogger("sheetdiff.engine.keys").info("child message")
    assert "INFO child message" in capsys.readouterr().out


def test_enable_debug(capsys):
    logger = setup_logging()
    enable_debug(logger)
    assert logger.level == logging.DEBUG
    assert "DEBUG debug mode enabled" in capsys.readouterr().out


def test_log_summary_convenience_function(capsys):
    setup_logging()
    log_summary("added=1 deleted=0 modified=0 unchanged=2 original_rows=2 updated_rows=3")
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ["SUMMARY added=1 deleted=0 modified=0 unchanged=2 original_rows=2 updated_rows=3"]


def test_reset_logging():
    setup_logging()
    sheetdiff.logging.init.reset_logging()
    assert sheetdiff.logging.init._logger is None
