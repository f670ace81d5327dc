"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import logging.handlers

from eventrecur_cli.utils.logger import get_logger


def test_get_logger_creates_log_file(isolated_dirs):
    """Logger creates the log file inside user_log_dir."""
    logger = get_logger()

    assert (isolated_dirs / "logs" / "eventrecur.log").exists()
    assert isinstance(logger, logging.Logger)


def test_get_logger_returns_singleton():
    assert get_logger() is get_logger()


def test_get_logger_writes_message(isolated_dirs):
    logger = get_logger()
    logger.info("hello from test")
    for handler in logger.handlers:
        handler.flush()

    content = (isolated_dirs / "logs" / "eventrecur.log").read_text()
    assert "hello from test" in content
    assert "INFO" in content


def test_logger_uses_rotating_handler():
    logger = get_logger()
    handlers = [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
    assert len(handlers) == 1
    assert handlers[0].maxBytes == 5 * 1024 * 1024
    assert handlers[0].backupCount == 3


def test_logger_does_not_propagate():
    assert get_logger().propagate is False


def test_module_loggers_reach_the_log_file(isolated_dirs):
    """Engine loggers named eventrecur_cli.* write through the app logger."""
    get_logger()
    logging.getLogger("eventrecur_cli.recurrence").debug("generated 4 dates")

    content = (isolated_dirs / "logs" / "eventrecur.log").read_text()
    assert "[eventrecur_cli.recurrence] generated 4 dates" in content


def test_file_handler_added_alongside_existing_handlers(isolated_dirs):
    """A handler attached beforehand does not suppress the log file."""
    app_logger = logging.getLogger("eventrecur_cli")
    stream_handler = logging.StreamHandler()
    app_logger.addHandler(stream_handler)
    try:
        logger = get_logger()
        logger.info("written despite another handler")

        assert stream_handler in logger.handlers
        content = (isolated_dirs / "logs" / "eventrecur.log").read_text()
        assert "written despite another handler" in content
    finally:
        app_logger.removeHandler(stream_handler)


def test_file_handler_not_duplicated_after_reset(isolated_dirs):
    import eventrecur_cli.utils.logger as logger_mod

    get_logger()
    logger_mod._logger = None
    logger = get_logger()

    handlers = [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
    assert len(handlers) == 1
