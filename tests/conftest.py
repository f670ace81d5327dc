"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config and log
directories.
"""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point platformdirs config/log locations at *tmp_path* for every test.

    Also drops the cached config manager and logger singletons so each test
    starts from defaults.
    """
    import eventrecur_cli.config as config_mod
    import eventrecur_cli.utils.logger as logger_mod

    config_mod._config_manager = None
    logger_mod._logger = None
    _drop_handlers()

    with patch("eventrecur_cli.config.user_config_dir", return_value=str(tmp_path / "config")):
        with patch("eventrecur_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
            yield tmp_path

    config_mod._config_manager = None
    logger_mod._logger = None
    _drop_handlers()


def _drop_handlers() -> None:
    app_logger = logging.getLogger("eventrecur_cli")
    for handler in list(app_logger.handlers):
        if not isinstance(handler, logging.handlers.RotatingFileHandler):
            continue
        handler.close()
        app_logger.removeHandler(handler)
