"""Tests for countdown.logs module."""

import logging
import os
from unittest.mock import patch

import pytest

from countdown.config import ENV_LOG_FILE, ENV_LOG_LEVEL
from countdown.logs import setup_logging


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    pkg_logger = logging.getLogger("countdown")
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True


class TestSetupLogging:
    def test_null_handler_without_log_file(self):
        with patch.dict(os.environ, {}, clear=True):
            pkg_logger = setup_logging()
        assert [type(h) for h in pkg_logger.handlers] == [logging.NullHandler]
        assert pkg_logger.propagate is False

    def test_file_from_environment(self, tmp_path):
        log_file = tmp_path / "countdown.log"
        with patch.dict(os.environ, {ENV_LOG_FILE: str(log_file)}, clear=True):
            pkg_logger = setup_logging()
        logging.getLogger("countdown.session").info("paused at 00:10")
        for handler in pkg_logger.handlers:
            handler.flush()
        assert "paused at 00:10" in log_file.read_text(encoding="utf-8")

    def test_level_from_environment(self, tmp_path):
        env = {ENV_LOG_FILE: str(tmp_path / "c.log"), ENV_LOG_LEVEL: "debug"}
        with patch.dict(os.environ, env, clear=True):
            pkg_logger = setup_logging()
        assert pkg_logger.level == logging.DEBUG

    def test_explicit_arguments_win(self, tmp_path):
        with patch.dict(os.environ, {ENV_LOG_LEVEL: "debug"}, clear=True):
            pkg_logger = setup_logging(str(tmp_path / "x.log"), "warning")
        assert pkg_logger.level == logging.WARNING

    def test_repeated_setup_does_not_stack_handlers(self, tmp_path):
        path = str(tmp_path / "c.log")
        setup_logging(path)
        pkg_logger = setup_logging(path)
        assert len(pkg_logger.handlers) == 1
