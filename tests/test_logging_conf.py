# tests/test_logging_conf.py
"""
Logging Configuration Tests - Root Handler Setup

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- geofx.shared.logging_conf (setup_logging)
"""
import logging
from logging.handlers import RotatingFileHandler

import pytest

from geofx.shared.logging_conf import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_file_only(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "logs" / "geofx.log"
        handlers = setup_logging(level=logging.DEBUG, log_file=log_file, log_to_stdout=False)

        assert [type(h) for h in handlers] == [RotatingFileHandler]
        assert restore_root_logger.level == logging.DEBUG

        logging.getLogger("geofx.test").warning("cache miss")
        handlers[0].flush()
        text = log_file.read_text(encoding="utf-8")
        assert "WARNING geofx.test :: cache miss" in text

    def test_stdout_and_file(self, tmp_path, restore_root_logger):
        handlers = setup_logging(log_file=tmp_path / "geofx.log", log_to_stdout=True)
        assert len(handlers) == 2
        assert isinstance(handlers[0], logging.StreamHandler)

    def test_nothing_requested_is_silent(self, restore_root_logger):
        handlers = setup_logging(log_to_stdout=False)
        assert [type(h) for h in handlers] == [logging.NullHandler]
