"""Tests for setup_logging."""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from travel_agency_api.app.core.logging_config import setup_logging


@pytest.fixture
def root_logger(monkeypatch):
    """Hand setup_logging a fresh root logger instead of the process-wide one.

    Pytest attaches its own capture handler to the real root logger, which
    would make setup_logging treat logging as already configured.
    """
    fresh_root = logging.RootLogger(logging.WARNING)
    get_logger = logging.getLogger
    access_logger = get_logger("uvicorn.access")
    access_level = access_logger.level

    monkeypatch.setattr(
        logging, "getLogger", lambda name=None: fresh_root if name is None else get_logger(name)
    )
    yield fresh_root
    for handler in fresh_root.handlers:
        handler.close()
    access_logger.setLevel(access_level)


def test_console_and_rotating_file_handlers(root_logger, tmp_path):
    logfile = tmp_path / "logs" / "api.log"

    returned = setup_logging("debug", str(logfile))

    assert returned is root_logger
    assert root_logger.level == logging.DEBUG
    assert any(isinstance(h, RotatingFileHandler) for h in root_logger.handlers)
    assert logging.getLogger("uvicorn.access").level == logging.WARNING

    root_logger.info("registered client %s", 7)
    for handler in root_logger.handlers:
        handler.flush()
    assert "[INFO] root: registered client 7" in logfile.read_text(encoding="utf-8")


def test_second_call_keeps_existing_handlers(root_logger):
    setup_logging("INFO")
    handlers = root_logger.handlers[:]

    setup_logging("DEBUG")

    assert root_logger.handlers == handlers
    assert root_logger.level == logging.INFO


def test_unknown_level_falls_back_to_info(root_logger):
    setup_logging("chatty")
    assert root_logger.level == logging.INFO
