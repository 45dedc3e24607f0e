"""
Tests for SDK logging setup.
"""

import io
import json
import logging

import pytest
from rich.logging import RichHandler

import devfleet.logging as sdk_logging
from devfleet.logging import JsonLineHandler, get_logger, setup_logging


@pytest.fixture(autouse=True)
def fresh_logging():
    """Undo handlers installed by a test."""
    root = logging.getLogger(sdk_logging.ROOT_LOGGER)
    handlers, level, propagate = list(root.handlers), root.level, root.propagate
    sdk_logging._configured = False
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    root.propagate = propagate
    sdk_logging._configured = False


class TestGetLogger:
    """Tests for get_logger."""

    def test_namespaced(self):
        assert get_logger("devfleet.api.pine").name == "devfleet.api.pine"
        assert get_logger("myapp").name == "devfleet.myapp"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_rich_handler_by_default(self):
        logger = setup_logging(level="debug")
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_idempotent(self):
        logger = setup_logging()
        handler = logger.handlers[0]
        setup_logging(level="DEBUG")
        assert logger.handlers == [handler]

    def test_force_replaces(self):
        setup_logging()
        logger = setup_logging(json_mode=True, force=True)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], JsonLineHandler)

    def test_json_lines(self):
        stream = io.StringIO()
        handler = JsonLineHandler(stream)
        logger = logging.getLogger("devfleet.test_json")
        logger.addHandler(handler)
        logger.propagate = False
        try:
            logger.warning("device %s offline", "7cf02a6")
        finally:
            logger.removeHandler(handler)

        data = json.loads(stream.getvalue())
        assert data == {
            "level": "WARNING",
            "name": "devfleet.test_json",
            "message": "device 7cf02a6 offline",
        }
