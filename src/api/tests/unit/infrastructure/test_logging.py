"""Unit tests for logging configuration."""

import io
import logging

import pytest
import structlog

from infrastructure.logging import configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.NOTSET)
    logging.getLogger("asyncio").setLevel(logging.NOTSET)


class TestConfigureLogging:
    def test_json_output_without_tty(self, monkeypatch):
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.setattr("infrastructure.logging.sys.stdout", io.StringIO())

        configure_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_force_color_uses_console_renderer(self, monkeypatch):
        monkeypatch.setenv("FORCE_COLOR", "1")

        configure_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_debug_lowers_stdlib_levels(self):
        configure_logging(debug=True)

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

    def test_default_quiets_sqlalchemy(self):
        configure_logging()

        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
