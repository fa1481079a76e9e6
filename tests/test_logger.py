"""Tests for the structured category logger"""

import io

import pytest

from plunge.models.enums import LogCategory, LogLevel
from plunge.utils.logger import Logger, configure_logger, get_logger


@pytest.fixture
def stream():
    return io.StringIO()


class TestLogger:

    def test_message_and_details(self, stream):
        logger = Logger(use_colors=False, stream=stream)

        logger.info(LogCategory.BRIDGE, "Connection #1: closed", duration_ms=12, connection=1)

        lines = stream.getvalue().splitlines()
        assert "BRIDGE" in lines[0]
        assert "✓ Connection #1: closed" in lines[0]
        assert lines[1].strip() == "├─ duration_ms: 12"
        assert lines[2].strip() == "└─ connection: 1"

    def test_min_level_filters(self, stream):
        logger = Logger(min_level=LogLevel.WARN, use_colors=False, stream=stream)

        logger.info(LogCategory.API, "hidden")
        logger.warn(LogCategory.API, "shown")

        output = stream.getvalue()
        assert "hidden" not in output
        assert "⚠ shown" in output

    def test_no_colors(self, stream):
        Logger(use_colors=False, stream=stream).error(LogCategory.SYSTEM, "boom")
        assert "\033[" not in stream.getvalue()

    def test_bound_logger_category_override(self, stream):
        log = Logger(use_colors=False, stream=stream).for_category(LogCategory.API)

        log.info("request")
        log.with_category(LogCategory.DEMO).info("demo request")

        lines = stream.getvalue().splitlines()
        assert lines[0].split()[1] == "API"
        assert lines[1].split()[1] == "DEMO"


class TestConfigureLogger:

    def test_updates_singleton_in_place(self, stream):
        bound = get_logger().for_category(LogCategory.CONFIG)
        try:
            configure_logger(min_level=LogLevel.DEBUG, use_colors=False, stream=stream)
            bound.debug("visible after configure")
        finally:
            configure_logger()

        assert "visible after configure" in stream.getvalue()
        assert get_logger().stream is None
