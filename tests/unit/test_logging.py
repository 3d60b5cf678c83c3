"""Tests for structured logging."""

import structlog

from copydesk.logging import bind_context, clear_context, configure_structlog, get_logger
from copydesk.logging.structured import add_service_info


class TestStructlog:
    """Tests for the structlog configuration helpers."""

    def test_add_service_info(self):
        event = add_service_info(None, "info", {"event": "copy_entry_created"})
        assert event["service"] == "copydesk"

    def test_get_logger_returns_usable_logger(self):
        configure_structlog(json_format=True, log_level="INFO")
        logger = get_logger("tests.logging")
        logger.info("test_event", entry_id="abc")

    def test_bind_and_clear_context(self):
        clear_context()
        bind_context(request_id="req-1", user_id="user-1")
        context = structlog.contextvars.get_contextvars()
        assert context == {"request_id": "req-1", "user_id": "user-1"}

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_bind_context_skips_empty_values(self):
        clear_context()
        bind_context(request_id=None, user_id=None)
        assert structlog.contextvars.get_contextvars() == {}
