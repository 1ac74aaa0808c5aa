"""Tests for logging context helpers."""

import structlog

from ghsync.logging import LogContext, bind_context, clear_context, get_logger


def setup_function():
    clear_context()


def test_log_context_binds_and_restores():
    with LogContext(user_id="583231", operation="fetch_data"):
        context = structlog.contextvars.get_contextvars()
        assert context["user_id"] == "583231"
        assert context["operation"] == "fetch_data"

    assert "user_id" not in structlog.contextvars.get_contextvars()


def test_bind_and_clear():
    bind_context(request_id="req-1")

    assert structlog.contextvars.get_contextvars() == {"request_id": "req-1"}

    clear_context()
    assert structlog.contextvars.get_contextvars() == {}


def test_get_logger_returns_bound_logger():
    logger = get_logger("tests")

    assert hasattr(logger, "info")
    logger.info("test_event", key="value")
