from __future__ import annotations

import structlog

from invierte_ya_web.config import get_settings
from invierte_ya_web.logging_config import (
    LogContext,
    _drop_secrets,
    _processors,
    _stamp_deployment,
    bind_context,
    configure_logging,
    get_logger,
    unbind_context,
)


class TestProcessors:
    def test_masks_credentials(self) -> None:
        event = {"event": "login", "password": "x", "token": "abc", "email": "a@b.co"}

        result = _drop_secrets(None, "info", event)

        assert result["password"] == "***"
        assert result["token"] == "***"
        assert result["email"] == "a@b.co"

    def test_json_events_carry_deployment(self) -> None:
        result = _stamp_deployment(None, "warn", {"event": "x"})

        assert result["level"] == "WARNING"
        assert result["app"] == get_settings().app_name

    def test_json_chain_ends_with_json_renderer(self) -> None:
        chain = _processors("json")

        assert isinstance(chain[-1], structlog.processors.JSONRenderer)
        assert _drop_secrets in chain

    def test_console_chain_ends_with_console_renderer(self) -> None:
        chain = _processors("console")

        assert isinstance(chain[-1], structlog.dev.ConsoleRenderer)
        assert _stamp_deployment not in chain


class TestContext:
    def setup_method(self) -> None:
        structlog.contextvars.clear_contextvars()

    def teardown_method(self) -> None:
        structlog.contextvars.clear_contextvars()

    def test_bind_and_unbind(self) -> None:
        bind_context(user_id="u-1")
        assert structlog.contextvars.get_contextvars() == {"user_id": "u-1"}

        unbind_context("user_id")
        assert structlog.contextvars.get_contextvars() == {}

    def test_log_context_is_temporary(self) -> None:
        with LogContext(page="/funds"):
            assert structlog.contextvars.get_contextvars()["page"] == "/funds"

        assert "page" not in structlog.contextvars.get_contextvars()


class TestConfigureLogging:
    def test_logger_works_after_configuration(self) -> None:
        configure_logging()

        logger = get_logger("tests")
        logger.info("configured", token="hidden")
