"""Unit tests for structured logging configuration.

Tests the structlog configuration and the log entries emitted by the
election service.
"""

import json
import logging
import os
from unittest.mock import patch

import pytest
import structlog
from structlog.testing import capture_logs

from ballotbox.application.services.election_service import ElectionStateMachine
from ballotbox.domain.errors import UnauthorizedError
from ballotbox.infrastructure.observability.correlation import set_correlation_id
from ballotbox.infrastructure.observability.logging import (
    _get_log_level,
    configure_structlog,
    get_logger_for_service,
)


def _renderer(config: dict[str, object]) -> object:
    processors = config["processors"]
    assert isinstance(processors, list)
    return processors[-1]


class TestConfigureStructlog:
    """Tests for configure_structlog function."""

    def test_production_renders_json(self) -> None:
        configure_structlog(environment="production")
        assert isinstance(_renderer(structlog.get_config()), structlog.processors.JSONRenderer)

    def test_development_renders_console(self) -> None:
        configure_structlog(environment="development")
        assert isinstance(_renderer(structlog.get_config()), structlog.dev.ConsoleRenderer)

    def test_defaults_to_production(self) -> None:
        configure_structlog()
        assert isinstance(_renderer(structlog.get_config()), structlog.processors.JSONRenderer)


class TestLogLevel:
    """Tests for LOG_LEVEL handling."""

    def test_default_is_info(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert _get_log_level() == logging.INFO

    def test_reads_environment(self) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}, clear=True):
            assert _get_log_level() == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": "chatty"}, clear=True):
            assert _get_log_level() == logging.INFO


class TestJsonOutput:
    """Tests for production log output."""

    def test_json_output_structure(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_structlog(environment="production")
        set_correlation_id("test-json-output")

        get_logger_for_service("ElectionStateMachine").info("vote_cast", proposal_id=1)

        entry = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert entry["event"] == "vote_cast"
        assert entry["level"] == "info"
        assert "T" in entry["timestamp"]
        assert entry["correlation_id"] == "test-json-output"
        assert entry["service"] == "ElectionStateMachine"
        assert entry["component"] == "election"
        assert entry["proposal_id"] == 1

        set_correlation_id("")


class TestServiceLogging:
    """The election service logs accepted and rejected operations."""

    def test_accepted_operation_logged(self) -> None:
        with capture_logs() as logs:
            election = ElectionStateMachine("owner")
            election.register_voter("owner", "alice")

        entry = next(e for e in logs if e["event"] == "voter_registered")
        assert entry["log_level"] == "info"
        assert entry["operation"] == "register_voter"
        assert entry["service"] == "ElectionStateMachine"
        assert entry["voter"] == "alice"
        assert entry["sequence"] == 1

    def test_rejected_operation_logged_as_warning(self) -> None:
        with capture_logs() as logs:
            election = ElectionStateMachine("owner")
            with pytest.raises(UnauthorizedError):
                election.register_voter("mallory", "alice")

        entry = next(e for e in logs if e["event"] == "operation_rejected")
        assert entry["log_level"] == "warning"
        assert entry["error_type"] == "UnauthorizedError"
        assert entry["caller"] == "mallory"
