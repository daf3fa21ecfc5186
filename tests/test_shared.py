"""
Unit tests for shared configuration, errors and logging.
"""

import json
import logging

import pytest
import structlog

from shared.config import MatchingConfig, get_config, reset_config
from shared.errors import ErrorResponse, RuleDefinitionError, SerializationError
from shared.logging import (
    add_correlation_context, add_service_context, clear_context,
    configure_logging, get_logger, set_evaluation_id
)


class TestConfig:
    """Test cases for MatchingConfig."""

    @pytest.fixture(autouse=True)
    def fresh_config(self):
        reset_config()
        yield
        reset_config()

    def test_defaults(self, monkeypatch):
        for name in ("MATCHING_RANDOM_SEED", "MATCHING_ENABLE_METRICS", "MATCHING_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        config = MatchingConfig(_env_file=None)

        assert config.env == "local"
        assert config.log_level == "info"
        assert config.random_seed is None
        assert config.enable_metrics is False
        assert config.float_tolerance == 1e-9

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MATCHING_RANDOM_SEED", "7")
        monkeypatch.setenv("MATCHING_ENABLE_METRICS", "true")
        monkeypatch.setenv("MATCHING_LOG_LEVEL", "debug")

        config = get_config()

        assert config.random_seed == 7
        assert config.enable_metrics is True
        assert config.log_level == "debug"

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reset_config_rereads_environment(self, monkeypatch):
        monkeypatch.setenv("MATCHING_RANDOM_SEED", "1")
        first = get_config()
        monkeypatch.setenv("MATCHING_RANDOM_SEED", "2")
        reset_config()

        assert first.random_seed == 1
        assert get_config().random_seed == 2


class TestErrors:
    """Test cases for error types."""

    def test_rule_definition_error_response(self):
        error = RuleDefinitionError("Bad condition", {"fact": "enemies_killed"})

        response = error.to_response()

        assert isinstance(response, ErrorResponse)
        assert response.code == "RULE_DEFINITION_ERROR"
        assert response.message == "Bad condition"
        assert response.details == {"fact": "enemies_killed"}

    def test_serialization_error_defaults(self):
        error = SerializationError()

        assert error.code == "SERIALIZATION_ERROR"
        assert str(error) == "Serialization failed"
        assert error.details == {}


class TestLogging:
    """Test cases for structured logging helpers."""

    @pytest.fixture(autouse=True)
    def reset_logging(self):
        yield
        clear_context()
        structlog.reset_defaults()
        logging.getLogger("fact_matching").setLevel(logging.NOTSET)

    def test_service_context(self):
        event = add_service_context(None, "info", {"logger": "fact_matching.ruleset"})

        assert event["service"] == "fact_matching"

    def test_correlation_context(self):
        evaluation_id = set_evaluation_id()

        event = add_correlation_context(None, "info", {})

        assert event["evaluation_id"] == evaluation_id

        clear_context()
        assert "evaluation_id" not in add_correlation_context(None, "info", {})

    def test_explicit_evaluation_id(self):
        assert set_evaluation_id("eval-1") == "eval-1"

    def test_configured_output_is_json(self, caplog):
        configure_logging("fact_matching", "debug")
        set_evaluation_id("eval-42")

        get_logger("fact_matching.ruleset").info("Ruleset created", rules=3)

        event = json.loads(caplog.records[-1].getMessage())
        assert event["event"] == "Ruleset created"
        assert event["rules"] == 3
        assert event["service"] == "fact_matching"
        assert event["evaluation_id"] == "eval-42"
        assert event["level"] == "info"
        assert event["timestamp"].endswith("Z")
        assert logging.getLogger("fact_matching").level == logging.DEBUG
