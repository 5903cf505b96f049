"""Tests for configuration module."""

import json
import os
import pytest
from unittest.mock import patch

from incidentrelay.infrastructure.config import (
    IncidentRelayConfig,
    PagerDutyConfig,
    TelemetryConfig,
    load_config,
)


class TestDefaultConfig:
    """Test defaults when no config file exists."""
    def test_defaults(self):
        """Test default values of every section."""
        config = load_config(path="/nonexistent/incidentrelay.json")
        assert config.log_level == "WARNING"
        assert config.pagerduty.base_url == "https://api.pagerduty.com"
        assert config.pagerduty.from_email == "ivan@0xparc.org"
        assert config.pagerduty.timeout == 10.0
        assert config.telemetry.endpoint == ""
        assert config.telemetry.insecure is False

    def test_all_sections_present(self):
        """Test that every section is built."""
        config = load_config(path="/nonexistent/incidentrelay.json")
        assert isinstance(config, IncidentRelayConfig)
        assert isinstance(config.pagerduty, PagerDutyConfig)
        assert isinstance(config.telemetry, TelemetryConfig)


class TestFileConfig:
    """Test loading from a JSON file."""
    def test_load_from_file(self, tmp_path):
        """Test that file values are applied."""
        config_file = tmp_path / "incidentrelay.json"
        config_file.write_text(json.dumps({
            "log_level": "DEBUG",
            "pagerduty": {"from_email": "oncall@example.com", "timeout": 5},
            "telemetry": {"endpoint": "http://localhost:4317"},
        }))

        config = load_config(path=str(config_file))
        assert config.log_level == "DEBUG"
        assert config.pagerduty.from_email == "oncall@example.com"
        assert config.pagerduty.timeout == 5
        assert config.telemetry.endpoint == "http://localhost:4317"

    def test_partial_config(self, tmp_path):
        """Test that missing keys keep their defaults."""
        config_file = tmp_path / "incidentrelay.json"
        config_file.write_text(json.dumps({"pagerduty": {"timeout": 3.5}}))

        config = load_config(path=str(config_file))
        assert config.pagerduty.timeout == 3.5
        assert config.pagerduty.base_url == "https://api.pagerduty.com"  # default preserved
        assert config.telemetry.service_name == "incidentrelay"  # default preserved

    def test_invalid_json_returns_defaults(self, tmp_path):
        """Test that unparseable JSON yields defaults."""
        config_file = tmp_path / "incidentrelay.json"
        config_file.write_text("not valid json{{{")

        config = load_config(path=str(config_file))
        assert config.pagerduty.timeout == 10.0  # defaults

    def test_unknown_keys_ignored(self, tmp_path):
        """Test that unknown keys are dropped."""
        config_file = tmp_path / "incidentrelay.json"
        config_file.write_text(json.dumps({
            "pagerduty": {"timeout": 3, "unknown_key": "ignored"},
        }))

        config = load_config(path=str(config_file))
        assert config.pagerduty.timeout == 3


class TestEnvOverride:
    """Test environment variable overrides."""
    def test_env_overrides_file(self, tmp_path):
        """Test that env values win over file values."""
        config_file = tmp_path / "incidentrelay.json"
        config_file.write_text(json.dumps({"pagerduty": {"timeout": 3}}))

        with patch.dict(os.environ, {"INCIDENTRELAY_PAGERDUTY_TIMEOUT": "7.5"}):
            config = load_config(path=str(config_file))

        assert config.pagerduty.timeout == 7.5

    def test_env_field_with_underscore(self):
        """Test env keys for fields containing underscores."""
        with patch.dict(
            os.environ, {"INCIDENTRELAY_PAGERDUTY_FROM_EMAIL": "pager@example.com"}
        ):
            config = load_config(path="/nonexistent/incidentrelay.json")

        assert config.pagerduty.from_email == "pager@example.com"

    def test_env_bool_conversion(self):
        """Test that env strings convert to bool."""
        with patch.dict(os.environ, {"INCIDENTRELAY_TELEMETRY_INSECURE": "true"}):
            config = load_config(path="/nonexistent/incidentrelay.json")

        assert config.telemetry.insecure is True

    def test_env_log_level(self):
        """Test the top-level log_level override."""
        with patch.dict(os.environ, {"INCIDENTRELAY_LOG_LEVEL": "INFO"}):
            config = load_config(path="/nonexistent/incidentrelay.json")

        assert config.log_level == "INFO"

    def test_custom_prefix(self):
        """Test overrides with a custom prefix."""
        with patch.dict(os.environ, {"MYAPP_PAGERDUTY_BASE_URL": "http://localhost:9000"}):
            config = load_config(
                path="/nonexistent/incidentrelay.json", env_prefix="MYAPP"
            )

        assert config.pagerduty.base_url == "http://localhost:9000"


class TestConfigImmutability:
    """Test that loaded config is frozen."""
    def test_frozen(self):
        """Test that the root config is immutable."""
        config = load_config(path="/nonexistent/incidentrelay.json")
        with pytest.raises(AttributeError):
            config.log_level = "DEBUG"

    def test_sub_config_frozen(self):
        """Test that sections are immutable."""
        config = load_config(path="/nonexistent/incidentrelay.json")
        with pytest.raises(AttributeError):
            config.pagerduty.timeout = 1.0


class TestMalformedConfig:
    """Test that malformed input falls back to defaults."""

    def test_null_section_uses_defaults(self, tmp_path):
        """Test that a null section is treated as empty."""
        config_file = tmp_path / "incidentrelay.json"
        config_file.write_text(json.dumps({"pagerduty": None, "telemetry": "nope"}))

        config = load_config(path=str(config_file))
        assert config.pagerduty == PagerDutyConfig()
        assert config.telemetry == TelemetryConfig()

    def test_top_level_array_uses_defaults(self, tmp_path):
        """Test that a JSON array instead of an object yields defaults."""
        config_file = tmp_path / "incidentrelay.json"
        config_file.write_text(json.dumps(["log_level", "DEBUG"]))

        config = load_config(path=str(config_file))
        assert config == IncidentRelayConfig()

    def test_env_override_on_null_section(self, tmp_path):
        """Test that an env override still applies over a null section."""
        config_file = tmp_path / "incidentrelay.json"
        config_file.write_text(json.dumps({"pagerduty": None}))

        with patch.dict(os.environ, {"INCIDENTRELAY_PAGERDUTY_TIMEOUT": "4"}):
            config = load_config(path=str(config_file))

        assert config.pagerduty.timeout == 4.0

    def test_non_numeric_env_value_ignored(self):
        """Test that an unparseable number keeps the default."""
        with patch.dict(os.environ, {"INCIDENTRELAY_PAGERDUTY_TIMEOUT": "soon"}):
            config = load_config(path="/nonexistent/incidentrelay.json")

        assert config.pagerduty.timeout == 10.0
