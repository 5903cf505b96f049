"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to all incidentrelay settings
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- PagerDuty credentials are read by the notifier bootstrap from
  PAGER_DUTY_API_KEY / PAGER_DUTY_SERVICE_ID, not from this file
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import dataclasses
import json
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_PAGERDUTY_URL = "https://api.pagerduty.com"
DEFAULT_FROM_EMAIL = "ivan@0xparc.org"


@dataclass(frozen=True)
class PagerDutyConfig:
    """PagerDuty REST API settings."""
    base_url: str = DEFAULT_PAGERDUTY_URL
    from_email: str = DEFAULT_FROM_EMAIL
    timeout: float = 10.0


@dataclass(frozen=True)
class TelemetryConfig:
    """OpenTelemetry configuration."""
    endpoint: str = ""
    insecure: bool = False
    service_name: str = "incidentrelay"


@dataclass(frozen=True)
class IncidentRelayConfig:
    """Root configuration for incidentrelay."""
    pagerduty: PagerDutyConfig = field(default_factory=PagerDutyConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    log_level: str = "WARNING"


def _env_override(data: dict, prefix: str = "INCIDENTRELAY") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern INCIDENTRELAY_SECTION_KEY.
    For example: INCIDENTRELAY_PAGERDUTY_TIMEOUT=5,
    INCIDENTRELAY_TELEMETRY_ENDPOINT=http://localhost:4317
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        parts = key[len(prefix) + 1:].lower().split("_", 1)
        if len(parts) == 2 and parts[0] in ("pagerduty", "telemetry"):
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
        else:
            data["_".join(parts)] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Invalid config file %s: expected a JSON object", path)
        return {}
    return data


def _section(data: dict, name: str) -> dict:
    """Return a config section, treating a non-object section as empty."""
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        logger.warning("Ignoring config section %r: expected an object", name)
        return {}
    return section


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    # Convert strings from the environment to the declared field type
    for f in dataclasses.fields(cls):
        if f.name in filtered and isinstance(filtered[f.name], str):
            value = filtered[f.name]
            try:
                if f.type == "int":
                    filtered[f.name] = int(value)
                elif f.type == "float":
                    filtered[f.name] = float(value)
                elif f.type == "bool":
                    filtered[f.name] = value.lower() in ("true", "1", "yes")
            except ValueError:
                logger.warning(
                    "Ignoring invalid %s.%s value %r", cls.__name__, f.name, value
                )
                del filtered[f.name]

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "INCIDENTRELAY",
) -> IncidentRelayConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (INCIDENTRELAY_SECTION_KEY)
    2. Config file values
    3. Defaults

    Invalid files, non-object sections and unparseable values fall back to
    defaults.

    Args:
        path: Path to config file (JSON). Defaults to incidentrelay.json in CWD.
        env_prefix: Environment variable prefix. Defaults to INCIDENTRELAY.
    """
    config_path = Path(path) if path else Path("incidentrelay.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    return IncidentRelayConfig(
        pagerduty=_build_sub_config(PagerDutyConfig, _section(data, "pagerduty")),
        telemetry=_build_sub_config(TelemetryConfig, _section(data, "telemetry")),
        log_level=str(data.get("log_level") or "WARNING"),
    )
