"""Server configuration — identity, protocol version, logging and telemetry."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from toolbridge.protocol.models import PROTOCOL_VERSION

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(Exception):
    """Raised when a configuration file fails parsing or validation."""


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class ServerConfig(BaseModel):
    """Settings for one server process."""

    name: str = Field(default="mcp-server", description="Reported as serverInfo.name.")
    version: str = Field(default="0.1.0", description="Reported as serverInfo.version.")
    protocol_version: str = PROTOCOL_VERSION
    log_level: LogLevel = "WARNING"
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)


def load_config(path: str | Path) -> ServerConfig:
    """Read YAML, interpolate env vars, and validate.

    Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
    using :func:`os.path.expandvars` before YAML parsing.  An empty file
    yields the defaults.

    Raises:
        ConfigError: On read errors, YAML parse errors or schema validation failures.
    """
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read {p}: {exc}") from exc

    expanded = os.path.expandvars(raw)

    try:
        data: Any = yaml.safe_load(expanded)
    except yaml.YAMLError as exc:
        raise ConfigError(f"YAML parse error: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration YAML must be a mapping")

    try:
        return ServerConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
