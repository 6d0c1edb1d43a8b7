"""
Configuration loading for the static site server.

Configuration values are resolved using the following precedence:

1. Explicit keyword arguments passed to `load_config`
2. Environment variables (e.g., PORT, APP_STATIC_DIR)
3. The `[server]` table of `server.toml` if present in the working directory
4. Built-in defaults
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

__all__ = [
    "ConfigError",
    "DEFAULT_STATIC_DIR",
    "ServerConfig",
    "load_config",
]


DEFAULT_STATIC_DIR = Path(__file__).resolve().parent.parent / "client" / "public"
DEFAULT_CONFIG_FILE = Path("server.toml")

# Field name -> environment variable.
ENV_VARS: Dict[str, str] = {
    "host": "HOST",
    "port": "PORT",
    "static_dir": "APP_STATIC_DIR",
    "fallback_document": "APP_FALLBACK_DOCUMENT",
    "max_body_bytes": "APP_MAX_BODY_BYTES",
    "log_level": "APP_LOG_LEVEL",
    "log_format": "APP_LOG_FORMAT",
}


class ConfigError(RuntimeError):
    """Raised when configuration cannot be loaded or validated."""


class ServerConfig(BaseModel):
    """Immutable settings handed to `create_app`."""

    host: str = Field("0.0.0.0", description="Interface to listen on", min_length=1)
    port: int = Field(3000, description="Listening port", ge=1, le=65535)
    static_dir: Path = Field(DEFAULT_STATIC_DIR, description="Public root directory")
    fallback_document: str = Field(
        "index.html",
        description="Document served for unmatched paths; empty disables it",
    )
    max_body_bytes: int = Field(
        100 * 1024, description="Largest accepted JSON request body", gt=0
    )
    log_level: str = Field("INFO", description="Log level name")
    log_format: str = Field("console", description="Log renderer (console or json)")

    model_config = ConfigDict(frozen=True)

    @field_validator("static_dir", mode="before")
    @classmethod
    def _coerce_path(cls, value: Any) -> Path:
        return Path(value) if not isinstance(value, Path) else value

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return normalized

    @field_validator("log_format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"console", "json"}:
            raise ValueError(f"unknown log format: {value}")
        return normalized


def load_config(
    config_path: Optional[Path | str] = None, **overrides: Any
) -> ServerConfig:
    """
    Load server configuration from overrides/environment/file/defaults.

    Args:
        config_path: Optional explicit path to a `server.toml` file.
        **overrides: Field values that win over every other source.

    Returns:
        ServerConfig populated with the resolved values.

    Raises:
        ConfigError: if the config file is missing or unparsable, or a
            resolved value fails validation.
    """

    values: Dict[str, Any] = dict(_load_toml_data(config_path).get("server", {}))

    for field_name, env_var in ENV_VARS.items():
        env_value = os.getenv(env_var)
        if env_value is not None:
            values[field_name] = env_value

    unknown = set(overrides) - set(ServerConfig.model_fields)
    if unknown:
        raise ConfigError(f"Unknown configuration option(s): {', '.join(sorted(unknown))}")
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ServerConfig(**values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid server configuration: {exc}") from exc


def _load_toml_data(config_path: Optional[Path | str]) -> Dict[str, Any]:
    """Load data from a TOML file if one can be resolved."""

    resolved = _resolve_config_path(config_path)
    if resolved is None:
        return {}

    if not resolved.exists():
        raise ConfigError(f"Configuration file not found: {resolved}")

    try:
        with resolved.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Could not parse {resolved}: {exc}") from exc


def _resolve_config_path(config_path: Optional[Path | str]) -> Optional[Path]:
    """Resolve configuration path with environment fallback."""

    if config_path:
        return Path(config_path)

    env_path = os.getenv("APP_CONFIG_FILE")
    if env_path:
        return Path(env_path)

    return DEFAULT_CONFIG_FILE if DEFAULT_CONFIG_FILE.exists() else None
