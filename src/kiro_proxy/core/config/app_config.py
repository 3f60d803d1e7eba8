from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator

from kiro_proxy.core.common.exceptions import ConfigurationError
from kiro_proxy.core.constants import (
    DEFAULT_ATTEMPT_TIMEOUT,
    DEFAULT_BACKEND_URL,
    DEFAULT_MODEL,
    DEFAULT_PASSTHROUGH_TIMEOUT,
    DEFAULT_PORT,
)
from kiro_proxy.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)


def _to_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _to_int(value: str, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


def _to_float(value: str, fallback: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return fallback


def _first_env_value(env: Mapping[str, str], *names: str) -> str | None:
    """Return the first non-empty value among ``names``."""
    for name in names:
        value = env.get(name)
        if value:
            return value
    return None


class LogLevel(str, Enum):
    """Log levels for configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class BackendConfig(DomainModel):
    """Configuration for the Kiro backend."""

    api_url: str = DEFAULT_BACKEND_URL
    api_key: str | None = None
    default_model: str = DEFAULT_MODEL
    attempt_timeout: float = Field(default=DEFAULT_ATTEMPT_TIMEOUT, gt=0)
    passthrough_timeout: float = Field(default=DEFAULT_PASSTHROUGH_TIMEOUT, gt=0)
    concurrent_attempts: bool = False

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Validate the API URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("API URL must start with http:// or https://")
        return v

    @field_validator("api_key", mode="before")
    @classmethod
    def blank_api_key_is_unset(cls, v: Any) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class LoggingConfig(DomainModel):
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    log_file: str | None = None


class AppConfig(DomainModel):
    """Complete application configuration."""

    host: str = "0.0.0.0"
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)

    backend: BackendConfig = Field(default_factory=BackendConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def has_default_credential(self) -> bool:
        return bool(self.backend.api_key)

    @classmethod
    def from_env(cls, *, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Create AppConfig from environment variables.

        Variables that are not set keep their defaults.
        """
        env: Mapping[str, str] = os.environ if environ is None else environ
        return cls.model_validate(_env_overrides(env))


# (env names, dotted config path, transform)
_ENV_BINDINGS: list[tuple[tuple[str, ...], str, Callable[[str], Any] | None]] = [
    (("APP_HOST",), "host", None),
    (("APP_PORT",), "port", lambda v: _to_int(v, DEFAULT_PORT)),
    (("KIRO_BASE_URL", "ANTHROPIC_BASE_URL"), "backend.api_url", None),
    (("KIRO_ACCESS_TOKEN", "ANTHROPIC_API_KEY"), "backend.api_key", None),
    (("KIRO_DEFAULT_MODEL",), "backend.default_model", None),
    (
        ("KIRO_ATTEMPT_TIMEOUT",),
        "backend.attempt_timeout",
        lambda v: _to_float(v, DEFAULT_ATTEMPT_TIMEOUT),
    ),
    (
        ("KIRO_PASSTHROUGH_TIMEOUT",),
        "backend.passthrough_timeout",
        lambda v: _to_float(v, DEFAULT_PASSTHROUGH_TIMEOUT),
    ),
    (("KIRO_CONCURRENT_ATTEMPTS",), "backend.concurrent_attempts", _to_bool),
    (("LOG_LEVEL",), "logging.level", str.upper),
    (("LOG_FILE",), "logging.log_file", None),
]


def _env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect the configuration values present in ``env`` as a nested dict."""
    overrides: dict[str, Any] = {}
    for names, path, transform in _ENV_BINDINGS:
        raw_value = _first_env_value(env, *names)
        if raw_value is None:
            continue
        value = transform(raw_value) if transform is not None else raw_value
        _set_by_path(overrides, path, value)
    return overrides


def _set_by_path(data: dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    current = data
    for part in parts[:-1]:
        current = current.setdefault(part, {})
    current[parts[-1]] = value


def _merge_dicts(base: dict[str, Any], override: Mapping[str, Any]) -> None:
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            _merge_dicts(base[key], value)
        else:
            base[key] = value


def load_config(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Load configuration from an optional YAML file and the environment.

    Environment variables take precedence over values from the file.

    Args:
        config_path: Optional path to a YAML configuration file
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        AppConfig instance
    """
    env: Mapping[str, str] = os.environ if environ is None else environ
    config_data: dict[str, Any] = {}

    if config_path:
        import yaml

        path = Path(config_path)
        if not path.exists():
            logger.warning("Configuration file not found: %s", config_path)
        else:
            if path.suffix.lower() not in (".yaml", ".yml"):
                raise ConfigurationError(
                    f"Unsupported configuration file format: {path.suffix}. Use YAML (.yaml/.yml)."
                )
            with path.open(encoding="utf-8") as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                raise ConfigurationError(
                    f"Configuration file {path} must contain a mapping at the top level"
                )
            _merge_dicts(config_data, file_config)

    _merge_dicts(config_data, _env_overrides(env))
    return AppConfig.model_validate(config_data)
