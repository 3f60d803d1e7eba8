"""
Logging utilities for the application.

This module provides:
- Root logger configuration driven by ``LoggingConfig``
- Structured loggers (structlog) rendered through the stdlib handlers
- Redaction of access tokens from log records
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from kiro_proxy.core.config.app_config import AppConfig

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s:%(lineno)d %(message)s"

BEARER_TOKEN_PATTERN = re.compile(r"Bearer\s+([a-zA-Z0-9._~+/-]+=*)")
# Kiro/CodeWhisperer access tokens start with "aoa" and are long opaque strings
KIRO_TOKEN_PATTERN = re.compile(r"\baoa[A-Za-z0-9._:-]{20,}")


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    Args:
        name: Optional logger name

    Returns:
        A structured logger
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]


def redact(value: str | None, mask: str = "***") -> str | None:
    """Redact a sensitive value, keeping its first and last two characters.

    Args:
        value: The value to redact
        mask: The mask to use

    Returns:
        The redacted value
    """
    if not value:
        return value

    if len(value) > 6:
        return f"{value[0:2]}{mask}{value[-2:]}"
    return mask


class ApiKeyRedactionFilter(logging.Filter):
    """Logging filter that redacts known access tokens from log records.

    This filter sanitizes `record.msg` and `record.args` (if they are
    strings or containers of strings), replacing any discovered token
    occurrences with a mask.
    """

    def __init__(self, api_keys: Iterable[str] | None = None, mask: str = "***") -> None:
        super().__init__()
        self.mask = mask
        keys = {k for k in (api_keys or []) if k}
        self.patterns: list[re.Pattern[str]] = []
        if keys:
            # Longer keys first so a key never leaves a suffix unmasked
            escaped = sorted((re.escape(k) for k in keys), key=len, reverse=True)
            self.patterns.append(re.compile("|".join(escaped)))
        self.patterns.append(BEARER_TOKEN_PATTERN)
        self.patterns.append(KIRO_TOKEN_PATTERN)

    def _sanitize(self, obj: object) -> object:
        """Recursively sanitize strings inside common containers."""
        if isinstance(obj, str):
            s = obj
            for pat in self.patterns:
                if pat is BEARER_TOKEN_PATTERN:
                    s = pat.sub(f"Bearer {self.mask}", s)
                else:
                    s = pat.sub(self.mask, s)
            return s
        if isinstance(obj, dict):
            return {k: self._sanitize(v) for k, v in obj.items()}
        if isinstance(obj, list | tuple):
            return type(obj)(self._sanitize(v) for v in obj)
        return obj

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if isinstance(record.msg, str):
            record.msg = self._sanitize(record.msg)  # type: ignore[assignment]

        if record.args:
            if isinstance(record.args, dict):
                record.args = self._sanitize(record.args)  # type: ignore[assignment]
            elif isinstance(record.args, tuple):
                record.args = tuple(self._sanitize(a) for a in record.args)
        return True


def install_api_key_redaction_filter(
    api_keys: Iterable[str] | None, mask: str = "***"
) -> ApiKeyRedactionFilter:
    """Install the redaction filter on the root logger and its handlers.

    Safe to call multiple times; every call adds a filter instance.
    """
    root = logging.getLogger()
    filter_instance = ApiKeyRedactionFilter(api_keys, mask=mask)
    root.addFilter(filter_instance)
    # Records from child loggers only pass through handler filters
    for handler in list(root.handlers):
        handler.addFilter(filter_instance)
    return filter_instance


def configure_structlog() -> None:
    """Route structlog events through the stdlib logging handlers."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(
                key_order=["event"], drop_missing=True
            ),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging(config: AppConfig) -> None:
    """Configure root logging from the application configuration.

    Args:
        config: The application configuration
    """
    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)
    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if config.logging.log_file:
        file_handler = logging.FileHandler(config.logging.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, config.logging.level.value, logging.INFO),
        handlers=handlers,
        force=True,
    )
    # httpx logs full request lines at INFO; keep them out of the proxy log
    logging.getLogger("httpx").setLevel(logging.WARNING)

    configure_structlog()
    install_api_key_redaction_filter(
        [config.backend.api_key] if config.backend.api_key else []
    )
