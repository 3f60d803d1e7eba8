import logging

import pytest
from kiro_proxy.core.common.logging_utils import (
    ApiKeyRedactionFilter,
    configure_logging,
    get_logger,
    install_api_key_redaction_filter,
    redact,
)
from kiro_proxy.core.config.app_config import AppConfig


def _record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("abcdefghij", "ab***ij"),
        ("short", "***"),
        ("", ""),
        (None, None),
    ],
)
def test_redact(value, expected) -> None:
    assert redact(value) == expected


def test_filter_masks_configured_key_in_message_and_args() -> None:
    redaction = ApiKeyRedactionFilter(["secret-token-123"])
    record = _record("token=secret-token-123 header=%s", "secret-token-123")

    assert redaction.filter(record) is True
    assert record.getMessage() == "token=*** header=***"


def test_filter_masks_bearer_headers() -> None:
    record = _record("Authorization: Bearer abc.def-ghi")
    ApiKeyRedactionFilter().filter(record)
    assert record.getMessage() == "Authorization: Bearer ***"


def test_filter_masks_kiro_style_tokens_inside_containers() -> None:
    token = "aoaAAAAAGhlbG8tdGhpcy1pcy1hLXRva2Vu"
    record = _record("payload=%s", {"headers": [token]})

    ApiKeyRedactionFilter().filter(record)

    assert token not in record.getMessage()


def test_install_filter_attaches_to_root_handlers() -> None:
    root = logging.getLogger()
    handler = logging.NullHandler()
    root.addHandler(handler)
    try:
        installed = install_api_key_redaction_filter(["k" * 12])
        assert installed in root.filters
        assert installed in handler.filters
    finally:
        root.removeFilter(installed)
        root.removeHandler(handler)


def test_configure_logging_sets_level_and_file(tmp_path) -> None:
    log_file = tmp_path / "proxy.log"
    config = AppConfig.model_validate(
        {
            "backend": {"api_key": "configured-secret-key"},
            "logging": {"level": "DEBUG", "log_file": str(log_file)},
        }
    )
    root = logging.getLogger()
    previous_handlers = list(root.handlers)
    previous_filters = list(root.filters)
    previous_level = root.level
    try:
        configure_logging(config)

        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

        logging.getLogger("kiro_proxy.test").info("using configured-secret-key")
        get_logger("kiro_proxy.test").info("structured", token="configured-secret-key")
        for handler in root.handlers:
            handler.flush()

        written = log_file.read_text(encoding="utf-8")
        assert "using ***" in written
        assert "structured" in written
        assert "configured-secret-key" not in written
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = previous_handlers
        root.filters[:] = previous_filters
        root.setLevel(previous_level)
