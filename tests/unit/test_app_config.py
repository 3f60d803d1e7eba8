import pytest
from kiro_proxy.core.common.exceptions import ConfigurationError
from kiro_proxy.core.config import AppConfig, load_config
from kiro_proxy.core.config.app_config import LogLevel
from pydantic import ValidationError


def test_defaults() -> None:
    config = AppConfig.from_env(environ={})

    assert config.host == "0.0.0.0"
    assert config.port == 8080
    assert config.backend.api_url.startswith("https://")
    assert config.backend.api_key is None
    assert config.backend.default_model == "claude-sonnet-4-20250514"
    assert config.backend.attempt_timeout == 10.0
    assert config.backend.passthrough_timeout == 30.0
    assert config.backend.concurrent_attempts is False
    assert config.logging.level is LogLevel.INFO
    assert not config.has_default_credential


def test_environment_overrides() -> None:
    config = AppConfig.from_env(
        environ={
            "APP_PORT": "9090",
            "KIRO_BASE_URL": "http://localhost:9999/kiro",
            "KIRO_ACCESS_TOKEN": "tok",
            "KIRO_ATTEMPT_TIMEOUT": "2.5",
            "KIRO_CONCURRENT_ATTEMPTS": "true",
            "LOG_LEVEL": "debug",
        }
    )

    assert config.port == 9090
    assert config.backend.api_url == "http://localhost:9999/kiro"
    assert config.backend.api_key == "tok"
    assert config.backend.attempt_timeout == 2.5
    assert config.backend.concurrent_attempts is True
    assert config.logging.level is LogLevel.DEBUG
    assert config.has_default_credential


def test_kiro_variables_take_precedence_over_anthropic_ones() -> None:
    config = AppConfig.from_env(
        environ={
            "ANTHROPIC_API_KEY": "anthropic",
            "KIRO_ACCESS_TOKEN": "kiro",
            "ANTHROPIC_BASE_URL": "https://anthropic.example/v1",
        }
    )

    assert config.backend.api_key == "kiro"
    assert config.backend.api_url == "https://anthropic.example/v1"


def test_blank_api_key_counts_as_unset() -> None:
    config = AppConfig.model_validate({"backend": {"api_key": "   "}})
    assert config.backend.api_key is None


def test_unparseable_port_falls_back_to_default() -> None:
    assert AppConfig.from_env(environ={"APP_PORT": "abc"}).port == 8080


@pytest.mark.parametrize(
    "data",
    [
        {"port": 0},
        {"port": 70000},
        {"backend": {"api_url": "ftp://kiro"}},
        {"backend": {"attempt_timeout": 0}},
    ],
)
def test_invalid_values_are_rejected(data) -> None:
    with pytest.raises(ValidationError):
        AppConfig.model_validate(data)


def test_load_config_from_yaml_with_env_precedence(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "port: 7000\n"
        "backend:\n"
        "  api_url: https://yaml.example/kiro\n"
        "  attempt_timeout: 4\n"
        "logging:\n"
        "  level: WARNING\n",
        encoding="utf-8",
    )

    config = load_config(path, environ={"APP_PORT": "7100"})

    assert config.port == 7100
    assert config.backend.api_url == "https://yaml.example/kiro"
    assert config.backend.attempt_timeout == 4.0
    assert config.logging.level is LogLevel.WARNING


def test_load_config_missing_file_uses_defaults(tmp_path) -> None:
    config = load_config(tmp_path / "absent.yaml", environ={})
    assert config.port == 8080


def test_load_config_rejects_unknown_format(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{}", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(path, environ={})


def test_load_config_rejects_non_mapping(tmp_path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(path, environ={})
