from unittest.mock import MagicMock, patch

import pytest
from kiro_proxy.core import cli
from kiro_proxy.core.config.app_config import AppConfig, LogLevel


def test_positional_port_and_options() -> None:
    args = cli.parse_cli_args(["9000", "--host", "127.0.0.1", "--log-level", "debug"])

    assert args.port == 9000
    assert args.host == "127.0.0.1"
    assert args.log_level == "DEBUG"
    assert args.config_file is None


def test_port_is_optional() -> None:
    assert cli.parse_cli_args([]).port is None


@pytest.mark.parametrize("port", ["abc", "0", "65536"])
def test_invalid_port_exits(port: str) -> None:
    with pytest.raises(SystemExit):
        cli.parse_cli_args([port])


def test_cli_arguments_override_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_PORT", "7000")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    config = cli.apply_cli_args(cli.parse_cli_args(["9001", "--log-level", "debug"]))

    assert config.port == 9001
    assert config.logging.level is LogLevel.DEBUG


def test_environment_used_without_cli_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_PORT", "7000")

    assert cli.apply_cli_args(cli.parse_cli_args([])).port == 7000


def test_main_builds_app_and_runs_server() -> None:
    app = MagicMock()
    build_app_fn = MagicMock(return_value=app)

    with (
        patch.object(cli, "configure_logging") as configure_logging,
        patch.object(cli.uvicorn, "run") as run,
    ):
        cli.main(["8123", "--host", "127.0.0.1"], build_app_fn=build_app_fn)

    config = build_app_fn.call_args.args[0]
    assert isinstance(config, AppConfig)
    assert config.port == 8123
    configure_logging.assert_called_once_with(config)
    run.assert_called_once_with(app, host="127.0.0.1", port=8123, log_config=None)


def test_main_exits_on_invalid_configuration(tmp_path) -> None:
    bad = tmp_path / "config.toml"
    bad.write_text("port = 1\n", encoding="utf-8")

    with patch.object(cli.uvicorn, "run") as run, pytest.raises(SystemExit) as exc_info:
        cli.main(["--config", str(bad)])

    assert exc_info.value.code == 2
    run.assert_not_called()
