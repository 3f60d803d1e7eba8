"""
Command line entry point for the Kiro proxy.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from kiro_proxy.core.app.application_factory import build_app
from kiro_proxy.core.common.exceptions import ConfigurationError
from kiro_proxy.core.common.logging_utils import configure_logging
from kiro_proxy.core.config.app_config import AppConfig, LogLevel, load_config


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid port '{value}': not a number"
        ) from None
    if not 1 <= port <= 65535:
        raise argparse.ArgumentTypeError(
            f"Invalid port '{value}': must be between 1 and 65535"
        )
    return port


def build_cli_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Run the OpenAI-compatible Kiro proxy server"
    )
    parser.add_argument(
        "port",
        nargs="?",
        type=_port,
        help="Port to listen on (default: 8080, or APP_PORT)",
    )
    parser.add_argument("--host", help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument(
        "--config",
        dest="config_file",
        metavar="FILE",
        help="Optional YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=[level.value for level in LogLevel],
        type=str.upper,
    )
    return parser


def parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_cli_parser().parse_args(argv)


def apply_cli_args(args: argparse.Namespace) -> AppConfig:
    """Load configuration and apply command line overrides to it."""
    config = load_config(args.config_file)
    updates: dict[str, object] = {}
    if args.port is not None:
        updates["port"] = args.port
    if args.host:
        updates["host"] = args.host
    if args.log_level:
        updates["logging"] = config.logging.model_copy(
            update={"level": LogLevel(args.log_level)}
        )
    return config.model_copy(update=updates) if updates else config


def main(
    argv: list[str] | None = None,
    build_app_fn: Callable[[AppConfig], FastAPI] | None = None,
) -> None:
    """Parse arguments, configure logging and serve the application."""
    args = parse_cli_args(argv)
    try:
        cfg = apply_cli_args(args)
    except (ValidationError, ConfigurationError) as e:
        sys.stderr.write(f"\nERROR: Invalid configuration: {e}\n")
        sys.exit(2)

    configure_logging(cfg)

    app = (build_app_fn or build_app)(cfg)

    logging.info("Kiro proxy listening on port %d", cfg.port)
    logging.info(
        "OpenAI endpoint: http://localhost:%d/v1/chat/completions", cfg.port
    )
    logging.info(
        "Usage: set your Kiro access token as the api_key of your OpenAI client"
    )
    uvicorn.run(app, host=cfg.host, port=cfg.port, log_config=None)


if __name__ == "__main__":
    main()
