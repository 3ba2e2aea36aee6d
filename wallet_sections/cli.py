"""Command-line interface for the wallet section builder."""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

import yaml

from .cells import cell_to_dict
from .config import AppConfig, load_config
from .logging_setup import configure_logging
from .parser import parse_state
from .preload.sink import HttpImagePreloader, LoggingPreloadSink
from .selectors import WalletSectionsBuilder


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="wallet-sections",
        description="Build wallet list sections from an account state snapshot",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    for name, help_text in (
        ("sections", "Print the structured sections view"),
        ("brief", "Print the flat brief cell list"),
    ):
        command = sub.add_parser(name, help=help_text)
        command.add_argument("state", help="YAML or JSON state snapshot")
        command.add_argument(
            "--preload",
            action="store_true",
            help="Fetch collectible images over HTTP instead of logging the queue",
        )

    return parser


def _jsonable(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def load_state_file(path: str | Path) -> dict[str, Any]:
    with open(path) as f:
        raw = yaml.safe_load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"State file {path} must contain a mapping")
    return raw


def _resolve_config(path: str | None) -> AppConfig:
    if path is None:
        try:
            return load_config()
        except FileNotFoundError:
            return AppConfig()
    return load_config(path)


def _run(args: argparse.Namespace) -> str:
    """Execute the selected command and return its JSON output."""
    configure_logging(args.log_level)
    config = _resolve_config(args.config)

    http_sink: HttpImagePreloader | None = None
    if args.preload or config.preload.enabled:
        http_sink = HttpImagePreloader(config.preload)
    builder = WalletSectionsBuilder(config, sink=http_sink or LoggingPreloadSink())

    state = parse_state(
        load_state_file(args.state),
        native_currency=config.display.native_currency,
        language=config.display.language,
    )
    if args.command == "sections":
        payload: Any = asdict(builder.sections(state))
    else:
        payload = [cell_to_dict(cell) for cell in builder.brief(state)]

    # The process exits after printing; let the daemon fetch thread finish.
    if http_sink is not None:
        http_sink.wait()
    return json.dumps(payload, indent=2, ensure_ascii=False, default=_jsonable)


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    print(_run(args))
