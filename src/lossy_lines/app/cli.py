from __future__ import annotations

import argparse
from collections.abc import Sequence

from lossy_lines.config.models import AdapterConfig, AppConfig
from lossy_lines.observability.domain.logging import LOG_LEVELS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lossy-lines",
        description="Copy lines of mostly-UTF-8 text, replacing invalid byte sequences with U+FFFD",
    )
    parser.add_argument("--config", help="Path to YAML config")
    parser.add_argument("--input", help="Read from this file instead of the configured source")
    parser.add_argument("--output", help="Write to this file instead of the configured sink")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Override logging level")
    parser.add_argument("--log-path", help="Write JSONL logs to this file instead of stderr")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def apply_cli_overrides(config: AppConfig, args: argparse.Namespace) -> None:
    # CLI flags take precedence over config file values.
    if args.input is not None:
        config.source = AdapterConfig(kind="file", settings={"path": args.input})
    if args.output is not None:
        config.sink = AdapterConfig(kind="file", settings={"path": args.output})
    if args.log_level is not None:
        config.logging.level = args.log_level
    if args.log_path is not None:
        config.logging.sink = AdapterConfig(kind="jsonl", settings={"path": args.log_path})
