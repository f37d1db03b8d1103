from .cli import apply_cli_overrides, build_parser, parse_args
from .runtime import build_runtime, commit_lines, copy_lines, default_registry, run, run_with_config

__all__ = [
    "apply_cli_overrides",
    "build_parser",
    "parse_args",
    "build_runtime",
    "commit_lines",
    "copy_lines",
    "default_registry",
    "run",
    "run_with_config",
]
