from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from lossy_lines.adapters.file_io import file_line_source, file_output_sink, stdin_line_source, stdout_output_sink
from lossy_lines.adapters.registry import AdapterRegistry
from lossy_lines.app.cli import apply_cli_overrides, parse_args
from lossy_lines.config.loader import load_config
from lossy_lines.config.models import AppConfig
from lossy_lines.observability.adapters.logging import Logger, StderrLogSink, log_jsonl, log_null, log_stderr

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_CONFIG_ERROR = 2


class LineSource(Protocol):
    def read(self) -> Iterable[str]: ...


class LineSink(Protocol):
    def write_line(self, line: str) -> None: ...

    def close(self) -> None: ...

    def abort(self) -> None: ...


@dataclass(slots=True)
class Runtime:
    # Fully wired run: one source, one sink, one logger.
    source: LineSource
    sink: LineSink
    logger: Logger


def default_registry() -> AdapterRegistry:
    registry = AdapterRegistry()
    registry.register_all(
        [
            file_line_source,
            stdin_line_source,
            file_output_sink,
            stdout_output_sink,
            log_stderr,
            log_jsonl,
            log_null,
        ]
    )
    return registry


def build_runtime(config: AppConfig, registry: AdapterRegistry | None = None) -> Runtime:
    # Logger is built last so a failing source/sink does not leave a log file handle open.
    registry = registry or default_registry()
    source = registry.build("source", config.source.model_dump())
    sink = registry.build("sink", config.sink.model_dump())
    log_sink = registry.build("log", config.logging.sink.model_dump())
    return Runtime(
        source=source,  # type: ignore[arg-type]
        sink=sink,  # type: ignore[arg-type]
        logger=Logger(log_sink, level=config.logging.level),  # type: ignore[arg-type]
    )


def copy_lines(source: LineSource, sink: LineSink) -> int:
    # Returns the number of lines written; I/O errors from either side propagate.
    lines = iter(source.read())
    count = 0
    try:
        for line in lines:
            sink.write_line(line)
            count += 1
    finally:
        # Release the source handle now, not when the abandoned generator is collected.
        close = getattr(lines, "close", None)
        if callable(close):
            close()
    return count


def commit_lines(source: LineSource, sink: LineSink) -> int:
    # Output is committed only after every line is copied; any I/O fault discards it instead.
    try:
        count = copy_lines(source, sink)
        sink.close()
    except OSError:
        sink.abort()
        raise
    return count


def run_with_config(config: AppConfig, *, registry: AdapterRegistry | None = None) -> int:
    try:
        runtime = build_runtime(config, registry)
    except (ValueError, OSError) as exc:
        Logger(StderrLogSink()).error("invalid configuration", error=str(exc))
        return EXIT_CONFIG_ERROR

    logger = runtime.logger
    try:
        logger.info("run started", source=config.source.kind, sink=config.sink.kind)
        lines = commit_lines(runtime.source, runtime.sink)
    except BrokenPipeError:
        # Downstream reader went away (e.g. `| head`); nothing left to deliver.
        logger.warning("output closed by reader")
        return EXIT_IO_ERROR
    except OSError as exc:
        logger.error("run failed", error=str(exc), error_type=type(exc).__name__)
        return EXIT_IO_ERROR
    else:
        logger.info("run finished", lines=lines)
        return EXIT_OK
    finally:
        logger.close()


def run(argv: Sequence[str] | None = None, *, registry: AdapterRegistry | None = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(Path(args.config)) if args.config else AppConfig()
    except (ValueError, OSError) as exc:
        Logger(StderrLogSink()).error("invalid configuration", error=str(exc), path=args.config)
        return EXIT_CONFIG_ERROR
    apply_cli_overrides(config, args)
    return run_with_config(config, registry=registry)
