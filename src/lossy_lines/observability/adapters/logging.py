from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Protocol, TextIO, runtime_checkable

from lossy_lines.adapters.contracts import adapter
from lossy_lines.observability.domain.logging import LogMessage, level_rank


@runtime_checkable
class LogSink(Protocol):
    def emit(self, message: LogMessage) -> None:
        """Persist or print one structured log message."""
        raise NotImplementedError("LogSink is a port; use a concrete sink.")


class StderrLogSink:
    # Structured log sink on stderr; stdout is reserved for line output.
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def emit(self, message: LogMessage) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        print(json.dumps(_log_to_dict(message), separators=(",", ":"), ensure_ascii=False), file=stream)

    def close(self) -> None:
        return None


class JsonlLogSink:
    # File-backed structured log sink for run diagnostics.
    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self._path.open("a", encoding="utf-8")

    def emit(self, message: LogMessage) -> None:
        payload = json.dumps(_log_to_dict(message), separators=(",", ":"), ensure_ascii=False)
        self._file.write(payload + "\n")
        self._file.flush()

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()


class NullLogSink:
    def emit(self, message: LogMessage) -> None:
        _ = message

    def close(self) -> None:
        return None


class Logger:
    # Level-filtering front for a LogSink; messages below the threshold are dropped before building.
    def __init__(self, sink: LogSink, level: str = "info") -> None:
        self._sink = sink
        self._threshold = level_rank(level)
        self.level = level

    def enabled_for(self, level: str) -> bool:
        return level_rank(level) >= self._threshold

    def log(self, level: str, message: str, **fields: object) -> None:
        if not self.enabled_for(level):
            return
        self._sink.emit(LogMessage(level=level, message=message, fields=dict(fields)))

    def debug(self, message: str, **fields: object) -> None:
        self.log("debug", message, **fields)

    def info(self, message: str, **fields: object) -> None:
        self.log("info", message, **fields)

    def warning(self, message: str, **fields: object) -> None:
        self.log("warning", message, **fields)

    def error(self, message: str, **fields: object) -> None:
        self.log("error", message, **fields)

    def close(self) -> None:
        close = getattr(self._sink, "close", None)
        if callable(close):
            close()


@adapter(name="log", kind="stderr")
def log_stderr(settings: dict[str, object]) -> StderrLogSink:
    _ = settings
    return StderrLogSink()


@adapter(name="log", kind="jsonl")
def log_jsonl(settings: dict[str, object]) -> JsonlLogSink:
    path = settings.get("path")
    if not isinstance(path, str) or not path:
        raise ValueError("log_jsonl.settings.path must be a non-empty string")
    return JsonlLogSink(Path(path))


@adapter(name="log", kind="null")
def log_null(settings: dict[str, object]) -> NullLogSink:
    _ = settings
    return NullLogSink()


def _log_to_dict(message: LogMessage) -> dict[str, object]:
    return {
        "level": message.level,
        "message": message.message,
        "timestamp": message.timestamp.isoformat().replace("+00:00", "Z"),
        "fields": message.fields,
    }
