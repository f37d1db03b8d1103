from __future__ import annotations

import io
import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from lossy_lines.adapters.contracts import get_adapter_meta
from lossy_lines.observability.adapters.logging import (
    JsonlLogSink,
    Logger,
    NullLogSink,
    StderrLogSink,
    log_jsonl,
    log_null,
    log_stderr,
)
from lossy_lines.observability.domain.logging import LogMessage, level_rank


class _ListSink:
    def __init__(self) -> None:
        self.messages: list[LogMessage] = []
        self.closed = False

    def emit(self, message: LogMessage) -> None:
        self.messages.append(message)

    def close(self) -> None:
        self.closed = True


def test_log_message_requires_level_and_message() -> None:
    with pytest.raises(ValueError):
        LogMessage(level="", message="x")
    with pytest.raises(ValueError):
        LogMessage(level="info", message="")


def test_log_message_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        LogMessage(level="fatal", message="x")


def test_level_rank_orders_levels() -> None:
    assert level_rank("debug") < level_rank("info") < level_rank("warning") < level_rank("error")


def test_stderr_log_sink_writes_compact_json() -> None:
    # One JSON object per line; UTC timestamps are rendered with a Z suffix.
    stream = io.StringIO()
    stamp = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
    StderrLogSink(stream).emit(LogMessage(level="info", message="run finished", timestamp=stamp, fields={"lines": 3}))
    assert json.loads(stream.getvalue()) == {
        "level": "info",
        "message": "run finished",
        "timestamp": "2026-01-02T03:04:05Z",
        "fields": {"lines": 3},
    }


def test_stderr_log_sink_defaults_to_sys_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    StderrLogSink().emit(LogMessage(level="error", message="boom"))
    captured = capsys.readouterr()
    assert captured.out == ""
    assert json.loads(captured.err)["message"] == "boom"


def test_jsonl_log_sink_appends_and_creates_parents(tmp_path: Path) -> None:
    path = tmp_path / "logs" / "run.jsonl"
    sink = JsonlLogSink(path)
    sink.emit(LogMessage(level="info", message="one"))
    sink.emit(LogMessage(level="warning", message="two", fields={"k": "ü"}))
    sink.close()
    sink.close()
    rows = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [row["message"] for row in rows] == ["one", "two"]
    assert rows[1]["fields"] == {"k": "ü"}


def test_logger_filters_below_threshold() -> None:
    sink = _ListSink()
    logger = Logger(sink, level="warning")
    logger.debug("d")
    logger.info("i")
    logger.warning("w", lines=1)
    logger.error("e")
    assert [(m.level, m.message) for m in sink.messages] == [("warning", "w"), ("error", "e")]
    assert sink.messages[0].fields == {"lines": 1}


def test_logger_rejects_unknown_threshold() -> None:
    with pytest.raises(ValueError):
        Logger(NullLogSink(), level="verbose")


def test_logger_close_delegates_to_sink() -> None:
    sink = _ListSink()
    Logger(sink).close()
    assert sink.closed


def test_log_jsonl_requires_path_setting() -> None:
    with pytest.raises(ValueError):
        log_jsonl({})


def test_log_adapters_declare_log_role() -> None:
    # All log sinks are selected under the "log" role.
    for factory, kind in ((log_stderr, "stderr"), (log_jsonl, "jsonl"), (log_null, "null")):
        meta = get_adapter_meta(factory)
        assert meta is not None
        assert (meta.name, meta.kind) == ("log", kind)
    assert isinstance(log_null({}), NullLogSink)
    assert isinstance(log_stderr({}), StderrLogSink)
