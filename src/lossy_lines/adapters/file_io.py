from __future__ import annotations

import sys
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, TextIO

from lossy_lines.adapters.contracts import adapter
from lossy_lines.ports.byte_source import ByteSource
from lossy_lines.reader import LossyLineReader


@dataclass(frozen=True, slots=True)
class FileLineSource:
    # File source adapter: opens the file in binary mode and yields lossily decoded lines.
    path: Path

    def read(self) -> Iterator[str]:
        # Handle lifetime is tied to iteration; the reader itself never closes its source.
        with self.path.open("rb") as handle:
            yield from LossyLineReader(handle)


@dataclass(frozen=True, slots=True)
class StreamLineSource:
    # Stream source adapter over an already-open binary stream (stdin, pipes, sockets).
    stream: ByteSource

    def read(self) -> Iterator[str]:
        # The caller owns the stream, so it is left open after exhaustion.
        return LossyLineReader(self.stream)


@dataclass
class FileOutputSink:
    # File sink adapter: writes newline-delimited UTF-8 output, optionally atomically.
    path: Path
    atomic_replace: bool = False
    _handle: TextIO | None = field(default=None, init=False, repr=False)
    _temp_path: Path | None = field(default=None, init=False, repr=False)

    def write_line(self, line: str) -> None:
        # Open lazily so construction itself does not touch filesystem.
        if self._handle is None:
            self._open()
        assert self._handle is not None
        self._handle.write(line + "\n")

    def close(self) -> None:
        # Close is idempotent to simplify shutdown paths.
        if self._handle is None:
            return
        self._handle.flush()
        self._handle.close()
        self._handle = None

        if self.atomic_replace and self._temp_path is not None:
            self._temp_path.replace(self.path)
            self._temp_path = None

    def abort(self) -> None:
        # Failed run: in atomic mode the temp file is dropped and the target keeps its old content.
        handle, self._handle = self._handle, None
        try:
            if handle is not None:
                handle.close()
        finally:
            if self._temp_path is not None:
                self._temp_path.unlink(missing_ok=True)
                self._temp_path = None

    def _open(self) -> None:
        # newline="" keeps "\n" as written on every platform.
        if self.atomic_replace:
            self._temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            self._handle = self._temp_path.open("w", encoding="utf-8", newline="")
        else:
            self._handle = self.path.open("w", encoding="utf-8", newline="")


@dataclass
class StreamOutputSink:
    # Stream sink adapter: UTF-8 lines written to a binary stream, flushed per line for pipes.
    stream: BinaryIO

    def write_line(self, line: str) -> None:
        self.stream.write(line.encode("utf-8") + b"\n")
        self.stream.flush()

    def close(self) -> None:
        # The stream belongs to the caller; only pending bytes are pushed out.
        self.stream.flush()

    def abort(self) -> None:
        # Lines already flushed are delivered; a dead stream is not touched again.
        return None


def _std_buffer(name: str) -> BinaryIO:
    # sys.stdin/sys.stdout are None in detached processes (pythonw, services).
    stream = getattr(sys, name)
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        raise ValueError(f"sys.{name} is not available as a binary stream")
    return buffer


@adapter(name="source", kind="file")
def file_line_source(settings: dict[str, object]) -> FileLineSource:
    path = settings.get("path")
    if not isinstance(path, str) or not path:
        raise ValueError("source.settings.path must be a non-empty string")
    return FileLineSource(path=Path(path))


@adapter(name="source", kind="stdin")
def stdin_line_source(settings: dict[str, object]) -> StreamLineSource:
    _ = settings
    return StreamLineSource(stream=_std_buffer("stdin"))


@adapter(name="sink", kind="file")
def file_output_sink(settings: dict[str, object]) -> FileOutputSink:
    path = settings.get("path")
    if not isinstance(path, str) or not path:
        raise ValueError("sink.settings.path must be a non-empty string")
    return FileOutputSink(
        path=Path(path),
        atomic_replace=bool(settings.get("atomic_replace", False)),
    )


@adapter(name="sink", kind="stdout")
def stdout_output_sink(settings: dict[str, object]) -> StreamOutputSink:
    _ = settings
    return StreamOutputSink(stream=_std_buffer("stdout"))
