"""
Lossy line reading over buffered byte streams.

Works like iterating a text file opened with ``encoding="utf-8"``, except that invalid UTF-8
never aborts the iteration: each maximal ill-formed subsequence is replaced by U+FFFD and the
rest of the line is kept. Meant for logs and other "probably UTF-8" text where one corrupted
byte should not cost the whole line; strictly-UTF-8 formats should keep using the strict decoder.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum

from lossy_lines.ports.byte_source import ByteSource

LINE_FEED = b"\n"
CARRIAGE_RETURN = b"\r"


class ReaderState(Enum):
    ACTIVE = "active"
    EXHAUSTED = "exhausted"


def strip_line_terminator(data: bytes) -> bytes:
    # Only a CR directly before the consumed LF is part of the terminator; a lone trailing CR stays.
    if not data.endswith(LINE_FEED):
        return data
    data = data[:-1]
    if data.endswith(CARRIAGE_RETURN):
        data = data[:-1]
    return data


def decode_lossy(data: bytes) -> str:
    # One U+FFFD per maximal ill-formed subsequence, as the codec's "replace" handler does.
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("utf-8", errors="replace")


class LossyLineReader(Iterator[str]):
    """
    Forward-only iterator of decoded lines read from a ``ByteSource``.

    Each ``next()`` reads one line from the source, strips the ``\\n`` or ``\\r\\n`` terminator
    and decodes the remainder lossily. The first empty read moves the reader to
    ``ReaderState.EXHAUSTED`` and every later ``next()`` stops without touching the source.

    I/O errors raised by the source propagate unchanged. Bytes already read for that line are
    lost and the reader stays active, so what a retry observes is up to the source.

    The reader borrows the source: it never closes it, and nothing else should read from the
    source while the reader is in use. Not safe to share across threads.
    """

    __slots__ = ("_source", "_state")

    def __init__(self, source: ByteSource) -> None:
        self._source = source
        self._state = ReaderState.ACTIVE

    @property
    def state(self) -> ReaderState:
        return self._state

    @property
    def exhausted(self) -> bool:
        return self._state is ReaderState.EXHAUSTED

    def __iter__(self) -> LossyLineReader:
        return self

    def __next__(self) -> str:
        if self._state is ReaderState.EXHAUSTED:
            raise StopIteration
        data = self._source.readline()
        if not data:
            self._state = ReaderState.EXHAUSTED
            raise StopIteration
        return decode_lossy(strip_line_terminator(data))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self._source!r}, state={self._state.value})"


def lines_lossy(source: ByteSource) -> LossyLineReader:
    # Entry point mirroring file iteration: `for line in lines_lossy(handle): ...`.
    return LossyLineReader(source)
