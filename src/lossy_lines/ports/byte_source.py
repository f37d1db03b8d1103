from __future__ import annotations

from typing import Protocol, runtime_checkable


# ByteSource port defines how raw bytes enter the reader: delimiter-bounded reads, forward only.
@runtime_checkable
class ByteSource(Protocol):
    def readline(self) -> bytes:
        """Return bytes up to and including the next b"\\n", or b"" once the stream is exhausted."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("ByteSource is a port; use a concrete stream.")
