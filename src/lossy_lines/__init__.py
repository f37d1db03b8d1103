from .ports.byte_source import ByteSource
from .reader import LossyLineReader, ReaderState, decode_lossy, lines_lossy, strip_line_terminator

__all__ = [
    "ByteSource",
    "LossyLineReader",
    "ReaderState",
    "decode_lossy",
    "lines_lossy",
    "strip_line_terminator",
]
