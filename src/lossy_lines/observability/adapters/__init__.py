from .logging import JsonlLogSink, Logger, LogSink, NullLogSink, StderrLogSink, log_jsonl, log_null, log_stderr

__all__ = [
    "LogSink",
    "Logger",
    "StderrLogSink",
    "JsonlLogSink",
    "NullLogSink",
    "log_stderr",
    "log_jsonl",
    "log_null",
]
