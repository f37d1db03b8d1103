from .adapters import JsonlLogSink, Logger, LogSink, NullLogSink, StderrLogSink
from .domain import LOG_LEVELS, LogMessage

__all__ = ["LOG_LEVELS", "LogMessage", "LogSink", "Logger", "StderrLogSink", "JsonlLogSink", "NullLogSink"]
