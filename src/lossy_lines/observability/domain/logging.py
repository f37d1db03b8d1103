from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

# Ordered from most to least verbose; thresholds compare by position.
LOG_LEVELS: tuple[str, ...] = ("debug", "info", "warning", "error")


def level_rank(level: str) -> int:
    try:
        return LOG_LEVELS.index(level)
    except ValueError:
        raise ValueError(f"Unknown log level: {level!r} (expected one of {', '.join(LOG_LEVELS)})") from None


@dataclass(frozen=True, slots=True)
class LogMessage:
    # Structured log payload emitted by the application layer.
    level: str
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    fields: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.level or not self.message:
            raise ValueError("LogMessage requires non-empty level/message")
        level_rank(self.level)
