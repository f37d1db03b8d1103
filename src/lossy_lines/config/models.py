from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lossy_lines.observability.domain.logging import level_rank

# Config models map YAML sections to typed structures; adapter settings stay free-form mappings
# because each adapter factory validates its own settings.


class AdapterConfig(BaseModel):
    # Adapter selection mirrors AdapterRegistry.build input: kind + settings.
    model_config = ConfigDict(extra="forbid")
    kind: str
    settings: dict[str, Any] = Field(default_factory=dict)


class LoggingConfig(BaseModel):
    # Logging threshold and sink selection for the run.
    model_config = ConfigDict(extra="forbid")
    level: str = "info"
    sink: AdapterConfig = Field(default_factory=lambda: AdapterConfig(kind="stderr"))

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level_rank(value)
        return value


class AppConfig(BaseModel):
    # AppConfig is the top-level typed view of configuration; every section has a default.
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    source: AdapterConfig = Field(default_factory=lambda: AdapterConfig(kind="stdin"))
    sink: AdapterConfig = Field(default_factory=lambda: AdapterConfig(kind="stdout"))
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
