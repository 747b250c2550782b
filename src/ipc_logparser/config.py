"""Run configuration.

Settings are read from a Java-style ``.properties`` file and validated with
pydantic. Invalid settings raise ConfigError before any log file is touched.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .core.models import (
    DEFAULT_BLOCK_SPAN,
    DEFAULT_REPEAT_LOOKAHEAD,
    DateWindow,
    ExtractionLimits,
    RunMode,
)
from .core.time_window import resolve_tz, resolve_window

DEFAULT_PROPERTIES = "application.properties"
LOG_LEVEL_ENV = "IPC_LOGPARSER_LOG_LEVEL"


class ConfigError(ValueError):
    """Missing or malformed run setting."""


def load_properties(path: str | Path) -> dict[str, str]:
    """Read ``key=value`` / ``key: value`` pairs, skipping ``#`` and ``!`` comments."""
    props: dict[str, str] = {}
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read properties file {path}: {e}") from e

    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in "#!":
            continue
        positions = [i for i in (line.find("="), line.find(":")) if i > 0]
        if not positions:
            props[line] = ""
            continue
        sep = min(positions)
        # Properties escape backslashes, as in C:\\logs.
        props[line[:sep].strip()] = line[sep + 1 :].strip().replace("\\\\", "\\")
    return props


class ExtractorSettings(BaseModel):
    """Validated settings for one run."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    log_path: Path = Field(alias="log.path", description="Input root scanned for log files.")
    out_path: Path = Field(alias="out.path", description="Output root for extracted text.")
    utrnno: str | None = Field(default=None, description="Fixed transaction identifier.")
    date_start: str = Field(alias="date.start", description="Window start, dd.MM.yyyy HH:mm:ss.")
    date_end: str = Field(alias="date.end", description="Window end, dd.MM.yyyy HH:mm:ss.")
    timezone: str = Field(default="UTC", alias="date.timezone")
    zip: bool = False
    mode: Literal["interval", "discovery"] = "interval"
    workers: int | None = Field(default=None, ge=1)
    block_span: int = Field(default=DEFAULT_BLOCK_SPAN, ge=1, alias="block.span")
    repeat_lookahead: int = Field(default=DEFAULT_REPEAT_LOOKAHEAD, ge=0, alias="block.lookahead")

    @field_validator("utrnno", "workers", mode="before")
    @classmethod
    def _blank_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @field_validator("mode", mode="before")
    @classmethod
    def _lower_mode(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        resolve_tz(v)
        return v

    @model_validator(mode="after")
    def _valid_window(self) -> ExtractorSettings:
        self.window()
        return self

    def window(self) -> DateWindow:
        return resolve_window(self.date_start, self.date_end, tz_name=self.timezone)

    def limits(self) -> ExtractionLimits:
        return ExtractionLimits(block_span=self.block_span, repeat_lookahead=self.repeat_lookahead)

    def run_mode(self) -> RunMode:
        """A configured identifier always selects fixed mode."""
        if self.utrnno:
            return RunMode.FIXED
        return RunMode(self.mode)


def build_settings(values: dict[str, Any]) -> ExtractorSettings:
    """Validate raw values, turning validation failures into ConfigError."""
    try:
        return ExtractorSettings.model_validate(values)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


def load_settings(path: str | Path = DEFAULT_PROPERTIES, **overrides: Any) -> ExtractorSettings:
    """Load a properties file and apply non-None overrides (by field name)."""
    values: dict[str, Any] = dict(load_properties(path))
    aliases = {
        name: (field.alias or name) for name, field in ExtractorSettings.model_fields.items()
    }
    for name, value in overrides.items():
        if value is None:
            continue
        values.pop(aliases.get(name, name), None)
        values[name] = value
    return build_settings(values)


def log_level() -> str:
    return os.getenv(LOG_LEVEL_ENV, "INFO").upper()
