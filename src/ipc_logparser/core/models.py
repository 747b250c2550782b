"""Core data models for block extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

# Timestamp assigned to lines without a readable elapsed-time marker.
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Lines captured from an anchor, the anchor included.
DEFAULT_BLOCK_SPAN = 20
# Lines past the block start before a repeated identifier ends the block.
DEFAULT_REPEAT_LOOKAHEAD = 10


class RunMode(str, Enum):
    """How a run selects and writes log text."""

    FIXED = "fixed"
    DISCOVERY = "discovery"
    INTERVAL = "interval"


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Open (start, end) interval; both bounds are excluded."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise ValueError("window bounds must be timezone-aware")
        if self.start >= self.end:
            raise ValueError("date.start must be < date.end")

    def contains(self, ts: datetime) -> bool:
        return self.start < ts < self.end


@dataclass(frozen=True, slots=True)
class ExtractionLimits:
    """Thresholds tuned for the IPC log layout."""

    block_span: int = DEFAULT_BLOCK_SPAN
    repeat_lookahead: int = DEFAULT_REPEAT_LOOKAHEAD

    def __post_init__(self) -> None:
        if self.block_span < 1:
            raise ValueError("block_span must be >= 1")
        if self.repeat_lookahead < 0:
            raise ValueError("repeat_lookahead must be >= 0")


@dataclass(slots=True)
class RunReport:
    """Summary of one run, reported once every file task has finished."""

    mode: RunMode
    files: int
    counts: dict[str, int] = field(default_factory=dict)
    archive: Path | None = None
