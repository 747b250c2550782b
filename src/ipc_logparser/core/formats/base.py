"""Parser interface and extraction patterns."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


class TimestampParser(Protocol):
    """Parser interface: return the line's timestamp, EPOCH when unknown."""

    def parse(self, line: str) -> datetime:
        """Return the instant embedded in the line."""
        ...


@dataclass(frozen=True)
class ExtractionPatterns:
    """Patterns and literals shared by the extractor and the writer."""

    delimiter: re.Pattern[str]
    identifier: re.Pattern[str]
    data_separator: str
    name_date_format: str = "%d%m%Y%H%M%S"

    def is_delimiter(self, line: str) -> bool:
        """True for a line made only of delimiter characters."""
        return self.delimiter.fullmatch(line.rstrip("\r")) is not None


def default_patterns() -> ExtractionPatterns:
    """Default patterns for IPC transaction logs."""
    return ExtractionPatterns(
        delimiter=re.compile(r"\*+"),
        identifier=re.compile(r"\s([0-9]{12,13})\s+"),
        data_separator=(
            "--------------------------------------------- DATASEPARATOR "
            "-----------------------------------------------------------\n"
        ),
    )
