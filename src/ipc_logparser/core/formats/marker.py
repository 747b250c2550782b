"""Elapsed-time marker parser.

IPC log lines start with ``>>SECONDS:`` (optionally after a short prefix),
where SECONDS is a float count of seconds since the Unix epoch.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..models import EPOCH

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ElapsedMarkerParser:
    """Parse ``>>12.5:`` style markers near the start of a line."""

    marker: str = ">>"
    terminator: str = ":"
    # The marker must start before this index.
    marker_limit: int = 4
    # The terminator must sit after index 0 and before this index.
    terminator_limit: int = 20

    def parse(self, line: str) -> datetime:
        """Return the marker instant, or EPOCH when absent or malformed."""
        mpos = line.find(self.marker)
        tpos = line.find(self.terminator)
        if not (0 <= mpos < self.marker_limit and 0 < tpos < self.terminator_limit):
            return EPOCH

        raw = line[mpos + len(self.marker) : tpos]
        try:
            seconds = float(raw)
            if not math.isfinite(seconds):
                raise ValueError(f"non-finite value {raw!r}")
            return EPOCH + timedelta(milliseconds=int(seconds * 1000))
        except (ValueError, OverflowError) as e:
            logger.warning("Failed to parse time %r: %s", raw, e)
            return EPOCH
