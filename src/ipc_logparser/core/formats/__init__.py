"""Line-level recognizers for IPC transaction logs.

Contains the elapsed-time marker parser, the identifier matcher and the
shared extraction patterns.
"""

from __future__ import annotations

from .base import ExtractionPatterns, TimestampParser, default_patterns
from .identifier import find_identifier, has_exact_token
from .marker import ElapsedMarkerParser

__all__ = [
    "ElapsedMarkerParser",
    "ExtractionPatterns",
    "TimestampParser",
    "default_patterns",
    "find_identifier",
    "has_exact_token",
]
