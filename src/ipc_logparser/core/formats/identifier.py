"""Transaction identifier (UTRNNO) matching."""

from __future__ import annotations

from .base import ExtractionPatterns


def find_identifier(line: str, patterns: ExtractionPatterns) -> str | None:
    """Return the first whitespace-bounded 12-13 digit token, if any."""
    m = patterns.identifier.search(line)
    if not m:
        return None
    return m.group(0).strip() or None


def has_exact_token(line: str, identifier: str) -> bool:
    """True when the identifier appears between single spaces."""
    return f" {identifier} " in line
