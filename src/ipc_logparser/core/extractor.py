"""Block extraction.

Turns the lines of one log file into ``identifier -> block text``. A block
starts at an anchor line (in the date window, carrying the identifier as a
whole token) and runs forward until a delimiter line, a far repeat of the
identifier, or the block span limit. This module performs no I/O.
"""

from __future__ import annotations

from collections.abc import Sequence

from .formats import (
    ElapsedMarkerParser,
    ExtractionPatterns,
    TimestampParser,
    default_patterns,
    find_identifier,
    has_exact_token,
)
from .models import DateWindow, ExtractionLimits


def split_lines(content: str) -> list[str]:
    """Split file content on newlines, dropping trailing empty entries."""
    lines = content.split("\n")
    while lines and lines[-1] == "":
        lines.pop()
    return lines


def _collect_block(
    lines: Sequence[str],
    *,
    anchor: int,
    start: int,
    end: int,
    identifier: str,
    patterns: ExtractionPatterns,
    limits: ExtractionLimits,
) -> str:
    parts = [patterns.data_separator]
    for i in range(start, end):
        line = lines[i]
        if patterns.is_delimiter(line):
            break
        if i != anchor and i > start + limits.repeat_lookahead and identifier in line:
            break
        parts.append(line)
        parts.append("\n")
    parts.append(patterns.data_separator)
    return "".join(parts)


def extract_blocks(
    lines: Sequence[str],
    window: DateWindow,
    *,
    target: str | None = None,
    parser: TimestampParser | None = None,
    patterns: ExtractionPatterns | None = None,
    limits: ExtractionLimits | None = None,
) -> dict[str, str]:
    """Return the blocks found in ``lines``, keyed by identifier.

    With ``target`` set only that identifier is searched for; otherwise every
    identifier discovered on an in-window line is. Blocks for the same
    identifier are concatenated in line order.
    """
    parser = parser or ElapsedMarkerParser()
    patterns = patterns or default_patterns()
    limits = limits or ExtractionLimits()
    target = target.strip() if target else None

    result: dict[str, str] = {}
    line_count = len(lines)
    last_find_pos = 0

    for pos, line in enumerate(lines):
        if not window.contains(parser.parse(line)):
            continue

        identifier = target or find_identifier(line, patterns)
        if not identifier:
            continue
        if not has_exact_token(line, identifier):
            continue

        # Never step back into lines already absorbed by an earlier anchor.
        start = max(pos, last_find_pos + 1)
        end = min(pos + limits.block_span, line_count)

        block = _collect_block(
            lines,
            anchor=pos,
            start=start,
            end=end,
            identifier=identifier,
            patterns=patterns,
            limits=limits,
        )
        last_find_pos = pos
        result[identifier] = result.get(identifier, "") + block

    return result
