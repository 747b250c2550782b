"""Date-window parsing helpers.

Window bounds come from properties in ``dd.MM.yyyy HH:mm:ss`` form and are
interpreted in a configurable timezone (UTC unless told otherwise).
"""

from __future__ import annotations

from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .models import DateWindow

PROPERTY_DATE_FORMAT = "%d.%m.%Y %H:%M:%S"


def resolve_tz(name: str | None) -> tzinfo:
    """Return a tzinfo for an IANA name; empty or ``UTC`` gives UTC."""
    if not name or name.strip().upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def parse_property_dt(s: str, *, tz: tzinfo = UTC) -> datetime:
    """Parse a ``dd.MM.yyyy HH:mm:ss`` value as a timezone-aware datetime."""
    try:
        dt = datetime.strptime(s.strip(), PROPERTY_DATE_FORMAT)
    except ValueError as e:
        raise ValueError(
            f"Invalid date '{s}'. Expected dd.MM.yyyy HH:mm:ss (e.g., 31.12.2025 23:59:00)"
        ) from e
    return dt.replace(tzinfo=tz)


def resolve_window(start: str, end: str, *, tz_name: str | None = None) -> DateWindow:
    """Build a DateWindow from the two property values."""
    tz = resolve_tz(tz_name)
    return DateWindow(parse_property_dt(start, tz=tz), parse_property_dt(end, tz=tz))


def format_for_name(dt: datetime, fmt: str) -> str:
    """Format a window bound for use inside an output file name."""
    return dt.strftime(fmt)
