"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from typing import Any

from ipc_logparser.config import build_settings
from ipc_logparser.core.models import RunReport
from ipc_logparser.core.runner import run_extraction


def _report_to_dict(report: RunReport) -> dict[str, Any]:
    """Convert a RunReport into a JSON-serializable dict."""
    return {
        "mode": report.mode.value,
        "files": report.files,
        "counts": dict(report.counts),
        "archive": str(report.archive) if report.archive is not None else None,
    }


async def extract_logs_impl(
    *,
    log_path: str,
    out_path: str,
    date_start: str,
    date_end: str,
    utrnno: str | None = None,
    mode: str = "interval",
    zip: bool = False,
    timezone: str = "UTC",
    workers: int | None = None,
) -> dict[str, Any]:
    """Implementation for the `extract_logs` MCP tool.

    Notes
    -----
    - A non-blank utrnno always selects fixed-identifier mode; mode is then ignored.
    - Dates use dd.MM.yyyy HH:mm:ss and are read in ``timezone``.
    - Invalid settings raise ConfigError (a ValueError).
    """
    settings = build_settings(
        {
            "log_path": log_path,
            "out_path": out_path,
            "date_start": date_start,
            "date_end": date_end,
            "utrnno": utrnno,
            "mode": mode,
            "zip": zip,
            "timezone": timezone,
            "workers": workers,
        }
    )
    report = await run_extraction(settings)
    return _report_to_dict(report)
