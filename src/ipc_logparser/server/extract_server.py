"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: callable actions (run an extraction over a log tree)
- Resources: addressable data blobs (help, patterns, a sample properties file)

Run locally (stdio):
    python -m ipc_logparser.server.extract_server
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from ipc_logparser.config import log_level
from ipc_logparser.resources.registry import register_resources
from ipc_logparser.tools.extract import extract_logs_impl

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure logging on stderr; the MCP client usually captures it."""
    level = getattr(logging, log_level(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("ipc-logparser", json_response=True)

register_resources(mcp)


@mcp.tool()
async def extract_logs(
    log_path: str,
    out_path: str,
    date_start: str,
    date_end: str,
    utrnno: str | None = None,
    mode: str = "interval",
    zip: bool = False,
    timezone: str = "UTC",
) -> dict[str, Any]:
    """Extract transaction blocks or a time slice from a log tree.

    Parameters
    ----------
    log_path:
        Input root; every file below it is scanned.
    out_path:
        Output root. Blocks go to <out_path>/<utrnno>/, interval excerpts
        mirror the input tree.
    date_start/date_end:
        Open window bounds, dd.MM.yyyy HH:mm:ss (e.g., 31.12.2025 20:00:00).
    utrnno:
        Transaction identifier. When set, only its blocks are extracted.
    mode:
        "discovery" (blocks for every identifier) or "interval" (time slice).
        Ignored when utrnno is set.
    zip:
        Archive the output tree into <out_path>.zip and clear it.
    timezone:
        IANA timezone of the window bounds.

    Returns
    -------
    dict:
        {"mode": str, "files": int, "counts": dict[str, int], "archive": str | None}
    """
    return await extract_logs_impl(
        log_path=log_path,
        out_path=out_path,
        date_start=date_start,
        date_end=date_end,
        utrnno=utrnno,
        mode=mode,
        zip=zip,
        timezone=timezone,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
