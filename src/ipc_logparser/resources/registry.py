"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from ipc_logparser.core.formats import default_patterns
from ipc_logparser.core.models import DEFAULT_BLOCK_SPAN, DEFAULT_REPEAT_LOOKAHEAD


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://ipc-logparser/help")
    def help_resource() -> str:
        """Return a short description of the run modes and resources."""
        return (
            "Modes:\n"
            "- fixed: utrnno set; blocks for that transaction only\n"
            "- discovery: blocks for every transaction found\n"
            "- interval: in-window lines copied to a mirrored tree\n"
            "\nResources:\n"
            "- app://ipc-logparser/help\n"
            "- app://ipc-logparser/config/patterns\n"
            "- app://ipc-logparser/examples/properties\n"
        )

    @mcp.resource("app://ipc-logparser/config/patterns")
    def patterns() -> dict[str, str | int]:
        """Return the extraction patterns and block limits."""
        p = default_patterns()
        return {
            "delimiter": p.delimiter.pattern,
            "identifier": p.identifier.pattern,
            "data_separator": p.data_separator,
            "name_date_format": p.name_date_format,
            "block_span": DEFAULT_BLOCK_SPAN,
            "repeat_lookahead": DEFAULT_REPEAT_LOOKAHEAD,
        }

    @mcp.resource("app://ipc-logparser/examples/properties")
    def sample_properties() -> str:
        """Return a sample properties file."""
        return (
            "log.path=/var/log/ipc\n"
            "out.path=/tmp/ipc-out\n"
            "#utrnno=000000000123\n"
            "date.start=01.10.2026 00:00:00\n"
            "date.end=02.10.2026 00:00:00\n"
            "date.timezone=UTC\n"
            "mode=discovery\n"
            "zip=false\n"
        )
