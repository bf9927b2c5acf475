"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: load a session log, view/filter the timeline, inspect and export events
- Resources: addressable views of the current session (types, events, prompts)
- Prompts: reusable conversation templates that clients can invoke

All tools share one in-memory current view; loading replaces it.

Run locally (stdio):
    python -m mcp_session_timeline.server.timeline_server
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_session_timeline.core.loader import TimelineController
from mcp_session_timeline.prompts.registry import register_prompts
from mcp_session_timeline.resources.registry import register_resources
from mcp_session_timeline.tools.timeline import (
    export_user_prompts_impl,
    get_event_impl,
    list_event_types_impl,
    load_session_impl,
    load_session_text_impl,
    restore_share_fragment_impl,
    share_url_impl,
    view_timeline_impl,
)

LOGGER = logging.getLogger(__name__)
LOG_LEVEL_ENV = "SESSION_TIMELINE_LOG_LEVEL"


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


controller = TimelineController()
mcp = FastMCP("session-timeline", json_response=True)

register_resources(mcp, controller)
register_prompts(mcp)


@mcp.tool()
async def load_session(source: str) -> dict[str, Any]:
    """Load a JSONL session log from a local path or an http(s) URL.

    Parameters
    ----------
    source:
        Path (relative to SESSION_TIMELINE_BASE_DIR; .gz supported) or URL.

    Returns
    -------
    dict:
        {"status": "good"|"warn"|"error", "message": str, "count": int, ...}
        On "warn"/"error" the previously loaded events are kept.
    """
    return await load_session_impl(controller, source=source)


@mcp.tool()
def load_session_text(content: str, label: str | None = None) -> dict[str, Any]:
    """Load pasted JSONL content as the current session."""
    return load_session_text_impl(controller, content=content, label=label)


@mcp.tool()
def view_timeline(
    query: str | None = None,
    type: str | None = None,
    hide_tool_details: bool | None = None,
    tz: str | None = None,
    limit: int | None = None,
    include_raw: bool = False,
) -> dict[str, Any]:
    """Return the filtered, time-ordered timeline of the current session.

    Parameters
    ----------
    query:
        Case-insensitive substring matched against the whole event JSON.
    type:
        Exact event type (e.g., "user.message") or "all".
    hide_tool_details:
        Hide assistant.turn_start, assistant.turn_end and session.truncation.
    tz:
        "local" or "utc" for rendered times and day grouping.
    limit:
        Maximum number of rows returned (hard-capped in the implementation).
    include_raw:
        Whether to include the original raw line in each row.

    Omitted filter arguments keep their current value.
    """
    return view_timeline_impl(
        controller,
        query=query,
        type=type,
        hide_tool_details=hide_tool_details,
        tz=tz,
        limit=limit,
        include_raw=include_raw,
    )


@mcp.tool()
def get_event(event_id: str, tz: str | None = None, truncate: bool = True) -> dict[str, Any]:
    """Return the details of one event (clean JSON, raw line, summary)."""
    return get_event_impl(controller, event_id=event_id, tz=tz, truncate=truncate)


@mcp.tool()
def list_event_types() -> dict[str, Any]:
    """List the distinct event types of the loaded session."""
    return list_event_types_impl(controller)


@mcp.tool()
def export_user_prompts() -> dict[str, Any]:
    """Return every user prompt of the session, separated by '---'."""
    return export_user_prompts_impl(controller)


@mcp.tool()
def share_url(base_url: str) -> dict[str, Any]:
    """Build a URL whose fragment reproduces the current view."""
    return share_url_impl(controller, base_url=base_url)


@mcp.tool()
def restore_share_fragment(fragment: str) -> dict[str, Any]:
    """Restore timezone, filters and (if embedded) content from a share fragment."""
    return restore_share_fragment_impl(controller, fragment=fragment)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
