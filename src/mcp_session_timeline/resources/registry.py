"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
They expose read-only projections of the current session.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_session_timeline.core.exports import event_json, raw_line
from mcp_session_timeline.core.loader import BASE_DIR_ENV, TimelineController, base_dir
from mcp_session_timeline.core.models import FilterState

SAMPLE_SESSION = "\n".join(
    [
        '{"type":"session.start","data":{"sessionId":"s-1","version":1,"producer":"copilot-agent",'
        '"copilotVersion":"0.0.339","startTime":"2025-10-01T09:00:00.000Z"},"id":"e1",'
        '"timestamp":"2025-10-01T09:00:00.000Z","parentId":null}',
        '{"type":"user.message","data":{"content":"List the files in src"},"id":"e2",'
        '"timestamp":"2025-10-01T09:00:04.250Z","parentId":"e1"}',
        '{"type":"assistant.turn_start","data":{"turnId":"0"},"id":"e3",'
        '"timestamp":"2025-10-01T09:00:04.300Z","parentId":"e2"}',
        '{"type":"assistant.message","data":{"messageId":"m1","content":"",'
        '"toolRequests":[{"toolCallId":"c1","name":"bash","arguments":{"command":"ls src"}}]},'
        '"id":"e4","timestamp":"2025-10-01T09:00:06.000Z","parentId":"e3"}',
        '{"type":"tool.execution_start","data":{"toolCallId":"c1","toolName":"bash",'
        '"arguments":{"command":"ls src","description":"list"}},"id":"e5",'
        '"timestamp":"2025-10-01T09:00:06.010Z","parentId":"e4"}',
        '{"type":"tool.execution_complete","data":{"toolCallId":"c1","toolName":"bash",'
        '"success":true,"result":{"content":"main.py"}},"id":"e6",'
        '"timestamp":"2025-10-01T09:00:06.480Z","parentId":"e5"}',
        '{"type":"assistant.turn_end","data":{"turnId":"0"},"id":"e7",'
        '"timestamp":"2025-10-01T09:00:07.000Z","parentId":"e6"}',
        '{"type":"session.end","data":{},"id":"e8",'
        '"timestamp":"2025-10-01T09:01:00.000Z","parentId":null}',
    ]
) + "\n"


def register_resources(mcp: FastMCP, controller: TimelineController) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://session-timeline/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        base = base_dir()
        return (
            "Resources:\n"
            "- app://session-timeline/help\n"
            "- app://session-timeline/examples/sample-session\n"
            "- timeline://types\n"
            "- timeline://prompts\n"
            "- timeline://events/{event_id}\n"
            "- timeline://events/{event_id}/raw\n"
            f"\nFile loads are restricted to {BASE_DIR_ENV}: {base}\n"
        )

    @mcp.resource("app://session-timeline/examples/sample-session")
    def sample_session() -> str:
        """Return a tiny sample session for demos and tests."""
        return SAMPLE_SESSION

    @mcp.resource("timeline://types")
    def event_types() -> dict[str, Any]:
        """Return the distinct event types with their counts in the current view."""
        counts: dict[str, int] = {}
        for e in controller.events:
            counts[e.type] = counts.get(e.type, 0) + 1
        visible = controller.filtered()
        return {
            "source": controller.state.source_label,
            "types": {t: counts[t] for t in controller.event_types()},
            "visible": len(visible),
            "filtered": controller.state.filters != FilterState(),
        }

    @mcp.resource("timeline://prompts")
    def prompts_export() -> str:
        """Return every user prompt of the current session."""
        return controller.user_prompts()

    @mcp.resource("timeline://events/{event_id}")
    def event_resource(event_id: str) -> str:
        """Return one event as pretty-printed JSON."""
        return event_json(controller.get_event(event_id))

    @mcp.resource("timeline://events/{event_id}/raw")
    def event_raw(event_id: str) -> str:
        """Return the original source line of one event."""
        return raw_line(controller.get_event(event_id))
