"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def _format_filters(query: str | None, event_type: str | None, hide_tool_details: bool) -> str:
    """Return the view_timeline arguments as a bullet block for prompt display."""
    lines = []
    if query:
        lines.append(f"- query: {query}")
    lines.append(f"- type: {event_type or 'all'}")
    lines.append(f"- hide_tool_details: {'true' if hide_tool_details else 'false'}")
    return "\n".join(lines)


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def review_session(
        source: str,
        query: str | None = None,
        type: str | None = None,
        hide_tool_details: bool = True,
        tz: str = "utc",
    ) -> list[dict[str, Any]]:
        """Build a prompt that walks through a session timeline."""
        filters_block = _format_filters(query, type, hide_tool_details)
        return [
            {
                "role": "system",
                "content": (
                    "You are a careful reviewer of AI coding-assistant sessions. "
                    "Describe what happened using only the timeline data. "
                    "Do not invent events; if the evidence is insufficient, say so."
                ),
            },
            {
                "role": "user",
                "content": (
                    "Review the session log using the timeline tools. Follow this workflow:\n"
                    f"- Call load_session with source: {source}\n"
                    "- If the status is 'warn' or 'error', report the message and stop.\n"
                    f"- Call view_timeline with tz: {tz} and:\n{filters_block}\n"
                    "- Use get_event for any event you need to quote in full.\n\n"
                    "Return this structure:\n"
                    "1) Goal of the session (1-2 sentences, from the user messages)\n"
                    "2) Timeline (key steps with their time and delta)\n"
                    "3) Tool activity (which tools ran, failures marked ✗)\n"
                    "4) Outcome and open issues (2-4 bullets)\n"
                ),
            },
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "Event types present after loading:"},
                    {"type": "resource", "uri": "timeline://types"},
                ],
            },
        ]

    @mcp.prompt()
    def summarize_prompts(source: str) -> list[dict[str, Any]]:
        """Build a prompt that summarizes the user's prompts in a session."""
        return [
            {
                "role": "system",
                "content": (
                    "Summarize the requests a user made to a coding assistant. "
                    "Group related prompts and keep the user's own wording for key asks."
                ),
            },
            {
                "role": "user",
                "content": (
                    f"Call load_session with source: {source}, then export_user_prompts.\n"
                    "Prompts are separated by lines containing '---'.\n"
                    "Return a numbered list of distinct requests, oldest first."
                ),
            },
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "The exported prompts are also available at:"},
                    {"type": "resource", "uri": "timeline://prompts"},
                ],
            },
        ]
