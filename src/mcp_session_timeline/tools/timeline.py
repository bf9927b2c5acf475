"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into controller calls,
and return JSON-serializable data structures.
"""

from __future__ import annotations

from typing import Any

from mcp_session_timeline.core.classify import badge_class, category_for, summarize_event
from mcp_session_timeline.core.exports import clean_event, event_json, raw_line, truncate_strings
from mcp_session_timeline.core.filters import ALL_TYPES
from mcp_session_timeline.core.loader import TimelineController
from mcp_session_timeline.core.models import FilterState, LoadStatus, TzMode
from mcp_session_timeline.core.share import parse_fragment
from mcp_session_timeline.core.timefmt import day_key, format_timestamp
from mcp_session_timeline.core.timeline import TimelineRow, duration, timeline_rows

DEFAULT_LIMIT = 200
HARD_LIMIT = 5000
PASTED_SOURCE_LABEL = "pasted content"


def _parse_tz(tz: str | None) -> TzMode | None:
    """Parse a user-supplied timezone mode."""
    if tz is None:
        return None
    try:
        return TzMode(tz.strip().lower())
    except ValueError as e:
        valid = ", ".join(m.value for m in TzMode)
        raise ValueError(f"Unknown tz mode '{tz}'. Valid values: {valid}.") from e


def _filters_to_dict(filters: FilterState) -> dict[str, Any]:
    return {
        "query": filters.query,
        "type": filters.type,
        "hide_tool_details": filters.hide_tool_details,
    }


def _status_to_dict(controller: TimelineController, status: LoadStatus) -> dict[str, Any]:
    state = controller.state
    return {
        "status": status.kind.value,
        "message": status.message,
        "source": state.source_label,
        "count": len(state.events),
        "types": controller.event_types(),
    }


def _row_to_dict(row: TimelineRow) -> dict[str, Any]:
    """Convert a TimelineRow into a JSON-serializable dict."""
    return {
        "id": row.id,
        "index": row.index,
        "type": row.type,
        "category": row.category.value,
        "badge": row.badge,
        "day": row.day,
        "time": row.time,
        "delta": row.delta,
        "offset": row.offset,
        "summary": row.summary,
    }


async def load_session_impl(controller: TimelineController, *, source: str) -> dict[str, Any]:
    """Implementation for the `load_session` MCP tool (path or URL)."""
    if not source.strip():
        raise ValueError("source must not be empty")
    status = await controller.load(source.strip())
    return _status_to_dict(controller, status)


def load_session_text_impl(
    controller: TimelineController,
    *,
    content: str,
    label: str | None = None,
) -> dict[str, Any]:
    """Implementation for the `load_session_text` MCP tool (pasted JSONL)."""
    if not content.strip():
        raise ValueError("content must not be empty")
    status = controller.load_text(content, label or PASTED_SOURCE_LABEL)
    return _status_to_dict(controller, status)


def view_timeline_impl(
    controller: TimelineController,
    *,
    query: str | None = None,
    type: str | None = None,
    hide_tool_details: bool | None = None,
    tz: str | None = None,
    limit: int | None = None,
    include_raw: bool = False,
) -> dict[str, Any]:
    """Implementation for the `view_timeline` MCP tool.

    Notes
    -----
    - Filter arguments that are given replace the stored view state; omitted
      ones keep their current value.
    - Deltas are computed over the filtered events, like the visible list.
    """
    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    if limit > HARD_LIMIT:
        limit = HARD_LIMIT

    current = controller.state.filters
    filters = FilterState(
        query=current.query if query is None else query,
        type=current.type if type is None else (type or ALL_TYPES),
        hide_tool_details=(
            current.hide_tool_details if hide_tool_details is None else hide_tool_details
        ),
    )
    controller.set_filters(filters)
    tz_mode = _parse_tz(tz)
    if tz_mode is not None:
        controller.set_tz_mode(tz_mode)

    state = controller.state
    visible = controller.filtered()
    rows = timeline_rows(visible[:limit], state.tz_mode)
    entries = [_row_to_dict(row) for row in rows]
    if include_raw:
        for entry, e in zip(entries, visible, strict=False):
            entry["raw"] = raw_line(e)

    return {
        "source": state.source_label,
        "total": len(state.events),
        "count": len(visible),
        "returned": len(entries),
        "duration": duration(visible),
        "tz": state.tz_mode.value,
        "filters": _filters_to_dict(filters),
        "events": entries,
    }


def get_event_impl(
    controller: TimelineController,
    *,
    event_id: str,
    tz: str | None = None,
    truncate: bool = True,
) -> dict[str, Any]:
    """Implementation for the `get_event` MCP tool (detail view)."""
    e = controller.get_event(event_id)
    tz_mode = _parse_tz(tz) or controller.state.tz_mode
    clean = clean_event(e)
    return {
        "id": e.id,
        "index": e.index,
        "type": e.type,
        "category": category_for(e.type).value,
        "badge": badge_class(e.type),
        "summary": summarize_event(e),
        "time": format_timestamp(e.resolved, tz_mode),
        "day": day_key(e.resolved, tz_mode),
        "parent_id": e.event.parent_id,
        "event": truncate_strings(clean) if truncate else clean,
        "json": event_json(e),
        "raw": raw_line(e),
    }


def list_event_types_impl(controller: TimelineController) -> dict[str, Any]:
    types = controller.event_types()
    return {"count": len(types), "types": types}


def export_user_prompts_impl(controller: TimelineController) -> dict[str, Any]:
    """Implementation for the `export_user_prompts` MCP tool."""
    count = sum(1 for e in controller.events if e.type == "user.message")
    text = controller.user_prompts()
    return {
        "count": count,
        "text": text,
        "message": "No user messages found" if not text else f"{count} user prompts",
    }


def share_url_impl(controller: TimelineController, *, base_url: str) -> dict[str, Any]:
    """Implementation for the `share_url` MCP tool."""
    url = controller.share_url(base_url)
    return {
        "url": url,
        "includes_content": parse_fragment(url).content is not None,
    }


def restore_share_fragment_impl(
    controller: TimelineController,
    *,
    fragment: str,
) -> dict[str, Any]:
    """Implementation for the `restore_share_fragment` MCP tool."""
    restored = controller.apply_fragment(fragment)
    state = controller.state
    out: dict[str, Any] = {
        "tz": state.tz_mode.value,
        "filters": _filters_to_dict(state.filters),
        "content_restored": restored.content is not None,
        "count": len(state.events),
    }
    if restored.content is not None and state.status is not None:
        out["status"] = state.status.kind.value
        out["message"] = state.status.message
    return out
