"""Export helpers: clean event JSON, raw lines and the user-prompt digest."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from .models import ParsedEvent
from .payloads import js_string

PROMPT_SEPARATOR = "\n\n---\n\n"
DETAIL_MAX_STRING = 500
TRUNCATED_MARKER = "…[truncated]"


def clean_event(event: ParsedEvent) -> dict[str, Any]:
    """The wire event without any parse-time fields."""
    return dict(event.event.fields)


def event_json(event: ParsedEvent, *, indent: int = 2) -> str:
    """Pretty-printed clean event, as copied from the detail view."""
    return json.dumps(clean_event(event), ensure_ascii=False, indent=indent, default=str)


def raw_line(event: ParsedEvent) -> str:
    return event.raw_line


def truncate_strings(value: Any, max_len: int = DETAIL_MAX_STRING) -> Any:
    """Recursively cut long strings for display; returns a new structure."""
    if isinstance(value, str):
        return value[:max_len] + TRUNCATED_MARKER if len(value) > max_len else value
    if isinstance(value, list):
        return [truncate_strings(item, max_len) for item in value]
    if isinstance(value, dict):
        return {k: truncate_strings(v, max_len) for k, v in value.items()}
    return value


def user_prompts(events: Iterable[ParsedEvent]) -> str:
    """All ``user.message`` contents joined by a blank-line separator."""
    contents = [
        js_string(e.event.data.get("content") or "")
        for e in events
        if e.type == "user.message"
    ]
    return PROMPT_SEPARATOR.join(contents)
