"""Event category, badge and one-line summary derivation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .models import Category, ParsedEvent, SessionEvent
from .payloads import Payload, parse_payload

_BADGES: dict[Category, str] = {
    Category.USER: "badge-user",
    Category.ASSISTANT: "badge-assistant",
    Category.SESSION: "badge-session",
    Category.TOOL: "badge-tool",
    Category.OTHER: "badge-info",
}


def category_for(event_type: str) -> Category:
    """Category from the first dot-delimited segment of the type."""
    prefix, sep, _ = event_type.partition(".")
    if not sep:
        return Category.OTHER
    try:
        category = Category(prefix)
    except ValueError:
        return Category.OTHER
    return category


def badge_class(event_type: str) -> str:
    return _BADGES[category_for(event_type)]


def payload_for(event: ParsedEvent | SessionEvent) -> Payload:
    wire = event.event if isinstance(event, ParsedEvent) else event
    return parse_payload(wire.type, wire.data)


def summarize(event_type: str, data: Mapping[str, Any]) -> str:
    """One-line summary for an event's ``(type, data)``."""
    return parse_payload(event_type, data).summary()


def summarize_event(event: ParsedEvent | SessionEvent) -> str:
    return payload_for(event).summary()
