"""Filtering and query helpers over a loaded event collection."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence

from .models import FilterState, ParsedEvent, SessionEvent

ALL_TYPES = "all"

# Bookkeeping events hidden by the "hide tool details" toggle.
HIDDEN_DETAIL_TYPES = frozenset(
    {
        "assistant.turn_start",
        "assistant.turn_end",
        "session.truncation",
    }
)


def search_text(event: SessionEvent) -> str:
    """Compact JSON of the whole wire event, as matched by free-text search."""
    return json.dumps(event.fields, ensure_ascii=False, separators=(",", ":"), default=str)


def matches(event: ParsedEvent, filters: FilterState) -> bool:
    """Return True when the event passes every predicate of ``filters``."""
    if filters.type != ALL_TYPES and event.type != filters.type:
        return False
    if filters.hide_tool_details and event.type in HIDDEN_DETAIL_TYPES:
        return False
    if filters.query:
        if filters.query.lower() not in search_text(event.event).lower():
            return False
    return True


def filter_events(events: Iterable[ParsedEvent], filters: FilterState) -> list[ParsedEvent]:
    """Return the events that pass ``filters``, in their original order."""
    return [e for e in events if matches(e, filters)]


def unique_types(events: Sequence[ParsedEvent]) -> list[str]:
    """Distinct event types present in ``events``, sorted ascending."""
    return sorted({e.type for e in events})
