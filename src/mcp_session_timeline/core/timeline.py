"""Derived timeline views: day groups, per-row deltas and overall duration."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import tzinfo

from .classify import badge_class, category_for, summarize_event
from .models import Category, ParsedEvent, TzMode
from .timefmt import UNKNOWN, day_key, delta_ms, format_delta, format_timestamp


@dataclass(frozen=True, slots=True)
class DayGroup:
    day: str
    events: list[ParsedEvent]


@dataclass(frozen=True, slots=True)
class TimelineRow:
    """Display-ready projection of one event."""

    id: str | None
    index: int
    type: str
    category: Category
    badge: str
    day: str
    time: str
    delta: str  # vs. the previous event of the same day, "" unless positive
    offset: str  # vs. the first visible event, "" when either time is unknown
    summary: str


def group_by_day(
    events: Sequence[ParsedEvent],
    tz_mode: TzMode = TzMode.LOCAL,
    *,
    local_tz: tzinfo | None = None,
) -> list[DayGroup]:
    """Split consecutive events into groups sharing a day key."""
    groups: list[DayGroup] = []
    current: str | None = None
    for e in events:
        day = day_key(e.resolved, tz_mode, local_tz=local_tz)
        if day != current:
            current = day
            groups.append(DayGroup(day=day, events=[]))
        groups[-1].events.append(e)
    return groups


def duration(events: Sequence[ParsedEvent]) -> str:
    """Formatted span from the first to the last event ("-" when empty)."""
    if not events:
        return UNKNOWN
    return format_delta(events[-1].sort_key - events[0].sort_key)


def timeline_rows(
    events: Sequence[ParsedEvent],
    tz_mode: TzMode = TzMode.LOCAL,
    *,
    local_tz: tzinfo | None = None,
) -> list[TimelineRow]:
    rows: list[TimelineRow] = []
    first = events[0].resolved if events else None
    for group in group_by_day(events, tz_mode, local_tz=local_tz):
        previous: ParsedEvent | None = None
        for e in group.events:
            delta = ""
            if previous is not None:
                step = delta_ms(previous.resolved, e.resolved)
                if step is not None and step > 0:
                    delta = format_delta(step)
            rows.append(
                TimelineRow(
                    id=e.id,
                    index=e.index,
                    type=e.type,
                    category=category_for(e.type),
                    badge=badge_class(e.type),
                    day=group.day,
                    time=format_timestamp(e.resolved, tz_mode, local_tz=local_tz),
                    delta=delta,
                    offset=format_delta(delta_ms(first, e.resolved)),
                    summary=summarize_event(e),
                )
            )
            previous = e
    return rows
