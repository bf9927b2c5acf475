"""JSONL session-log parser.

Turns raw line-oriented text into timestamp-ordered :class:`ParsedEvent` records.
Malformed lines are logged and skipped; they never abort the parse.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import UTC, datetime
from typing import Any

from .models import ParsedEvent, SessionEvent

logger = logging.getLogger(__name__)

# Whitespace plus the byte-order mark, which str.strip() keeps.
_EDGE_RE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


class MalformedLineError(ValueError):
    """A non-blank line that is not a JSON object."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def parse_timestamp(value: Any) -> datetime | None:
    """Resolve a wire timestamp into an aware UTC datetime.

    Strings are read as ISO-8601 (UTC assumed when no offset is given);
    numbers are read as epoch milliseconds. Anything else yields None.
    """
    if isinstance(value, bool) or value is None:
        return None
    try:
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value / 1000.0, tz=UTC)
        if isinstance(value, str):
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=UTC)
            return dt.astimezone(UTC)
    except (ValueError, OverflowError, OSError):
        return None
    return None


def parse_line(line: str, index: int) -> ParsedEvent:
    """Parse one stripped, non-blank line into a ParsedEvent."""
    obj = json.loads(line, parse_constant=_reject_constant)
    if not isinstance(obj, dict):
        raise MalformedLineError(f"expected a JSON object, got {type(obj).__name__}")
    event = SessionEvent(fields=obj)
    return ParsedEvent(
        event=event,
        raw_line=line,
        resolved=parse_timestamp(event.timestamp),
        index=index,
    )


def parse_jsonl(content: str) -> list[ParsedEvent]:
    """Parse JSONL text into events sorted by timestamp (stable for ties)."""
    events: list[ParsedEvent] = []
    index = 0
    for line_no, physical in enumerate(content.split("\n"), start=1):
        line = _EDGE_RE.sub("", physical)
        if not line:
            continue
        try:
            events.append(parse_line(line, index))
        except ValueError as exc:
            logger.warning("Failed to parse line %d: %s", line_no, exc)
        index += 1

    events.sort(key=lambda e: e.sort_key)
    logger.debug("Parsed %d events from %d non-blank lines", len(events), index)
    return events
