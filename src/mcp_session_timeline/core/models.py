"""Core data models for session timelines."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class Category(str, Enum):
    """Coarse event grouping derived from the type prefix."""

    SESSION = "session"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"
    OTHER = "other"


class TzMode(str, Enum):
    """Timezone used when rendering instants."""

    LOCAL = "local"
    UTC = "utc"


class StatusKind(str, Enum):
    """Outcome of a load operation."""

    GOOD = "good"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class SessionEvent:
    """One event exactly as it appears on the wire.

    ``fields`` is the decoded JSON object with its original key order. The
    accessors normalize the well-known keys without touching the mapping.
    """

    fields: dict[str, Any]

    @property
    def type(self) -> str:
        value = self.fields.get("type")
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @property
    def data(self) -> dict[str, Any]:
        value = self.fields.get("data")
        return value if isinstance(value, dict) else {}

    @property
    def id(self) -> str | None:
        value = self.fields.get("id")
        return None if value is None else str(value)

    @property
    def timestamp(self) -> Any:
        return self.fields.get("timestamp")

    @property
    def parent_id(self) -> str | None:
        value = self.fields.get("parentId")
        return None if value is None else str(value)


@dataclass(frozen=True, slots=True)
class ParsedEvent:
    """A wire event plus the fields attached while parsing."""

    event: SessionEvent
    raw_line: str
    resolved: datetime | None  # None when the timestamp could not be parsed
    index: int  # zero-based position among non-blank input lines

    @property
    def type(self) -> str:
        return self.event.type

    @property
    def id(self) -> str | None:
        return self.event.id

    @property
    def sort_key(self) -> float:
        """Milliseconds since the epoch; unknown instants sort as 0."""
        if self.resolved is None:
            return 0.0
        return self.resolved.timestamp() * 1000.0


@dataclass(frozen=True, slots=True)
class FilterState:
    """Compound filter applied over the loaded events."""

    query: str = ""
    type: str = "all"
    hide_tool_details: bool = False


@dataclass(frozen=True, slots=True)
class LoadStatus:
    """User-facing result of the latest load."""

    kind: StatusKind
    message: str


@dataclass(frozen=True, slots=True)
class TimelineState:
    """The single "current view": loaded events, filters and timezone."""

    events: tuple[ParsedEvent, ...] = ()
    filters: FilterState = field(default_factory=FilterState)
    tz_mode: TzMode = TzMode.LOCAL
    source_label: str | None = None
    status: LoadStatus | None = None

    @property
    def loaded(self) -> bool:
        return self.source_label is not None
