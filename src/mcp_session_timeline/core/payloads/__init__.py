"""Typed payload models for the event types the timeline knows about.

Every known ``type`` maps to one pydantic model; anything else (or a known
type whose ``data`` has an unexpected shape) becomes a :class:`GenericPayload`
that just carries the raw mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from .base import SUMMARY_MAX_LEN, EventPayload, display, is_falsy, js_string, one_line
from .conversation import AssistantMessage, TurnEnd, TurnStart, UserMessage
from .session import SessionEnd, SessionInfo, SessionStart, SessionTruncation
from .tool import ToolExecutionComplete, ToolExecutionStart

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenericPayload:
    """Catch-all for event types without a dedicated model."""

    type_name: str
    raw: Mapping[str, Any]

    def summary(self) -> str:
        return one_line(self.type_name)


Payload = (
    SessionStart
    | SessionInfo
    | SessionEnd
    | SessionTruncation
    | UserMessage
    | AssistantMessage
    | TurnStart
    | TurnEnd
    | ToolExecutionStart
    | ToolExecutionComplete
    | GenericPayload
)

PAYLOAD_TYPES: dict[str, type[EventPayload]] = {
    model.event_type: model
    for model in (
        SessionStart,
        SessionInfo,
        SessionEnd,
        SessionTruncation,
        UserMessage,
        AssistantMessage,
        TurnStart,
        TurnEnd,
        ToolExecutionStart,
        ToolExecutionComplete,
    )
}


def parse_payload(event_type: str, data: Mapping[str, Any]) -> Payload:
    """Return the typed payload for ``event_type`` (generic when unknown or invalid)."""
    model = PAYLOAD_TYPES.get(event_type)
    if model is None:
        return GenericPayload(type_name=event_type, raw=data)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.debug("Unexpected %s payload shape: %s", event_type, exc)
        return GenericPayload(type_name=event_type, raw=data)


__all__ = [
    "PAYLOAD_TYPES",
    "SUMMARY_MAX_LEN",
    "AssistantMessage",
    "EventPayload",
    "GenericPayload",
    "Payload",
    "SessionEnd",
    "SessionInfo",
    "SessionStart",
    "SessionTruncation",
    "ToolExecutionComplete",
    "ToolExecutionStart",
    "TurnEnd",
    "TurnStart",
    "UserMessage",
    "display",
    "is_falsy",
    "js_string",
    "one_line",
    "parse_payload",
]
