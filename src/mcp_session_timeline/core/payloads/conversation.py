"""Payloads for user and assistant events."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from .base import EventPayload, display, js_string, one_line


class UserMessage(EventPayload):
    event_type: ClassVar[str] = "user.message"

    content: Any = None
    attachments: Any = None

    def summary(self) -> str:
        return one_line(f"User: {display(self.content)}")


class AssistantMessage(EventPayload):
    """Assistant reply; may carry tool requests instead of text."""

    event_type: ClassVar[str] = "assistant.message"

    message_id: Any = Field(default=None, alias="messageId")
    content: Any = None
    tool_requests: list[Any] | None = Field(default=None, alias="toolRequests")

    def tool_names(self) -> list[str]:
        names: list[str] = []
        for request in self.tool_requests or ():
            name = request.get("name") if isinstance(request, dict) else None
            names.append(js_string(name))
        return names

    def summary(self) -> str:
        if self.tool_requests:
            return one_line(f"Assistant calls: {', '.join(self.tool_names())}")
        return one_line(f"Assistant: {display(self.content, '(no content)')}")


class TurnStart(EventPayload):
    event_type: ClassVar[str] = "assistant.turn_start"

    turn_id: Any = Field(default=None, alias="turnId")

    def summary(self) -> str:
        return f"Turn {display(self.turn_id, '?')} started"


class TurnEnd(EventPayload):
    event_type: ClassVar[str] = "assistant.turn_end"

    turn_id: Any = Field(default=None, alias="turnId")

    def summary(self) -> str:
        return f"Turn {display(self.turn_id, '?')} ended"
