"""Payloads for ``session.*`` events."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from .base import EventPayload, display, one_line


class SessionStart(EventPayload):
    event_type: ClassVar[str] = "session.start"

    session_id: Any = Field(default=None, alias="sessionId")
    version: Any = None
    producer: Any = None
    copilot_version: Any = Field(default=None, alias="copilotVersion")
    start_time: Any = Field(default=None, alias="startTime")

    def summary(self) -> str:
        producer = display(self.producer, "copilot")
        version = display(self.copilot_version, "?")
        return one_line(f"Session started - {producer} v{version}")


class SessionInfo(EventPayload):
    event_type: ClassVar[str] = "session.info"

    info_type: Any = Field(default=None, alias="infoType")
    message: Any = None

    def summary(self) -> str:
        return one_line(f"[{display(self.info_type, 'info')}] {display(self.message)}")


class SessionEnd(EventPayload):
    event_type: ClassVar[str] = "session.end"

    def summary(self) -> str:
        return "Session ended"


class SessionTruncation(EventPayload):
    """Context-window truncation report."""

    event_type: ClassVar[str] = "session.truncation"

    token_limit: Any = Field(default=None, alias="tokenLimit")
    tokens_removed: Any = Field(default=None, alias="tokensRemovedDuringTruncation")
    messages_removed: Any = Field(default=None, alias="messagesRemovedDuringTruncation")
    performed_by: Any = Field(default=None, alias="performedBy")

    def summary(self) -> str:
        return one_line(f"Truncation: {display(self.tokens_removed, '0')} tokens removed")
