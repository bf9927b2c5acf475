"""Payloads for ``tool.*`` events."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from .base import EventPayload, display, is_falsy, one_line

ARGUMENT_PREVIEW_KEYS = 2


class ToolExecutionStart(EventPayload):
    event_type: ClassVar[str] = "tool.execution_start"

    tool_call_id: Any = Field(default=None, alias="toolCallId")
    tool_name: Any = Field(default=None, alias="toolName")
    arguments: dict[str, Any] | None = None

    def summary(self) -> str:
        keys = list(self.arguments or {})[:ARGUMENT_PREVIEW_KEYS]
        preview = ", ".join(f"{k}=..." for k in keys)
        return one_line(f"⚡ {display(self.tool_name, 'tool')}({preview})")


class ToolExecutionComplete(EventPayload):
    event_type: ClassVar[str] = "tool.execution_complete"

    tool_call_id: Any = Field(default=None, alias="toolCallId")
    tool_name: Any = Field(default=None, alias="toolName")
    success: Any = None
    result: Any = None

    def summary(self) -> str:
        status = "✗" if is_falsy(self.success) else "✓"
        return one_line(f"{status} {display(self.tool_name, 'tool')} completed")
