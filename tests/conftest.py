from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

SESSION_LINES = [
    {
        "type": "session.start",
        "data": {"producer": "copilot-agent", "copilotVersion": "0.0.339"},
        "id": "e1",
        "timestamp": "2025-10-01T09:00:00.000Z",
        "parentId": None,
    },
    {
        "type": "user.message",
        "data": {"content": "List the files in src"},
        "id": "e2",
        "timestamp": "2025-10-01T09:00:04.250Z",
        "parentId": "e1",
    },
    {
        "type": "assistant.turn_start",
        "data": {"turnId": "0"},
        "id": "e3",
        "timestamp": "2025-10-01T09:00:04.300Z",
        "parentId": "e2",
    },
    {
        "type": "tool.execution_start",
        "data": {"toolName": "bash", "arguments": {"command": "ls src"}},
        "id": "e4",
        "timestamp": "2025-10-01T09:00:06.000Z",
        "parentId": "e3",
    },
    {
        "type": "tool.execution_complete",
        "data": {"toolName": "bash", "success": True, "result": {"content": "main.py"}},
        "id": "e5",
        "timestamp": "2025-10-01T09:00:06.480Z",
        "parentId": "e4",
    },
    {
        "type": "assistant.turn_end",
        "data": {"turnId": "0"},
        "id": "e6",
        "timestamp": "2025-10-01T09:00:07.000Z",
        "parentId": "e5",
    },
    {
        "type": "user.message",
        "data": {"content": "Now run the tests"},
        "id": "e7",
        "timestamp": "2025-10-01T09:02:00.000Z",
        "parentId": None,
    },
    {
        "type": "session.end",
        "data": {},
        "id": "e8",
        "timestamp": "2025-10-02T00:30:00.000Z",
        "parentId": None,
    },
]


@pytest.fixture
def event_line() -> Callable[..., str]:
    def _line(
        type: str,
        data: dict[str, Any] | None = None,
        *,
        id: str = "1",
        timestamp: Any = "2024-01-01T00:00:00.000Z",
        parent_id: str | None = None,
    ) -> str:
        return json.dumps(
            {
                "type": type,
                "data": data if data is not None else {},
                "id": id,
                "timestamp": timestamp,
                "parentId": parent_id,
            },
            ensure_ascii=False,
        )

    return _line


@pytest.fixture
def session_text() -> str:
    return "\n".join(json.dumps(obj) for obj in SESSION_LINES) + "\n"


@pytest.fixture
def write_session(session_text: str) -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.write_text(session_text, encoding="utf-8")

    return _write
