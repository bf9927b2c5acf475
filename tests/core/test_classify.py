from __future__ import annotations

import copy

import pytest

from mcp_session_timeline.core.classify import badge_class, category_for, payload_for, summarize
from mcp_session_timeline.core.models import Category, SessionEvent
from mcp_session_timeline.core.payloads import AssistantMessage, GenericPayload


@pytest.mark.parametrize(
    ("event_type", "expected"),
    [
        ("session.start", Category.SESSION),
        ("user.message", Category.USER),
        ("assistant.turn_end", Category.ASSISTANT),
        ("tool.execution_start", Category.TOOL),
        ("hook.pre_tool", Category.OTHER),
        ("other.thing", Category.OTHER),
        ("session", Category.OTHER),
        ("sessions.start", Category.OTHER),
        ("my.session.start", Category.OTHER),
        ("", Category.OTHER),
    ],
)
def test_category_uses_first_segment(event_type: str, expected: Category) -> None:
    assert category_for(event_type) == expected


def test_badge_class_mapping() -> None:
    assert badge_class("user.message") == "badge-user"
    assert badge_class("assistant.message") == "badge-assistant"
    assert badge_class("session.info") == "badge-session"
    assert badge_class("tool.execution_complete") == "badge-tool"
    assert badge_class("custom.event") == "badge-info"


@pytest.mark.parametrize(
    ("event_type", "data", "expected"),
    [
        ("session.start", {}, "Session started - copilot v?"),
        (
            "session.start",
            {"producer": "cli", "copilotVersion": "1.2.3"},
            "Session started - cli v1.2.3",
        ),
        ("session.info", {"infoType": "model", "message": "switched \n  to  x"}, "[model] switched to x"),
        ("session.info", {}, "[info]"),
        ("session.end", {"ignored": 1}, "Session ended"),
        ("session.truncation", {}, "Truncation: 0 tokens removed"),
        ("session.truncation", {"tokensRemovedDuringTruncation": 1234}, "Truncation: 1234 tokens removed"),
        ("user.message", {"content": "hi"}, "User: hi"),
        ("user.message", {}, "User:"),
        (
            "assistant.message",
            {"content": "ignored", "toolRequests": [{"name": "bash"}, {"name": "view"}]},
            "Assistant calls: bash, view",
        ),
        ("assistant.message", {"content": "done", "toolRequests": []}, "Assistant: done"),
        ("assistant.message", {}, "Assistant: (no content)"),
        ("assistant.turn_start", {"turnId": "3"}, "Turn 3 started"),
        ("assistant.turn_start", {}, "Turn ? started"),
        ("assistant.turn_end", {"turnId": "3"}, "Turn 3 ended"),
        ("assistant.turn_end", {"turnId": ""}, "Turn ? ended"),
        (
            "tool.execution_start",
            {"toolName": "bash", "arguments": {"command": "ls", "timeout": 5, "cwd": "/"}},
            "⚡ bash(command=..., timeout=...)",
        ),
        ("tool.execution_start", {}, "⚡ tool()"),
        ("tool.execution_start", {"tool_name": "x"}, "⚡ tool()"),
        ("session.truncation", {"tokens_removed": 9}, "Truncation: 0 tokens removed"),
        ("tool.execution_complete", {"toolName": "bash", "success": True}, "✓ bash completed"),
        ("tool.execution_complete", {"toolName": "bash", "success": False}, "✗ bash completed"),
        ("tool.execution_complete", {}, "✗ tool completed"),
        ("custom.thing", {"content": "x"}, "custom.thing"),
    ],
)
def test_summaries(event_type: str, data: dict, expected: str) -> None:
    assert summarize(event_type, data) == expected


def test_summary_is_capped_with_ellipsis() -> None:
    out = summarize("user.message", {"content": "x" * 300})

    assert len(out) == 260
    assert out.startswith("User: xxx")
    assert out.endswith("…")


def test_turn_summaries_are_verbatim() -> None:
    assert summarize("assistant.turn_start", {"turnId": "a  b"}) == "Turn a  b started"


def test_unknown_type_summary_is_collapsed() -> None:
    assert summarize("weird   type", {}) == "weird type"


def test_invalid_known_shape_falls_back_to_type() -> None:
    event = SessionEvent(fields={"type": "assistant.message", "data": {"toolRequests": "bash"}})

    assert isinstance(payload_for(event), GenericPayload)
    assert summarize("assistant.message", {"toolRequests": "bash"}) == "assistant.message"


def test_payload_is_typed_for_known_types() -> None:
    event = SessionEvent(
        fields={"type": "assistant.message", "data": {"messageId": "m1", "content": "ok"}}
    )
    payload = payload_for(event)

    assert isinstance(payload, AssistantMessage)
    assert payload.message_id == "m1"


def test_summaries_do_not_mutate_data() -> None:
    data = {"toolName": "bash", "arguments": {"a": 1, "b": [1, 2]}, "extra": {"k": "v"}}
    before = copy.deepcopy(data)

    summarize("tool.execution_start", data)

    assert data == before


def test_non_string_values_render_like_json() -> None:
    assert summarize("session.start", {"copilotVersion": 2}) == "Session started - copilot v2"
    assert summarize("user.message", {"content": True}) == "User: true"
