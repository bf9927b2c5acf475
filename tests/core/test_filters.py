from __future__ import annotations

from mcp_session_timeline.core.filters import HIDDEN_DETAIL_TYPES, filter_events, unique_types
from mcp_session_timeline.core.models import FilterState
from mcp_session_timeline.core.parser import parse_jsonl


def _ids(events) -> list[str | None]:
    return [e.id for e in events]


def test_query_scans_the_whole_event(event_line) -> None:
    events = parse_jsonl(
        "\n".join(
            [
                event_line("tool.execution_start", {"toolName": "bash"}, id="1"),
                event_line("user.message", {"content": "call a tool"}, id="2"),
                event_line("user.message", {"content": "unrelated"}, id="3"),
            ]
        )
    )

    out = filter_events(events, FilterState(query="tool", type="all", hide_tool_details=False))

    assert _ids(out) == ["1", "2"]


def test_query_is_case_insensitive_and_reaches_nested_fields(event_line) -> None:
    events = parse_jsonl(
        "\n".join(
            [
                event_line("tool.execution_complete", {"result": {"content": "Needle"}}, id="a"),
                event_line("user.message", {"content": "haystack"}, id="b"),
            ]
        )
    )

    assert _ids(filter_events(events, FilterState(query="NEEDLE"))) == ["a"]
    assert _ids(filter_events(events, FilterState(query="b"))) == ["b"]


def test_query_matches_non_ascii_text(event_line) -> None:
    events = parse_jsonl(event_line("user.message", {"content": "Ünïcode ✓"}, id="u"))

    assert _ids(filter_events(events, FilterState(query="ünï"))) == ["u"]


def test_type_filter_is_exact(session_text: str) -> None:
    events = parse_jsonl(session_text)

    out = filter_events(events, FilterState(type="user.message"))

    assert _ids(out) == ["e2", "e7"]
    assert filter_events(events, FilterState(type="user")) == []


def test_hide_tool_details_excludes_exactly_the_noise_types(event_line) -> None:
    types = sorted(HIDDEN_DETAIL_TYPES) + ["assistant.message", "tool.execution_start"]
    events = parse_jsonl("\n".join(event_line(t, id=t) for t in types))

    out = filter_events(events, FilterState(hide_tool_details=True))

    assert _ids(out) == ["assistant.message", "tool.execution_start"]


def test_predicates_are_and_combined(session_text: str) -> None:
    events = parse_jsonl(session_text)

    out = filter_events(events, FilterState(query="tests", type="user.message"))

    assert _ids(out) == ["e7"]
    assert filter_events(events, FilterState(query="tests", type="session.end")) == []


def test_identity_filter_returns_input(session_text: str) -> None:
    events = parse_jsonl(session_text)

    assert filter_events(events, FilterState()) == events


def test_filtering_is_idempotent_and_does_not_mutate(session_text: str) -> None:
    events = parse_jsonl(session_text)
    before = list(events)
    filters = FilterState(query="e", type="all", hide_tool_details=True)

    once = filter_events(events, filters)
    twice = filter_events(once, filters)

    assert twice == once
    assert events == before


def test_unique_types_sorted_from_full_collection(session_text: str) -> None:
    events = parse_jsonl(session_text)

    assert unique_types(events) == [
        "assistant.turn_end",
        "assistant.turn_start",
        "session.end",
        "session.start",
        "tool.execution_complete",
        "tool.execution_start",
        "user.message",
    ]
    assert unique_types([]) == []
