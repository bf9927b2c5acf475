from __future__ import annotations

from datetime import timedelta, timezone

from mcp_session_timeline.core.models import Category, TzMode
from mcp_session_timeline.core.parser import parse_jsonl
from mcp_session_timeline.core.timeline import duration, group_by_day, timeline_rows

AEST = timezone(timedelta(hours=10))


def test_rows_for_two_event_example() -> None:
    content = (
        '{"type":"user.message","data":{"content":"hi"},"id":"1",'
        '"timestamp":"2024-01-01T00:00:00.000Z","parentId":null}\n'
        '{"type":"session.end","data":{},"id":"2",'
        '"timestamp":"2024-01-01T00:00:01.000Z","parentId":null}'
    )
    rows = timeline_rows(parse_jsonl(content), TzMode.UTC)

    assert [r.summary for r in rows] == ["User: hi", "Session ended"]
    assert [r.delta for r in rows] == ["", "+1.00s"]
    assert rows[0].time == "2024-01-01 00:00:00.000Z"
    assert rows[0].category == Category.USER
    assert rows[1].badge == "badge-session"


def test_group_by_day_uses_selected_mode(event_line) -> None:
    events = parse_jsonl(
        "\n".join(
            [
                event_line("a", id="1", timestamp="2024-01-01T13:00:00Z"),
                event_line("b", id="2", timestamp="2024-01-01T15:00:00Z"),
            ]
        )
    )

    utc_groups = group_by_day(events, TzMode.UTC)
    local_groups = group_by_day(events, TzMode.LOCAL, local_tz=AEST)

    assert [g.day for g in utc_groups] == ["2024-01-01"]
    assert [(g.day, len(g.events)) for g in local_groups] == [("2024-01-01", 1), ("2024-01-02", 1)]


def test_unknown_timestamps_group_under_placeholder(event_line) -> None:
    events = parse_jsonl(
        "\n".join(
            [
                event_line("a", id="known", timestamp="2024-01-01T00:00:00Z"),
                event_line("b", id="unknown", timestamp="soon"),
            ]
        )
    )

    groups = group_by_day(events, TzMode.UTC)

    assert [g.day for g in groups] == ["-", "2024-01-01"]


def test_delta_restarts_on_each_day(session_text: str) -> None:
    rows = timeline_rows(parse_jsonl(session_text), TzMode.UTC)

    assert [r.day for r in rows].count("2025-10-02") == 1
    assert rows[-1].day == "2025-10-02"
    assert rows[-1].delta == ""
    assert rows[1].delta == "+4.25s"
    assert rows[2].delta == "+50ms"


def test_duration() -> None:
    assert duration([]) == "-"


def test_duration_spans_first_to_last(session_text: str) -> None:
    assert duration(parse_jsonl(session_text)) == "+15h 30m"


def test_equal_timestamps_have_no_delta(event_line) -> None:
    events = parse_jsonl(
        "\n".join(
            [
                event_line("a", id="1", timestamp="2024-01-01T00:00:00Z"),
                event_line("b", id="2", timestamp="2024-01-01T00:00:00Z"),
            ]
        )
    )

    rows = timeline_rows(events, TzMode.UTC)

    assert [r.delta for r in rows] == ["", ""]
    assert [r.offset for r in rows] == ["+0ms", "+0ms"]


def test_offset_is_relative_to_first_visible_event(session_text: str) -> None:
    rows = timeline_rows(parse_jsonl(session_text), TzMode.UTC)

    assert rows[0].offset == "+0ms"
    assert rows[1].offset == "+4.25s"
    assert rows[6].offset == "+2m 00s"
    assert rows[-1].offset == "+15h 30m"


def test_offset_empty_when_first_time_unknown(event_line) -> None:
    events = parse_jsonl(
        "\n".join(
            [
                event_line("a", id="known", timestamp="2024-01-01T00:00:00Z"),
                event_line("b", id="unknown", timestamp="soon"),
            ]
        )
    )

    rows = timeline_rows(events, TzMode.UTC)

    assert [r.id for r in rows] == ["unknown", "known"]
    assert [r.offset for r in rows] == ["", ""]
