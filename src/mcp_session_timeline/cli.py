from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from mcp_session_timeline.core.filters import ALL_TYPES
from mcp_session_timeline.core.loader import TimelineController
from mcp_session_timeline.core.models import FilterState, StatusKind, TzMode
from mcp_session_timeline.core.timeline import duration, timeline_rows


def _parse_tz(s: str) -> TzMode:
    try:
        return TzMode(s.strip().lower())
    except ValueError as e:
        raise argparse.ArgumentTypeError("Invalid tz. Allowed: local, utc") from e


def _print_timeline(controller: TimelineController) -> None:
    state = controller.state
    visible = controller.filtered()
    current_day = None
    for row in timeline_rows(visible, state.tz_mode):
        if row.day != current_day:
            current_day = row.day
            print(f"── {row.day} ──")
        offset = f"t{row.offset}" if row.offset else ""
        print(f"{row.time} {row.delta:>9} {offset:>10} [{row.type}] {row.summary}")

    span = duration(visible)
    print(f"\n{len(visible)} showing / {len(state.events)} events (duration: {span})")


def main() -> None:
    p = argparse.ArgumentParser(description="Render a JSONL session log as a timeline.")
    p.add_argument("source", nargs="?", default=None, help="Path or http(s) URL of a .jsonl log")
    p.add_argument("-q", "--query", default="", help="Case-insensitive full-text filter")
    p.add_argument("--type", default=ALL_TYPES, help="Only show this event type (default: all)")
    p.add_argument(
        "--hide-tool-details",
        action="store_true",
        help="Hide turn start/end and truncation events",
    )
    p.add_argument("--tz", type=_parse_tz, default=TzMode.LOCAL, help="local (default) or utc")
    p.add_argument("--fragment", default=None, help="Restore view state from a share URL fragment")
    p.add_argument("--types", action="store_true", help="List distinct event types and exit")
    p.add_argument("--prompts", action="store_true", help="Print all user prompts and exit")
    p.add_argument("--share", metavar="BASE_URL", default=None, help="Print a share URL and exit")
    args = p.parse_args()

    level_name = os.getenv("SESSION_TIMELINE_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    controller = TimelineController()
    controller.set_tz_mode(args.tz)
    controller.set_filters(
        FilterState(query=args.query, type=args.type, hide_tool_details=args.hide_tool_details)
    )

    try:
        if args.fragment:
            controller.apply_fragment(args.fragment)
        if args.source:
            status = asyncio.run(controller.load(args.source))
        elif controller.state.status is not None:
            status = controller.state.status
        else:
            p.error("a source or a --fragment with embedded content is required")

        if status.kind != StatusKind.GOOD:
            print(status.message, file=sys.stderr)
            raise SystemExit(2 if status.kind == StatusKind.ERROR else 1)

        if args.types:
            print("\n".join(controller.event_types()))
        elif args.prompts:
            text = controller.user_prompts()
            print(text if text else "No user messages found")
        elif args.share:
            print(controller.share_url(args.share))
        else:
            _print_timeline(controller)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    main()
