"""Shareable view state encoded into a URL fragment.

Fragment keys: ``tz``, ``q``, ``type``, ``hide`` and ``content``. Keys that are
missing mean "use the default"; unknown keys are ignored.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from urllib.parse import parse_qsl, urlencode, urldefrag

from .codec import decode_text, encode_text
from .filters import ALL_TYPES
from .models import FilterState, ParsedEvent, TzMode

logger = logging.getLogger(__name__)

DEFAULT_SHARE_MAX_CHARS = 50_000
SHARE_MAX_CHARS_ENV = "SESSION_TIMELINE_SHARE_MAX_CHARS"


@dataclass(frozen=True, slots=True)
class ShareState:
    """View state restored from (or written to) a URL fragment."""

    tz_mode: TzMode = TzMode.LOCAL
    filters: FilterState = field(default_factory=FilterState)
    content: str | None = None


def resolve_share_max_chars(max_chars: int | None = None) -> int:
    if max_chars is not None:
        if max_chars < 0:
            raise ValueError("max_chars must be >= 0")
        return max_chars

    env = os.getenv(SHARE_MAX_CHARS_ENV)
    if env:
        try:
            value = int(env)
        except ValueError as exc:
            raise ValueError(f"{SHARE_MAX_CHARS_ENV} must be an integer") from exc
        if value < 0:
            raise ValueError(f"{SHARE_MAX_CHARS_ENV} must be >= 0")
        return value
    return DEFAULT_SHARE_MAX_CHARS


def shared_content(events: Sequence[ParsedEvent]) -> str:
    """Raw lines of the loaded events, one per line, in timeline order."""
    return "\n".join(e.raw_line for e in events)


def build_fragment(
    tz_mode: TzMode,
    filters: FilterState,
    content: str | None = None,
    *,
    max_chars: int | None = None,
) -> str:
    """Encode view state (and small content) as a query-string fragment."""
    params: list[tuple[str, str]] = [("tz", TzMode(tz_mode).value)]
    if filters.query:
        params.append(("q", filters.query))
    if filters.type != ALL_TYPES:
        params.append(("type", filters.type))
    if filters.hide_tool_details:
        params.append(("hide", "1"))

    if content is not None:
        limit = resolve_share_max_chars(max_chars)
        if len(content) < limit:
            encoded = encode_text(content)
            if encoded:
                params.append(("content", encoded))
            else:
                logger.warning("Content could not be encoded; sharing filters only")
        else:
            logger.info(
                "Content is %d chars (limit %d); sharing filters only", len(content), limit
            )
    return urlencode(params)


def build_share_url(
    base_url: str,
    tz_mode: TzMode,
    filters: FilterState,
    content: str | None = None,
    *,
    max_chars: int | None = None,
) -> str:
    """Join ``base_url`` (without its fragment) with the encoded view state."""
    base, _ = urldefrag(base_url)
    return f"{base}#{build_fragment(tz_mode, filters, content, max_chars=max_chars)}"


def parse_fragment(fragment: str) -> ShareState:
    """Restore view state from a URL fragment (leading ``#`` optional)."""
    if "#" in fragment:
        fragment = fragment.split("#", 1)[1]

    params: dict[str, str] = {}
    for key, value in parse_qsl(fragment, keep_blank_values=True):
        params.setdefault(key, value)

    tz_mode = TzMode.LOCAL
    tz = params.get("tz")
    if tz in (TzMode.LOCAL.value, TzMode.UTC.value):
        tz_mode = TzMode(tz)

    filters = FilterState(
        query=params.get("q") or "",
        type=params.get("type") or ALL_TYPES,
        hide_tool_details=params.get("hide") == "1",
    )

    content: str | None = None
    encoded = params.get("content")
    if encoded:
        decoded = decode_text(encoded)
        if decoded:
            content = decoded
        else:
            logger.error("Failed to decode content from shared fragment")

    return ShareState(tz_mode=tz_mode, filters=filters, content=content)
