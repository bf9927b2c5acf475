"""Payload interfaces and text helpers shared by the payload models."""

from __future__ import annotations

import math
import re
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

SUMMARY_MAX_LEN = 260
ELLIPSIS = "…"

_WS_RE = re.compile(r"\s+")


def one_line(text: str, *, max_len: int = SUMMARY_MAX_LEN) -> str:
    """Collapse whitespace and cap the result at ``max_len`` characters."""
    single = _WS_RE.sub(" ", text).strip()
    if len(single) <= max_len:
        return single
    return single[: max_len - 1] + ELLIPSIS


def is_falsy(value: Any) -> bool:
    """Falsy in the JSON sense used by the summaries: null, false, "", 0, NaN."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def js_string(value: Any) -> str:
    """Render a JSON value the way string interpolation does in the log producer."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def display(value: Any, default: str = "") -> str:
    """Render a JSON scalar for a summary, falling back when it is falsy."""
    if is_falsy(value):
        return default
    return js_string(value)


class EventPayload(BaseModel):
    """Typed view over an event's ``data`` for one known event type."""

    model_config = ConfigDict(extra="allow", frozen=True)

    event_type: ClassVar[str] = ""

    def summary(self) -> str:
        """Return the one-line summary for this payload."""
        raise NotImplementedError
