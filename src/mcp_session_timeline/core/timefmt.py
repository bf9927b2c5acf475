"""Timestamp and delta rendering helpers.

All output is fixed-width and locale-independent; the only switch is the
:class:`TzMode` (runtime local zone or UTC).
"""

from __future__ import annotations

import math
from datetime import UTC, datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal

from .models import TzMode

UNKNOWN = "-"

_SECOND_MS = 1_000
_MINUTE_MS = 60_000
_HOUR_MS = 3_600_000
_DAY_MS = 86_400_000


def _in_mode(dt: datetime, tz_mode: TzMode, local_tz: tzinfo | None) -> datetime:
    if tz_mode == TzMode.UTC:
        return dt.astimezone(UTC)
    return dt.astimezone(local_tz)


def _date_part(dt: datetime) -> str:
    return f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"


def format_offset(dt: datetime) -> str:
    """Render an aware datetime's UTC offset as ``±HH:MM``."""
    offset = dt.utcoffset()
    minutes = int(offset.total_seconds() // 60) if offset is not None else 0
    sign = "+" if minutes >= 0 else "-"
    minutes = abs(minutes)
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def format_timestamp(
    dt: datetime | None,
    tz_mode: TzMode = TzMode.LOCAL,
    *,
    local_tz: tzinfo | None = None,
) -> str:
    """``YYYY-MM-DD HH:MM:SS.mmm`` followed by ``Z`` or `` ±HH:MM``."""
    if dt is None:
        return UNKNOWN
    try:
        shown = _in_mode(dt, tz_mode, local_tz)
    except (OverflowError, ValueError):
        return UNKNOWN
    clock = (
        f"{_date_part(shown)} {shown.hour:02d}:{shown.minute:02d}:{shown.second:02d}"
        f".{shown.microsecond // 1000:03d}"
    )
    if tz_mode == TzMode.UTC:
        return f"{clock}Z"
    return f"{clock} {format_offset(shown)}"


def day_key(
    dt: datetime | None,
    tz_mode: TzMode = TzMode.LOCAL,
    *,
    local_tz: tzinfo | None = None,
) -> str:
    """``YYYY-MM-DD`` of the instant in the selected mode."""
    if dt is None:
        return UNKNOWN
    try:
        return _date_part(_in_mode(dt, tz_mode, local_tz))
    except (OverflowError, ValueError):
        return UNKNOWN


def delta_ms(start: datetime | None, end: datetime | None) -> float | None:
    """Milliseconds from ``start`` to ``end``; None when either is unknown."""
    if start is None or end is None:
        return None
    return (end - start).total_seconds() * 1000.0


def _fixed(value: float, places: int) -> str:
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_delta(ms: float | None) -> str:
    """Render a signed duration in milliseconds, e.g. ``+1.00s`` or ``-3m 07s``."""
    if ms is None or not math.isfinite(ms):
        return ""
    sign = "-" if ms < 0 else "+"
    magnitude = abs(ms)

    if magnitude < _SECOND_MS:
        return f"{sign}{math.floor(magnitude + 0.5)}ms"
    if magnitude < _MINUTE_MS:
        places = 2 if magnitude < 10 * _SECOND_MS else 1
        return f"{sign}{_fixed(magnitude / _SECOND_MS, places)}s"
    if magnitude < _HOUR_MS:
        m = int(magnitude // _MINUTE_MS)
        s = int((magnitude % _MINUTE_MS) // _SECOND_MS)
        return f"{sign}{m}m {s:02d}s"
    if magnitude < _DAY_MS:
        h = int(magnitude // _HOUR_MS)
        m = int((magnitude % _HOUR_MS) // _MINUTE_MS)
        return f"{sign}{h}h {m}m"
    d = int(magnitude // _DAY_MS)
    h = int((magnitude % _DAY_MS) // _HOUR_MS)
    return f"{sign}{d}d {h}h"
