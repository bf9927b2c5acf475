"""Session-log loading and the "current view" controller.

This module is the only async boundary: a source (local path or URL) is read
completely, then handed to the synchronous parse/filter pipeline.
"""

from __future__ import annotations

import gzip
import logging
import os
import zlib
from contextlib import asynccontextmanager
from dataclasses import replace
from pathlib import Path

import aiofiles
import httpx
from aiofiles.threadpool import wrap

from .exports import user_prompts
from .filters import filter_events, unique_types
from .models import FilterState, LoadStatus, ParsedEvent, StatusKind, TimelineState, TzMode
from .parser import parse_jsonl
from .share import ShareState, build_share_url, parse_fragment, shared_content

logger = logging.getLogger(__name__)

BASE_DIR_ENV = "SESSION_TIMELINE_BASE_DIR"
FETCH_TIMEOUT_ENV = "SESSION_TIMELINE_FETCH_TIMEOUT"
DEFAULT_FETCH_TIMEOUT = 30.0
SHARED_SOURCE_LABEL = "shared URL"


class LoadError(RuntimeError):
    """A whole load operation failed (missing file, HTTP error, ...)."""


def base_dir() -> Path:
    """Return the resolved base directory for file loads."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def safe_resolve(path: str | Path) -> Path:
    """Resolve a path under the configured base directory."""
    base = base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


def resolve_fetch_timeout(timeout: float | None = None) -> float:
    if timeout is not None:
        if timeout <= 0:
            raise ValueError("timeout must be > 0")
        return timeout

    env = os.getenv(FETCH_TIMEOUT_ENV)
    if env:
        try:
            value = float(env)
        except ValueError as exc:
            raise ValueError(f"{FETCH_TIMEOUT_ENV} must be a number") from exc
        if value <= 0:
            raise ValueError(f"{FETCH_TIMEOUT_ENV} must be > 0")
        return value
    return DEFAULT_FETCH_TIMEOUT


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str, decode_errors: str):
    """Open a session log for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors)
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors) as f:
            yield f


async def read_file_text(
    path: str | Path,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> str:
    """Read a whole local session log (restricted to the base directory)."""
    try:
        resolved = safe_resolve(path)
    except ValueError as exc:
        raise LoadError(f"{path}: {exc}") from exc
    if not resolved.is_file():
        raise LoadError(f"File not found: {resolved}")
    try:
        async with _open_text(resolved, encoding=encoding, decode_errors=decode_errors) as f:
            return await f.read()
    except (OSError, EOFError, zlib.error) as exc:
        raise LoadError(f"Cannot read {resolved}: {exc}") from exc


async def fetch_url_text(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> str:
    """Fetch a remote session log; non-2xx and network errors raise LoadError."""

    async def _get(c: httpx.AsyncClient) -> str:
        response = await c.get(url)
        response.raise_for_status()
        return response.text

    try:
        if client is not None:
            return await _get(client)
        async with httpx.AsyncClient(
            timeout=resolve_fetch_timeout(timeout), follow_redirects=True
        ) as owned:
            return await _get(owned)
    except httpx.HTTPStatusError as exc:
        raise LoadError(
            f"HTTP {exc.response.status_code} {exc.response.reason_phrase}"
        ) from exc
    except httpx.RequestError as exc:
        raise LoadError(f"Network error: {exc}") from exc


async def read_source(source: str, *, client: httpx.AsyncClient | None = None) -> str:
    """Read a path or URL completely."""
    if is_url(source):
        return await fetch_url_text(source, client=client)
    return await read_file_text(source)


class TimelineController:
    """Owner of the single current view.

    Every load replaces the whole event collection; projections (filtered view,
    distinct types) are recomputed from the state on each call.
    """

    def __init__(self, state: TimelineState | None = None) -> None:
        self.state = state or TimelineState()
        self._generation = 0

    @property
    def events(self) -> tuple[ParsedEvent, ...]:
        return self.state.events

    def _set_status(self, status: LoadStatus) -> LoadStatus:
        self.state = replace(self.state, status=status)
        return status

    def _fail(self, source: str, exc: Exception) -> LoadStatus:
        logger.error("Failed to load %s: %s", source, exc)
        return self._set_status(LoadStatus(StatusKind.ERROR, f"Failed to load {source}: {exc}"))

    def load_text(self, content: str, source: str) -> LoadStatus:
        """Parse ``content`` and, when it holds events, make it the current view."""
        self._generation += 1
        return self._apply_text(content, source)

    def _apply_text(self, content: str, source: str) -> LoadStatus:
        try:
            parsed = parse_jsonl(content)
        except Exception as exc:
            return self._fail(source, exc)

        if not parsed:
            logger.warning("No valid events found in %s", source)
            return self._set_status(
                LoadStatus(StatusKind.WARN, f"No valid events found in {source}.")
            )

        status = LoadStatus(StatusKind.GOOD, f"Loaded {len(parsed)} events from {source}")
        self.state = replace(
            self.state,
            events=tuple(parsed),
            source_label=source,
            status=status,
        )
        logger.info("Loaded %d events from %s", len(parsed), source)
        return status

    async def load(self, source: str, *, client: httpx.AsyncClient | None = None) -> LoadStatus:
        """Read ``source`` and load it; a newer load started meanwhile wins."""
        self._generation += 1
        generation = self._generation
        try:
            content = await read_source(source, client=client)
        except LoadError as exc:
            if generation != self._generation:
                logger.info("Discarding failed load of %s (superseded)", source)
                return LoadStatus(StatusKind.WARN, f"Load of {source} was superseded.")
            return self._fail(source, exc)

        if generation != self._generation:
            logger.info("Discarding stale load of %s", source)
            return LoadStatus(StatusKind.WARN, f"Load of {source} was superseded.")
        return self._apply_text(content, source)

    def set_filters(self, filters: FilterState) -> FilterState:
        self.state = replace(self.state, filters=filters)
        return filters

    def clear_filters(self) -> FilterState:
        return self.set_filters(FilterState())

    def set_tz_mode(self, tz_mode: TzMode | str) -> TzMode:
        mode = TzMode(tz_mode)
        self.state = replace(self.state, tz_mode=mode)
        return mode

    def filtered(self, filters: FilterState | None = None) -> list[ParsedEvent]:
        return filter_events(self.state.events, filters or self.state.filters)

    def event_types(self) -> list[str]:
        return unique_types(self.state.events)

    def get_event(self, event_id: str) -> ParsedEvent:
        for e in self.state.events:
            if e.id == event_id:
                return e
        raise ValueError(f"Unknown event id '{event_id}'.")

    def user_prompts(self) -> str:
        return user_prompts(self.state.events)

    def share_url(self, base_url: str, *, max_chars: int | None = None) -> str:
        if not self.state.events:
            raise ValueError("No events to share.")
        return build_share_url(
            base_url,
            self.state.tz_mode,
            self.state.filters,
            shared_content(self.state.events),
            max_chars=max_chars,
        )

    def apply_fragment(self, fragment: str) -> ShareState:
        """Restore timezone, filters and (when present) content from a fragment."""
        restored = parse_fragment(fragment)
        self.state = replace(self.state, tz_mode=restored.tz_mode, filters=restored.filters)
        if restored.content is not None:
            self.load_text(restored.content, SHARED_SOURCE_LABEL)
        return restored
