"""Reversible text encoding for shareable URL fragments.

The encoding is base64 over the UTF-8 bytes, which is what a browser produces
with ``btoa(unescape(encodeURIComponent(text)))``. Failures never raise: both
directions return an empty string, which callers treat as "unavailable".
"""

from __future__ import annotations

import base64
import binascii
import logging
import re

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"[\t\n\f\r ]+")


def encode_text(text: str) -> str:
    """Encode arbitrary text into a base64 string ("" on failure)."""
    try:
        raw = text.encode("utf-8")
    except (UnicodeEncodeError, AttributeError) as exc:
        logger.debug("Cannot encode text for sharing: %s", exc)
        return ""
    return base64.b64encode(raw).decode("ascii")


def decode_text(encoded: str) -> str:
    """Decode a string produced by :func:`encode_text` ("" on failure).

    Only the standard alphabet is accepted. ASCII whitespace is ignored and
    missing padding is tolerated, as a browser's ``atob`` does.
    """
    try:
        compact = _WS_RE.sub("", encoded)
        compact += "=" * (-len(compact) % 4)
        raw = base64.b64decode(compact, validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, TypeError, ValueError) as exc:
        logger.debug("Cannot decode shared text: %s", exc)
        return ""
