from __future__ import annotations

import pytest

from mcp_session_timeline.core.codec import decode_text, encode_text


@pytest.mark.parametrize(
    "text",
    [
        "",
        "hello world",
        "héllo ✓ 日本語 🎉",
        '{"type":"user.message","data":{"content":"line\\nbreak"}}\n',
    ],
)
def test_round_trip(text: str) -> None:
    assert decode_text(encode_text(text)) == text


def test_round_trip_large_content() -> None:
    text = ("ünïcode line ✓\n" * 5000)[:60_000]
    assert len(text) >= 50_000
    assert decode_text(encode_text(text)) == text


def test_encoding_matches_base64_of_utf8() -> None:
    assert encode_text("hi") == "aGk="
    assert encode_text("✓") == "4pyT"
    assert encode_text("???") == "Pz8/"


def test_decode_ignores_whitespace_and_missing_padding() -> None:
    assert decode_text("aGk") == "hi"
    assert decode_text(" aG\nk= ") == "hi"


def test_failures_return_empty_string() -> None:
    assert encode_text("\ud800") == ""
    assert decode_text("!!!!") == ""
    assert decode_text("/w==") == ""  # 0xFF is not valid UTF-8
    assert decode_text("a") == ""


def test_decode_rejects_url_safe_alphabet() -> None:
    assert decode_text("Pz8/") == "???"
    assert decode_text("Pz8_") == ""
    assert decode_text("-w==") == ""
