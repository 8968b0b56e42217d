"""Tests for inline image payload helpers."""
import pytest

from utils.data_uri import abbreviate_data_uris, parse_data_uri, to_data_uri


def test_parse_returns_mime_and_bytes():
    uri = to_data_uri(b"\x89PNG\r\n\x1a\nabc", "image/png")
    mime_type, data = parse_data_uri(uri)
    assert mime_type == "image/png"
    assert data == b"\x89PNG\r\n\x1a\nabc"


@pytest.mark.parametrize("value", [
    "",
    "https://example.com/cat.png",
    "data:image/png,not-base64-marker",
    "data:text/plain;base64,aGVsbG8=",
    "data:image/png;base64,@@@@",
    "data:image/png;base64,",
    None,
])
def test_parse_rejects_non_image_payloads(value):
    with pytest.raises(ValueError):
        parse_data_uri(value)


def test_abbreviate_data_uris_in_json():
    uri = to_data_uri(b"x" * 300, "image/jpeg")
    body = '{"images": ["%s"], "prompt": "hi"}' % uri
    shortened = abbreviate_data_uris(body)
    assert "data:image/jpeg;base64,<400 chars>" in shortened
    assert '"prompt": "hi"' in shortened
