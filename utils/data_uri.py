"""Helpers for self-describing inline image payloads (base64 data URIs)."""
import base64
import binascii
import re
from typing import Tuple

DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)

# Matches data URIs embedded in larger strings (e.g. JSON request bodies)
_EMBEDDED_DATA_URI = re.compile(r"data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>[A-Za-z0-9+/=]+)")


def parse_data_uri(uri: str) -> Tuple[str, bytes]:
    """
    Split an image data URI into its MIME type and decoded bytes.

    Raises:
        ValueError: if the string is not a base64 image data URI
    """
    if not isinstance(uri, str):
        raise ValueError("Image must be a data URI string")

    match = DATA_URI_PATTERN.match(uri.strip())
    if not match:
        raise ValueError("Image must be a data URI of the form data:<mimetype>;base64,<data>")

    mime_type = match.group("mime").lower()
    if not mime_type.startswith("image/"):
        raise ValueError(f"Unsupported MIME type for image: {mime_type}")

    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Image data is not valid base64: {e}")

    if not data:
        raise ValueError("Image data is empty")

    return mime_type, data


def to_data_uri(data: bytes, mime_type: str = "image/png") -> str:
    """Encode raw bytes as a data URI."""
    encoded = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def abbreviate_data_uris(text: str) -> str:
    """Replace embedded data URI payloads with a short size marker, for logging."""
    def _shorten(match: re.Match) -> str:
        return f"data:{match.group('mime')};base64,<{len(match.group('data'))} chars>"

    return _EMBEDDED_DATA_URI.sub(_shorten, text)
