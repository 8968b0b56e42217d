"""Tests for the Gemini wrapper using a stand-in streaming client."""
from types import SimpleNamespace

import pytest

from common import gemini_client
from utils.data_uri import parse_data_uri
from conftest import REFERENCE_IMAGE


def _chunk(*parts):
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


def _text(text):
    return SimpleNamespace(text=text, inline_data=None)


def _image(data, mime_type="image/png"):
    return SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type))


class StreamingClient:
    def __init__(self, chunks=None, error=None):
        self.calls = []
        self._chunks = chunks or []
        self._error = error
        self.models = self

    def generate_content_stream(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self._error:
            raise self._error
        return iter(self._chunks)


@pytest.fixture
def use_client(monkeypatch):
    def _install(client):
        monkeypatch.setattr(gemini_client, "get_client", lambda: client)
        return client
    return _install


def test_generate_text_joins_streamed_parts(use_client):
    client = use_client(StreamingClient([_chunk(_text("A red car ")), _chunk(_text("on a beach. "))]))
    assert gemini_client.generate_text("system", "prompt") == "A red car on a beach."
    assert client.calls[0]["model"] == gemini_client.Config.GEMINI_TEXT_MODEL


def test_generate_text_can_be_empty(use_client):
    use_client(StreamingClient([SimpleNamespace(candidates=[])]))
    assert gemini_client.generate_text("system", "prompt") == ""


def test_generate_image_returns_first_inline_image(use_client):
    client = use_client(StreamingClient([
        _chunk(_text("Here you go")),
        _chunk(_image(b"first", "image/jpeg"), _image(b"second")),
    ]))
    result = gemini_client.generate_image("system", "prompt", images=[REFERENCE_IMAGE])
    assert parse_data_uri(result) == ("image/jpeg", b"first")
    assert client.calls[0]["model"] == gemini_client.Config.GEMINI_IMAGE_MODEL


def test_generate_image_returns_none_without_image(use_client):
    use_client(StreamingClient([_chunk(_text("I cannot draw that."))]))
    assert gemini_client.generate_image("system", "prompt") is None


def test_images_precede_prompt_in_request(use_client):
    client = use_client(StreamingClient([_chunk(_image(b"img"))]))
    gemini_client.generate_image("system", "draw it", images=[REFERENCE_IMAGE])

    parts = client.calls[0]["contents"][0].parts
    assert parts[0].inline_data.mime_type == "image/png"
    assert parts[0].inline_data.data == parse_data_uri(REFERENCE_IMAGE)[1]
    assert parts[1].text == "draw it"


def test_invalid_image_is_rejected_before_any_call(use_client):
    client = use_client(StreamingClient([_chunk(_image(b"img"))]))
    with pytest.raises(ValueError, match="Image 1"):
        gemini_client.generate_image("system", "prompt", images=["not-a-data-uri"])
    assert client.calls == []


@pytest.mark.parametrize("message,prefix", [
    ("429 RESOURCE_EXHAUSTED: quota exceeded", "AI service rate limit exceeded"),
    ("Request timed out", "AI service timeout"),
    ("500 INTERNAL", "AI service error"),
])
def test_provider_errors_become_runtime_errors(use_client, message, prefix):
    use_client(StreamingClient(error=Exception(message)))
    with pytest.raises(RuntimeError) as excinfo:
        gemini_client.generate_text("system", "prompt")
    assert str(excinfo.value).startswith(prefix)
    assert message in str(excinfo.value)


def test_missing_credential(monkeypatch):
    monkeypatch.setattr(gemini_client.Config, "GEMINI_API_KEY", "")
    with pytest.raises(RuntimeError, match="credential"):
        gemini_client.get_client()
