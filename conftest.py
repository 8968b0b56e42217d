"""Shared pytest fixtures: test configuration and a scripted Gemini stand-in."""
import os

# Must be set before config.py is imported
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest

from common import gemini_client
from utils.data_uri import to_data_uri

REFERENCE_IMAGE = to_data_uri(b"\x89PNG\r\n\x1a\nreference-1", "image/png")
REFERENCE_IMAGE_2 = to_data_uri(b"\x89PNG\r\n\x1a\nreference-2", "image/png")
REFERENCE_IMAGE_3 = to_data_uri(b"\x89PNG\r\n\x1a\nreference-3", "image/png")
REFERENCE_IMAGE_4 = to_data_uri(b"\x89PNG\r\n\x1a\nreference-4", "image/png")
GENERATED_IMAGE = to_data_uri(b"\x89PNG\r\n\x1a\ngenerated", "image/png")
EDITED_IMAGE = to_data_uri(b"\x89PNG\r\n\x1a\nedited", "image/png")

DEFAULT_TEXT = "A cinematic close-up of the subject, rule of thirds, dramatic rim lighting."


class FakeGemini:
    """Records provider calls and replays scripted responses.

    Queue entries are returned in order; an Exception entry is raised
    instead. Once a queue is empty the default response is used.
    """

    def __init__(self):
        self.text_calls = []
        self.image_calls = []
        self.text_responses = []
        self.image_responses = []

    @staticmethod
    def _next(queue, default):
        if not queue:
            return default
        response = queue.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def generate_text(self, system, prompt, images=None):
        self.text_calls.append({"system": system, "prompt": prompt, "images": list(images or [])})
        return self._next(self.text_responses, DEFAULT_TEXT)

    def generate_image(self, system, prompt, images=None):
        self.image_calls.append({"system": system, "prompt": prompt, "images": list(images or [])})
        return self._next(self.image_responses, GENERATED_IMAGE)

    @property
    def call_count(self):
        return len(self.text_calls) + len(self.image_calls)


@pytest.fixture
def fake_gemini(monkeypatch):
    fake = FakeGemini()
    monkeypatch.setattr(gemini_client, "generate_text", fake.generate_text)
    monkeypatch.setattr(gemini_client, "generate_image", fake.generate_image)
    return fake


@pytest.fixture
def client(fake_gemini):
    from fastapi.testclient import TestClient
    from app import app

    with TestClient(app) as test_client:
        yield test_client
