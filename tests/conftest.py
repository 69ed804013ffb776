# tests/conftest.py
import os

# Settings are loaded at import time and require a key.
os.environ.setdefault("GEMINI_API_KEY", "test-key")

import httpx  # noqa: E402
import pytest  # noqa: E402

from conductor.src.core.ai_service import AIService  # noqa: E402


class GeminiStub:
    """Substitute for the generateContent endpoint that records every request."""

    def __init__(self, status_code=200, json_body=None, text=None, exc=None):
        self.status_code = status_code
        self.json_body = json_body
        self.text = text
        self.exc = exc
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.json_body is not None:
            return httpx.Response(self.status_code, json=self.json_body)
        return httpx.Response(self.status_code, text=self.text or "")

    @property
    def call_count(self):
        return len(self.requests)


def reply(text):
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}, "finishReason": "STOP"}]}


@pytest.fixture
def make_service():
    def _make(stub):
        client = httpx.AsyncClient(transport=httpx.MockTransport(stub))
        return AIService("test-key", client)

    return _make
