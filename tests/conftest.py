"""Shared test fixtures for paip."""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Ensure the source directory is importable without installing the package.
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from paip.config import Config, GeminiConfig  # noqa: E402
from paip.transport import HttpTransport  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    monkeypatch.delenv("PAIP_GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("PAIP_CONFIG", raising=False)


@pytest.fixture
def make_config():
    def _make(**gemini_overrides):
        gemini = {"key": "test-key", "model": "gemini-test"}
        gemini.update(gemini_overrides)
        return Config(
            version=1,
            provider="gemini",
            timeout=30.0,
            gemini=GeminiConfig(**gemini),
            prompt={"summarize": "Summarize:"},
        )

    return _make


class RecordingHandler:
    """httpx.MockTransport handler returning a canned reply and keeping requests."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        body = self.body
        if not isinstance(body, str):
            body = json.dumps(body)
        return httpx.Response(self.status_code, text=body)

    @property
    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def replying():
    """Build an HttpTransport whose responses come from a RecordingHandler."""

    def _build(status_code=200, body=None):
        handler = RecordingHandler(status_code, body)
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return HttpTransport(timeout=5.0, client=client), handler

    return _build

