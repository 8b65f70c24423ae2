from __future__ import annotations

import sys
from pathlib import Path

import httpx
import pytest

# Allow importing the function modules directly from the analyze-function folder.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

GEMINI_ENV_VARS = (
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_BASE_URL",
    "GEMINI_TIMEOUT_SECONDS",
    "ANALYSIS_PROMPT_TEMPLATE",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Drop every variable the function reads (a developer .env may have set them)."""
    for name in GEMINI_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class FakeGemini:
    """Stands in for the Gemini endpoint and records every request it receives."""

    def __init__(self, response: httpx.Response | Exception | None = None) -> None:
        self.response = response if response is not None else httpx.Response(
            200, json={"candidates": []}
        )
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()
