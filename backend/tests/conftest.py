import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.v1.chat import get_chat_relay
from app.config import Settings
from app.main import app
from app.services.chat_relay import ChatRelay
from app.services.gemini_client import GeminiClient


class FakeGemini:
    """Stands in for the Gemini API behind an httpx.MockTransport.

    Records every request it receives and answers with `handler`, which
    tests replace to simulate different upstream behaviour.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.handler = self.reply_with_text("Hello")

    @staticmethod
    def reply_with_text(text: str):
        def _handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"candidates": [{"content": {"parts": [{"text": text}]}}]},
            )
        return _handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def test_settings():
    """Settings pointing at a fake upstream, isolated from the environment."""
    return Settings(
        _env_file=None,
        gemini_api_key="test-key",
        gemini_api_base_url="https://gemini.test/v1beta/models",
        gemini_model="gemini-2.0-flash",
    )


@pytest.fixture
def fake_gemini():
    return FakeGemini()


@pytest.fixture
def gemini_client(test_settings, fake_gemini):
    return GeminiClient(test_settings, transport=httpx.MockTransport(fake_gemini))


@pytest.fixture
def test_client(gemini_client):
    """FastAPI test client with the upstream replaced by FakeGemini."""
    app.dependency_overrides[get_chat_relay] = lambda: ChatRelay(gemini_client)
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def chat_body():
    """Helper to build a POST body."""
    def _body(question="What is FastAPI?", history=None):
        return {
            "question": question,
            "chatHistory": [] if history is None else history,
        }
    return _body
