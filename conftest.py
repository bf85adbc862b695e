import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from app import app, get_credentials, get_detector, limiter
from classifier import LLMClassifier
from config import CredentialStore, settings
from detector import FakeNewsDetector

# 15 words, none of them in either keyword list
FILLER = "The city council met on Tuesday to discuss the new park budget and road repairs."


def long_text(*phrases: str) -> str:
    """Text of at least 60 words containing ``phrases``."""
    return " ".join(list(phrases) + [FILLER] * 4)


def chat_completion(content: Optional[str]) -> Dict[str, Any]:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "model": "test-model",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def verdict_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "score": 72,
        "credibility": "low",
        "status": "likely-fake",
        "fakeKeywordsFound": 3,
        "reliableIndicatorsFound": 0,
        "analysis": {
            "textLength": 64,
            "suspiciousKeywords": ["sensational headline", "no named sources", "emotional language"],
            "reliableIndicators": [],
        },
    }
    payload.update(overrides)
    return payload


def verdict_with_raw_score(raw: str) -> str:
    """Serialized verdict whose score is the literal JSON token ``raw``."""
    return json.dumps(verdict_payload()).replace('"score": 72', f'"score": {raw}')


class FakeLLM:
    """Records chat-completion requests and answers with a canned response."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.respond: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json=chat_completion(json.dumps(verdict_payload()))
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    def reply_with_content(self, content: Optional[str]):
        self.respond = lambda request: httpx.Response(200, json=chat_completion(content))

    def reply_with_verdict(self, **overrides: Any):
        self.reply_with_content(json.dumps(verdict_payload(**overrides)))

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def classifier(fake_llm) -> LLMClassifier:
    return LLMClassifier(
        base_url="https://llm.test/v1",
        model="test-model",
        timeout=5,
        transport=httpx.MockTransport(fake_llm),
    )


@pytest.fixture
def detector(classifier) -> FakeNewsDetector:
    return FakeNewsDetector(classifier=classifier)


@pytest.fixture
def credentials() -> CredentialStore:
    return CredentialStore()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DATA_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def client(detector, credentials, data_dir, monkeypatch):
    monkeypatch.setattr(settings, "SERVICE_API_KEY", None)
    app.dependency_overrides[get_detector] = lambda: detector
    app.dependency_overrides[get_credentials] = lambda: credentials
    limiter.enabled = False
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        limiter.enabled = True
        app.dependency_overrides.clear()
