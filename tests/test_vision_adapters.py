"""
Tests for the external-model adapters. No network: httpx.MockTransport
for the OpenAI-compatible adapter, a stub client for Claude.
"""
import base64
import json
from types import SimpleNamespace

import anthropic
import httpx
import pytest

from veganscan.adapters.vision.openai_vision import OpenAIVision
from veganscan.adapters.vision.claude_vision import ClaudeVision
from veganscan.adapters.vision.mock_vision import MockVision
from veganscan.orchestrator.contracts import EncodedImage
from veganscan.orchestrator.errors import VisionError
from veganscan.services.status_store import StatusStore

IMAGE = EncodedImage(data=b"\xff\xd8\xff fake jpeg", mime_type="image/jpeg")


def completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class TestOpenAIVision:
    def setup_method(self):
        self.status = StatusStore()
        self.requests = []

    def make(self, monkeypatch, handler):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("OPENAI_BASE_URL", "https://llm.example/v1/")
        monkeypatch.delenv("OPENAI_MODEL", raising=False)

        def record(request):
            self.requests.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(record))
        return OpenAIVision(self.status, timeout=5.0, client=client)

    def test_request_shape(self, monkeypatch):
        vision = self.make(monkeypatch, lambda r: httpx.Response(200, json=completion("Sim.")))
        assert vision.describe(IMAGE, "is it vegan?", 300) == "Sim."

        req = self.requests[0]
        assert str(req.url) == "https://llm.example/v1/chat/completions"
        assert req.headers["Authorization"] == "Bearer sk-test"
        body = json.loads(req.content)
        assert body["model"] == "gpt-4o"
        assert body["max_tokens"] == 300
        text, image = body["messages"][0]["content"]
        assert text == {"type": "text", "text": "is it vegan?"}
        b64 = base64.b64encode(IMAGE.data).decode()
        assert image["image_url"]["url"] == f"data:image/jpeg;base64,{b64}"

    def test_text_returned_unmodified(self, monkeypatch):
        vision = self.make(monkeypatch, lambda r: httpx.Response(200, json=completion("\n Não. \n")))
        assert vision.describe(IMAGE, "p", 10) == "\n Não. \n"

    def test_connect_error_is_transient(self, monkeypatch):
        def boom(request):
            raise httpx.ConnectError("connection refused", request=request)
        vision = self.make(monkeypatch, boom)
        with pytest.raises(VisionError) as exc:
            vision.describe(IMAGE, "p", 10)
        assert exc.value.transient is True

    def test_quota_error_not_transient(self, monkeypatch):
        vision = self.make(monkeypatch, lambda r: httpx.Response(429, json={"error": "quota"}))
        with pytest.raises(VisionError) as exc:
            vision.describe(IMAGE, "p", 10)
        assert exc.value.transient is False
        assert "429" in str(exc.value)

    @pytest.mark.parametrize("payload", [{"choices": []}, {"nope": 1}, completion(None), completion("")])
    def test_malformed_response(self, monkeypatch, payload):
        vision = self.make(monkeypatch, lambda r: httpx.Response(200, json=payload))
        with pytest.raises(VisionError):
            vision.describe(IMAGE, "p", 10)

    def test_not_ready_without_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        assert OpenAIVision(self.status).ready is False


class StubMessages:
    def __init__(self, result=None, exc=None):
        self.result = result
        self.exc = exc
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.exc is not None:
            raise self.exc
        return self.result


class TestClaudeVision:
    def make(self, result=None, exc=None):
        messages = StubMessages(result, exc)
        vision = ClaudeVision(StatusStore(), client=SimpleNamespace(messages=messages))
        return vision, messages

    def test_request_shape(self):
        reply = SimpleNamespace(content=[SimpleNamespace(type="text", text="Sim. Selo vegano visível.")])
        vision, messages = self.make(result=reply)
        assert vision.describe(IMAGE, "is it vegan?", 300) == "Sim. Selo vegano visível."
        assert messages.kwargs["max_tokens"] == 300
        text, image = messages.kwargs["messages"][0]["content"]
        assert text == {"type": "text", "text": "is it vegan?"}
        assert image["source"]["media_type"] == "image/jpeg"
        assert base64.b64decode(image["source"]["data"]) == IMAGE.data

    def test_connection_error_is_transient(self):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        vision, _ = self.make(exc=anthropic.APIConnectionError(request=request))
        with pytest.raises(VisionError) as exc:
            vision.describe(IMAGE, "p", 10)
        assert exc.value.transient is True

    def test_empty_reply(self):
        vision, _ = self.make(result=SimpleNamespace(content=[]))
        with pytest.raises(VisionError):
            vision.describe(IMAGE, "p", 10)

    def test_not_ready_without_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        vision = ClaudeVision(StatusStore())
        assert vision.ready is False
        with pytest.raises(VisionError):
            vision.describe(IMAGE, "p", 10)


class TestMockVision:
    def test_records_calls(self):
        vision = MockVision(StatusStore(), reply="Sim.")
        assert vision.describe(IMAGE, "p", 5) == "Sim."
        assert vision.calls == [(IMAGE, "p", 5)]
