import asyncio
import base64
import time

import pytest

from postcheck.config import settings
from postcheck.exceptions import ConfigurationError, ModelInvocationFailed
from postcheck.services.model_client import (
    GeminiModelClient,
    ImagePayload,
    TextPayload,
    build_messages,
    create_llm_config,
)


class _RecordingLLM:
    def __init__(self, response=None, error=None, delay=0.0):
        self.response = response
        self.error = error
        self.delay = delay
        self.messages = None

    def call(self, messages):
        self.messages = messages
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


def _client(llm, timeout=None):
    client = GeminiModelClient(create_llm_config("gemini/gemini-1.5-flash", timeout=timeout))
    client._llm = llm
    return client


def test_missing_api_key_fails_at_construction(monkeypatch):
    monkeypatch.setattr(settings, "google_api_key", None)
    with pytest.raises(ConfigurationError, match="GOOGLE_API_KEY is required"):
        GeminiModelClient(create_llm_config("gemini/gemini-1.5-flash"))


def test_create_llm_config_uses_settings_defaults(monkeypatch):
    monkeypatch.setattr(settings, "model_temperature", 0.3)
    monkeypatch.setattr(settings, "model_max_tokens", 512)
    monkeypatch.setattr(settings, "model_timeout_seconds", None)

    config = create_llm_config("gemini/gemini-1.5-pro")

    assert config.model == "gemini/gemini-1.5-pro"
    assert config.temperature == 0.3
    assert config.max_tokens == 512
    assert config.timeout_seconds is None


def test_image_payload_is_sent_inline_as_base64():
    messages = build_messages("describe", ImagePayload(data=b"\x89PNG-bytes", mime_type="image/png"))

    assert len(messages) == 1
    image_part, prompt_part = messages[0]["content"]
    encoded = base64.b64encode(b"\x89PNG-bytes").decode("ascii")
    assert image_part["image_url"]["url"] == f"data:image/png;base64,{encoded}"
    assert prompt_part == {"type": "text", "text": "describe"}


def test_text_payload_precedes_prompt():
    messages = build_messages("summarize", TextPayload(text="document body"))

    texts = [part["text"] for part in messages[0]["content"]]
    assert texts == ["document body", "summarize"]


def test_invoke_returns_trimmed_response():
    llm = _RecordingLLM(response='  {"description": "x"}\n')
    client = _client(llm)

    raw = asyncio.run(client.invoke("prompt", TextPayload(text="body")))

    assert raw == '{"description": "x"}'
    assert llm.messages[0]["role"] == "user"


def test_sdk_errors_become_model_invocation_failed():
    client = _client(_RecordingLLM(error=RuntimeError("quota exceeded")))

    with pytest.raises(ModelInvocationFailed, match="quota exceeded"):
        asyncio.run(client.invoke("prompt", TextPayload(text="body")))


def test_non_text_response_is_a_failure():
    client = _client(_RecordingLLM(response=None))

    with pytest.raises(ModelInvocationFailed):
        asyncio.run(client.invoke("prompt", TextPayload(text="body")))


def test_configured_timeout_aborts_hung_call():
    client = _client(_RecordingLLM(response="{}", delay=0.5), timeout=0.05)

    with pytest.raises(ModelInvocationFailed, match="timeout"):
        asyncio.run(client.invoke("prompt", TextPayload(text="body")))
