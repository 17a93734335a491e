import os
from typing import List, Optional, Tuple

os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")

import pytest
from fastapi.testclient import TestClient

from postcheck.exceptions import ModelInvocationFailed
from postcheck.services.model_client import ModelClient, ModelPayload

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 32


class FakeModelClient(ModelClient):
    """Returns a canned response and records every call."""

    def __init__(self, response: str = "", error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Tuple[str, ModelPayload]] = []

    @property
    def model_name(self) -> str:
        return "fake-model"

    async def invoke(self, prompt: str, payload: ModelPayload) -> str:
        self.calls.append((prompt, payload))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture()
def make_model():
    return FakeModelClient


@pytest.fixture()
def failing_model():
    return FakeModelClient(error=ModelInvocationFailed("upstream unavailable"))


@pytest.fixture()
def png_bytes():
    return PNG_BYTES


@pytest.fixture()
def jpeg_bytes():
    return JPEG_BYTES


@pytest.fixture()
def client():
    from postcheck.main import app

    with TestClient(app) as test_client:
        yield test_client
