import asyncio
import base64
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import wraps
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from crewai import LLM

from ..config import settings
from ..exceptions import ConfigurationError, ModelInvocationFailed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImagePayload:
    data: bytes
    mime_type: str


@dataclass(frozen=True)
class TextPayload:
    text: str


ModelPayload = Union[ImagePayload, TextPayload]


@dataclass
class LLMConfig:
    model: str
    temperature: float
    max_tokens: int
    timeout_seconds: Optional[float] = None


def create_llm_config(
    model: str,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    timeout: Optional[float] = None,
) -> LLMConfig:
    """Create a model config, filling unset values from settings."""
    return LLMConfig(
        model=model,
        temperature=settings.model_temperature if temperature is None else temperature,
        max_tokens=max_tokens or settings.model_max_tokens,
        timeout_seconds=timeout if timeout is not None else settings.model_timeout_seconds,
    )


def timeout_guard(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
    """Decorator to enforce the configured per-call timeout, if any."""

    @wraps(func)
    async def wrapper(self, *args: Any, **kwargs: Any) -> Any:
        timeout_seconds = getattr(self, "timeout_seconds", None)
        if not timeout_seconds:
            return await func(self, *args, **kwargs)
        try:
            return await asyncio.wait_for(func(self, *args, **kwargs), timeout=timeout_seconds)
        except asyncio.TimeoutError as exc:
            logger.error("Model %s timed out after %s seconds", getattr(self, "model_name", "unknown"), timeout_seconds)
            raise ModelInvocationFailed(f"Model call exceeded timeout of {timeout_seconds} seconds") from exc

    return wrapper


class ModelClient(ABC):
    """Single-shot access to an external generative model."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model identifier used for logging."""

    @abstractmethod
    async def invoke(self, prompt: str, payload: ModelPayload) -> str:
        """Send the prompt with its payload and return the raw response text.

        Raises ModelInvocationFailed on any service error.
        """


def build_messages(prompt: str, payload: ModelPayload) -> List[Dict[str, Any]]:
    if isinstance(payload, ImagePayload):
        encoded = base64.b64encode(payload.data).decode("ascii")
        content: List[Dict[str, Any]] = [
            {"type": "image_url", "image_url": {"url": f"data:{payload.mime_type};base64,{encoded}"}},
            {"type": "text", "text": prompt},
        ]
    elif isinstance(payload, TextPayload):
        content = [
            {"type": "text", "text": payload.text},
            {"type": "text", "text": prompt},
        ]
    else:
        raise TypeError(f"Unsupported payload type: {type(payload).__name__}")
    return [{"role": "user", "content": content}]


class GeminiModelClient(ModelClient):
    """Gemini access through crewai's LLM wrapper."""

    def __init__(self, config: LLMConfig) -> None:
        if not settings.google_api_key:
            raise ConfigurationError("GOOGLE_API_KEY is required")
        self.api_key = settings.google_api_key
        self.config = config
        self.timeout_seconds = config.timeout_seconds
        self._llm: Optional[LLM] = None

    @property
    def model_name(self) -> str:
        return self.config.model

    @property
    def llm(self) -> LLM:
        # Built on first use so the provider backend loads only when a call is made.
        if self._llm is None:
            self._llm = LLM(
                model=self.config.model,
                api_key=self.api_key,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        return self._llm

    @timeout_guard
    async def invoke(self, prompt: str, payload: ModelPayload) -> str:
        messages = build_messages(prompt, payload)
        try:
            llm = self.llm
            response = await asyncio.to_thread(llm.call, messages)
        except Exception as exc:
            logger.exception("Model call to %s failed", self.model_name)
            raise ModelInvocationFailed(f"Model call to {self.model_name} failed: {exc}") from exc

        if not isinstance(response, str):
            raise ModelInvocationFailed(f"Model {self.model_name} returned no text")
        return response.strip()
