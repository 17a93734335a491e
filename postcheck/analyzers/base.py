import logging
import time
from abc import ABC, abstractmethod
from typing import Any

from ..services.model_client import ModelClient, ModelPayload

logger = logging.getLogger(__name__)


class BaseAnalyzer(ABC):
    """Abstract base class for per-file-kind analyzers."""

    def __init__(self, model_client: ModelClient) -> None:
        self.model_client = model_client

    @property
    @abstractmethod
    def analyzer_name(self) -> str:
        """Name used for logging."""

    @abstractmethod
    async def analyze(self, buffer: bytes) -> Any:
        """Analyze the raw upload bytes and return a normalized result."""

    async def _invoke_model(self, prompt: str, payload: ModelPayload) -> str:
        start = time.perf_counter()
        raw_text = await self.model_client.invoke(prompt, payload)
        duration = round(time.perf_counter() - start, 4)
        logger.info(
            "Analyzer %s got %s characters from %s in %s seconds",
            self.analyzer_name,
            len(raw_text),
            self.model_client.model_name,
            duration,
        )
        return raw_text
