from dataclasses import dataclass
from typing import Optional

from .schemas import AnalysisResult


@dataclass(frozen=True)
class UploadedFile:
    buffer: bytes
    declared_mime_type: str
    size: int
    filename: Optional[str] = None


@dataclass
class ProcessedFile:
    text: str
    analysis: AnalysisResult
