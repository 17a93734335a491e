import logging
import time

from ..analyzers.image_analyzer import ImageAnalyzer
from ..analyzers.pdf_analyzer import PDFAnalyzer
from ..models.schemas import AnalysisResult
from ..models.upload import ProcessedFile, UploadedFile
from .dispatcher import FileKind, resolve_file_kind

logger = logging.getLogger(__name__)


class FileProcessor:
    """Routes an upload to the analyzer for its file kind."""

    def __init__(self, image_analyzer: ImageAnalyzer, pdf_analyzer: PDFAnalyzer) -> None:
        self.image_analyzer = image_analyzer
        self.pdf_analyzer = pdf_analyzer

    async def process(self, uploaded_file: UploadedFile) -> ProcessedFile:
        start_time = time.perf_counter()
        kind = resolve_file_kind(uploaded_file.declared_mime_type)
        logger.info(
            "Processing %s upload %s (%s bytes)",
            kind.value,
            uploaded_file.filename or "<unnamed>",
            uploaded_file.size,
        )

        if kind == FileKind.IMAGE:
            image_result = await self.image_analyzer.analyze(uploaded_file.buffer)
            processed = ProcessedFile(text=image_result.description, analysis=image_result)
        else:
            pdf_result = await self.pdf_analyzer.analyze(uploaded_file.buffer)
            processed = ProcessedFile(
                text=pdf_result.text,
                analysis=AnalysisResult(
                    description=pdf_result.summary,
                    sentiment=pdf_result.sentiment,
                    suggestions=pdf_result.suggestions,
                ),
            )

        logger.info(
            "Finished %s upload in %s seconds",
            kind.value,
            round(time.perf_counter() - start_time, 4),
        )
        return processed
