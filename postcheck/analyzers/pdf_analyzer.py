import asyncio
import logging

from .base import BaseAnalyzer
from ..models.schemas import PDFAnalysisResult
from ..services.model_client import TextPayload
from ..services.normalizer import normalize_pdf_response
from ..utils.file_processor import extract_text_from_pdf

logger = logging.getLogger(__name__)

PDF_ANALYSIS_PROMPT = """\
Analyze this text, keeping in mind that the PDF it came from may also contain images, \
and provide a response in the following JSON format ONLY:
{
  "text": "Full text extracted from the PDF in a formatted manner",
  "summary": "A concise summary of the main points",
  "sentiment": {
    "score": X,
    "label": "positive|negative|neutral"
  },
  "suggestions": [
    "detailed suggestion with example 1",
    "detailed suggestion with example 2",
    "detailed suggestion with example 3"
  ]
}
Ensure the sentiment score is between 0 and 100, where 100 is most positive.
Provide ONLY the JSON response, no additional text."""


class PDFAnalyzer(BaseAnalyzer):

    @property
    def analyzer_name(self) -> str:
        return "pdf_analyzer"

    async def analyze(self, buffer: bytes) -> PDFAnalysisResult:
        extracted_text = await asyncio.to_thread(extract_text_from_pdf, buffer)
        if not extracted_text:
            logger.warning("No text extracted from PDF of %s bytes", len(buffer))
        raw_text = await self._invoke_model(PDF_ANALYSIS_PROMPT, TextPayload(text=extracted_text))
        return normalize_pdf_response(raw_text, extracted_text)
