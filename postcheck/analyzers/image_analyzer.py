import logging

from .base import BaseAnalyzer
from ..models.schemas import AnalysisResult
from ..services.dispatcher import detect_image_mime_type
from ..services.model_client import ImagePayload
from ..services.normalizer import normalize_image_response

logger = logging.getLogger(__name__)

IMAGE_ANALYSIS_PROMPT = """\
Analyze this image and provide a response in the following JSON format ONLY, \
with a detailed description in less than 100 words and very critically analysed \
suggestions (give an example that suits the case with every suggestion) to enhance the post:
{
  "description": "Brief description of the image content",
  "sentiment": {
    "score": x,
    "label": "positive|negative|neutral"
  },
  "suggestions": [
    "suggestion1",
    "suggestion2",
    "suggestion3"
  ]
}
Ensure the sentiment score is between 0 and 100, where 100 is most positive.
Be very critical while giving the sentiment score (for example 23, 47, 96).
Provide ONLY the JSON response, no additional text."""


class ImageAnalyzer(BaseAnalyzer):

    @property
    def analyzer_name(self) -> str:
        return "image_analyzer"

    async def analyze(self, buffer: bytes) -> AnalysisResult:
        mime_type = detect_image_mime_type(buffer)
        logger.debug("Sending %s image of %s bytes for analysis", mime_type, len(buffer))
        raw_text = await self._invoke_model(
            IMAGE_ANALYSIS_PROMPT,
            ImagePayload(data=buffer, mime_type=mime_type),
        )
        return normalize_image_response(raw_text)
