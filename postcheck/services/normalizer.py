"""Coerce free-form model output into the fixed analysis schemas.

Two tiers of fallback apply. When the cleaned text parses as a JSON object,
every field is validated on its own and only the invalid ones are replaced.
When it does not parse, a complete fallback object is returned instead.
"""
import json
import logging
from typing import Any, Dict, List

from ..exceptions import ResponseParseFailure
from ..models.schemas import AnalysisResult, PDFAnalysisResult, Sentiment, SentimentLabel

logger = logging.getLogger(__name__)

OPENING_FENCE = "```json\n"
CLOSING_FENCE = "```"

MAX_SUGGESTIONS = 3
FALLBACK_SNIPPET_LENGTH = 200

SENTIMENT_LABELS = {label.value for label in SentimentLabel}
FALLBACK_SENTIMENT_SCORE = 59
FALLBACK_SENTIMENT_LABEL = SentimentLabel.NEUTRAL

# 0.5 sits oddly inside a 0-100 scale; kept as shipped until product confirms.
IMAGE_DEFAULT_SCORE = 0.5
IMAGE_DEFAULT_DESCRIPTION = "No description available"
IMAGE_FAILED_DESCRIPTION = "Failed to analyze image"
IMAGE_DEFAULT_SUGGESTIONS = [
    "Add engaging visuals",
    "Use relevant hashtags",
    "Include a call-to-action",
]

PDF_DEFAULT_SCORE = 59
PDF_DEFAULT_SUMMARY = "No summary available"
PDF_FAILED_SUMMARY = "Failed to generate summary"
PDF_DEFAULT_SUGGESTIONS = [
    "Improve document structure",
    "Add more concrete examples",
    "Include clear conclusions",
]


def strip_code_fences(raw_text: str) -> str:
    """Remove ```json openers and bare ``` fences, then trim.

    Plain string removal: other fence styles such as ```JSON pass through.
    """
    return raw_text.replace(OPENING_FENCE, "").replace(CLOSING_FENCE, "").strip()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name}")


def decode_json_object(raw_text: str) -> Dict[str, Any]:
    """Parse the cleaned text; a non-object top-level value yields no fields."""
    cleaned = strip_code_fences(raw_text)
    try:
        parsed = json.loads(cleaned, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ResponseParseFailure("Model produced malformed JSON.") from exc
    if parsed is None:
        raise ResponseParseFailure("Model returned a JSON null.")
    if not isinstance(parsed, dict):
        return {}
    return parsed


def _is_valid_score(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # Compare directly: huge ints must not be converted to float.
    return 0 <= value <= 100


def _format_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def coerce_to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_number(value)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _normalize_sentiment(raw_sentiment: Any, default_score: Any) -> Sentiment:
    sentiment = raw_sentiment if isinstance(raw_sentiment, dict) else {}
    score = sentiment.get("score")
    label = sentiment.get("label")
    return Sentiment(
        score=score if _is_valid_score(score) else default_score,
        label=label if isinstance(label, str) and label in SENTIMENT_LABELS else FALLBACK_SENTIMENT_LABEL,
    )


def _normalize_suggestions(raw_suggestions: Any, defaults: List[str]) -> List[str]:
    if not isinstance(raw_suggestions, list):
        return list(defaults)
    return [coerce_to_string(item) for item in raw_suggestions[:MAX_SUGGESTIONS]]


def _fallback_sentiment() -> Sentiment:
    return Sentiment(score=FALLBACK_SENTIMENT_SCORE, label=FALLBACK_SENTIMENT_LABEL)


def normalize_image_response(raw_text: str) -> AnalysisResult:
    text = raw_text.strip()
    try:
        parsed = decode_json_object(text)
    except ResponseParseFailure as exc:
        logger.error("Failed to parse image analysis response as JSON: %s; raw response: %r", exc, text)
        return AnalysisResult(
            description=text[:FALLBACK_SNIPPET_LENGTH] or IMAGE_FAILED_DESCRIPTION,
            sentiment=_fallback_sentiment(),
            suggestions=list(IMAGE_DEFAULT_SUGGESTIONS),
        )

    description = parsed.get("description")
    return AnalysisResult(
        description=description if isinstance(description, str) else IMAGE_DEFAULT_DESCRIPTION,
        sentiment=_normalize_sentiment(parsed.get("sentiment"), IMAGE_DEFAULT_SCORE),
        suggestions=_normalize_suggestions(parsed.get("suggestions"), IMAGE_DEFAULT_SUGGESTIONS),
    )


def normalize_pdf_response(raw_text: str, extracted_text: str) -> PDFAnalysisResult:
    text = raw_text.strip()
    snippet = extracted_text[:FALLBACK_SNIPPET_LENGTH]
    try:
        parsed = decode_json_object(text)
    except ResponseParseFailure as exc:
        logger.error("Failed to parse PDF analysis response as JSON: %s; raw response: %r", exc, text)
        return PDFAnalysisResult(
            text=snippet,
            summary=PDF_FAILED_SUMMARY,
            sentiment=_fallback_sentiment(),
            suggestions=list(PDF_DEFAULT_SUGGESTIONS),
        )

    full_text = parsed.get("text")
    summary = parsed.get("summary")
    return PDFAnalysisResult(
        text=full_text if isinstance(full_text, str) else snippet,
        summary=summary if isinstance(summary, str) else PDF_DEFAULT_SUMMARY,
        sentiment=_normalize_sentiment(parsed.get("sentiment"), PDF_DEFAULT_SCORE),
        suggestions=_normalize_suggestions(parsed.get("suggestions"), PDF_DEFAULT_SUGGESTIONS),
    )
