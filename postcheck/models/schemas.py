from enum import Enum
from typing import List, Union

from pydantic import BaseModel, Field


class SentimentLabel(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Sentiment(BaseModel):
    score: Union[int, float] = Field(..., description="Sentiment score (0-100, higher is more positive)")
    label: SentimentLabel = Field(..., description="Sentiment label (positive, negative, neutral)")

    model_config = {
        "json_schema_extra": {
            "example": {
                "score": 72,
                "label": "positive"
            }
        }
    }


class AnalysisResult(BaseModel):
    description: str = Field(..., description="Description of the analyzed content")
    sentiment: Sentiment = Field(..., description="Sentiment of the content")
    suggestions: List[str] = Field(..., max_length=3, description="Up to three improvement suggestions")

    model_config = {
        "json_schema_extra": {
            "example": {
                "description": "A sunset over a beach with two surfers.",
                "sentiment": {"score": 81, "label": "positive"},
                "suggestions": [
                    "Crop tighter on the surfers, e.g. rule-of-thirds framing",
                    "Add a caption with a location tag",
                    "Close with a question to invite comments"
                ]
            }
        }
    }


class PDFAnalysisResult(BaseModel):
    text: str = Field(..., description="Full text of the document as returned by the model")
    summary: str = Field(..., description="Concise summary of the main points")
    sentiment: Sentiment = Field(..., description="Sentiment of the document")
    suggestions: List[str] = Field(..., max_length=3, description="Up to three improvement suggestions")

    model_config = {
        "json_schema_extra": {
            "example": {
                "text": "Quarterly report. Revenue grew 12%...",
                "summary": "Revenue grew while costs stayed flat.",
                "sentiment": {"score": 64, "label": "positive"},
                "suggestions": [
                    "Lead with the revenue figure",
                    "Add a chart comparing quarters",
                    "End with next-quarter targets"
                ]
            }
        }
    }


class AnalyzeResponse(BaseModel):
    text: str = Field(..., description="Image description or PDF summary")
    sentiment: Sentiment = Field(..., description="Sentiment of the uploaded content")
    suggestions: List[str] = Field(..., description="Improvement suggestions")

    model_config = {
        "json_schema_extra": {
            "example": {
                "text": "A sunset over a beach with two surfers.",
                "sentiment": {"score": 81, "label": "positive"},
                "suggestions": [
                    "Crop tighter on the surfers",
                    "Add a caption with a location tag",
                    "Close with a question to invite comments"
                ]
            }
        }
    }


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Generic error message")
