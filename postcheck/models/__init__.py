from .schemas import (
    AnalysisResult,
    AnalyzeResponse,
    ErrorResponse,
    PDFAnalysisResult,
    Sentiment,
    SentimentLabel,
)
from .upload import ProcessedFile, UploadedFile
