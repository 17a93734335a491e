import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .analyzers.image_analyzer import ImageAnalyzer
from .analyzers.pdf_analyzer import PDFAnalyzer
from .config import configure_logging, settings
from .models.schemas import AnalyzeResponse, ErrorResponse
from .models.upload import UploadedFile
from .services.file_service import FileProcessor
from .services.model_client import GeminiModelClient, create_llm_config
from .utils.file_processor import validate_upload

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Starting PostCheck v%s", app.version)
    yield
    logger.info("Shutting down PostCheck")

app = FastAPI(
    title="PostCheck",
    description="Analyzes uploaded images and PDFs with a generative model and returns a description, sentiment and suggestions.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

image_model_singleton = GeminiModelClient(create_llm_config(settings.image_model_name))
pdf_model_singleton = GeminiModelClient(create_llm_config(settings.pdf_model_name))
file_processor_singleton = FileProcessor(
    ImageAnalyzer(image_model_singleton),
    PDFAnalyzer(pdf_model_singleton),
)


def get_file_processor() -> FileProcessor:
    return file_processor_singleton


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # A "file" form field sent as plain text is the same as no file at all.
    logger.warning("Rejected request to %s: %s", request.url.path, exc.errors())
    if any(tuple(error.get("loc", ()))[:2] == ("body", "file") for error in exc.errors()):
        message = "No file provided"
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s %s", request.method, request.url)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Analysis failed"},
    )


@app.get("/health", tags=["Health"])
async def health_check() -> Dict[str, Any]:
    return {"status": "ok", "version": app.version}


ANALYZE_SUCCESS_EXAMPLE = {
    "text": "A sunset over a beach with two surfers.",
    "sentiment": {"score": 81, "label": "positive"},
    "suggestions": [
        "Crop tighter on the surfers, e.g. rule-of-thirds framing",
        "Add a caption with a location tag, e.g. 'Golden hour at Bondi'",
        "Close with a question, e.g. 'Who else was out this morning?'",
    ],
}


@app.get("/", tags=["Health"])
def read_root() -> Dict[str, Any]:
    return {
        "message": "Welcome to PostCheck",
        "version": app.version,
    }


@app.post(
    "/api/analyze",
    response_model=AnalyzeResponse,
    summary="Analyze File",
    description="Upload a JPEG, PNG or PDF and receive its description or summary, sentiment and suggestions.",
    responses={
        200: {
            "description": "Analysis completed.",
            "content": {"application/json": {"example": ANALYZE_SUCCESS_EXAMPLE}},
        },
        400: {
            "description": "Missing or invalid file upload.",
            "model": ErrorResponse,
            "content": {"application/json": {"example": {"error": "No file provided"}}},
        },
        413: {
            "description": "Uploaded file exceeds size limit.",
            "model": ErrorResponse,
            "content": {"application/json": {"example": {"error": "File size exceeds 20MB limit."}}},
        },
        500: {
            "description": "Processing or model failure.",
            "model": ErrorResponse,
            "content": {"application/json": {"example": {"error": "Analysis failed"}}},
        },
    },
)
async def analyze_file(
    file: Optional[UploadFile] = File(None),
    file_processor: FileProcessor = Depends(get_file_processor),
) -> AnalyzeResponse:
    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file provided",
        )

    try:
        contents = await file.read()
    except Exception as exc:
        logger.exception("Failed to read uploaded file %s", file.filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Analysis failed",
        ) from exc

    validate_upload(file.content_type, len(contents))

    uploaded_file = UploadedFile(
        buffer=contents,
        declared_mime_type=file.content_type,
        size=len(contents),
        filename=file.filename,
    )

    try:
        processed = await file_processor.process(uploaded_file)
    except Exception as exc:
        logger.exception("Analysis failed for %s (%s)", file.filename, file.content_type)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Analysis failed",
        ) from exc

    # The full extracted text stays server-side; callers get the description or summary.
    logger.debug("Extracted %s characters of text from %s", len(processed.text), file.filename)

    return AnalyzeResponse(
        text=processed.analysis.description,
        sentiment=processed.analysis.sentiment,
        suggestions=processed.analysis.suggestions,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "postcheck.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
