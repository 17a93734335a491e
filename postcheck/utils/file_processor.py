import io
import logging
from typing import List, Optional

from fastapi import HTTPException, status
import pdfplumber
import PyPDF2

from ..config import settings
from ..exceptions import ExtractionFailed

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {"application/pdf", "image/jpeg", "image/png"}


def validate_upload(content_type: Optional[str], size_bytes: int) -> bool:
    """
    Validate uploaded file type and size.
    Raises HTTPException for invalid files.
    """
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Only PDF, JPEG, and PNG files are allowed."
        )

    max_size = settings.max_file_size_mb * 1024 * 1024
    if size_bytes > max_size:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File size exceeds {settings.max_file_size_mb}MB limit."
        )

    return True


def _join_pages(pages_items: List[List[str]]) -> str:
    # Items within a page are space-joined, pages are newline-joined.
    return "\n".join(" ".join(items) for items in pages_items).strip()


def _extract_with_pdfplumber(buffer: bytes) -> str:
    pages_items = []
    with pdfplumber.open(io.BytesIO(buffer)) as pdf:
        for page in pdf.pages:
            pages_items.append([word["text"] for word in page.extract_words()])
    return _join_pages(pages_items)


def _extract_with_pypdf2(buffer: bytes) -> str:
    reader = PyPDF2.PdfReader(io.BytesIO(buffer))
    pages_items = []
    for page in reader.pages:
        page_text = page.extract_text() or ""
        pages_items.append(page_text.split())
    return _join_pages(pages_items)


def extract_text_from_pdf(buffer: bytes) -> str:
    """
    Extract text from PDF bytes using pdfplumber as primary method,
    with PyPDF2 as fallback. Every page is read, in order.
    """
    try:
        text = _extract_with_pdfplumber(buffer)
        logger.info(f"Successfully extracted {len(text)} characters from PDF")
        return text
    except Exception as e:
        logger.warning(f"pdfplumber failed to read PDF: {e}, trying PyPDF2")
        try:
            text = _extract_with_pypdf2(buffer)
            logger.info(f"Successfully extracted {len(text)} characters from PDF using PyPDF2")
            return text
        except Exception as e2:
            logger.error(f"Both pdfplumber and PyPDF2 failed to read PDF: {e2}")
            raise ExtractionFailed("Failed to extract text from PDF") from e2
