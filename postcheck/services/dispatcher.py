import logging
from enum import Enum

from ..exceptions import UnsupportedFileType, UnsupportedFormat

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG"
JPEG_SIGNATURE = b"\xff\xd8"
PDF_MIME_TYPE = "application/pdf"


class FileKind(str, Enum):
    IMAGE = "image"
    PDF = "pdf"


def detect_image_mime_type(buffer: bytes) -> str:
    """Return the real image MIME type from the buffer's leading bytes.

    The declared type is ignored: a PNG header is always PNG, an FF D8 header
    is always JPEG, and anything else is rejected.
    """
    if buffer.startswith(PNG_SIGNATURE):
        return "image/png"
    if buffer.startswith(JPEG_SIGNATURE):
        return "image/jpeg"
    logger.warning("Rejected image with leading bytes %s", buffer[:4].hex())
    raise UnsupportedFormat("Unsupported image format. Only JPEG and PNG are supported.")


def resolve_file_kind(declared_mime_type: str) -> FileKind:
    # PDFs are trusted on their declared type; only images are sniffed later.
    if declared_mime_type.startswith("image/"):
        return FileKind.IMAGE
    if declared_mime_type == PDF_MIME_TYPE:
        return FileKind.PDF
    raise UnsupportedFileType(f"Unsupported file type: {declared_mime_type}")
