import pytest

from postcheck.exceptions import UnsupportedFileType, UnsupportedFormat
from postcheck.services.dispatcher import FileKind, detect_image_mime_type, resolve_file_kind


def test_png_signature_is_detected(png_bytes):
    assert detect_image_mime_type(png_bytes) == "image/png"


def test_jpeg_signature_is_detected(jpeg_bytes):
    assert detect_image_mime_type(jpeg_bytes) == "image/jpeg"


def test_minimal_jpeg_prefix_is_enough():
    assert detect_image_mime_type(b"\xff\xd8") == "image/jpeg"


@pytest.mark.parametrize(
    "buffer",
    [
        b"GIF89a\x00\x00",
        b"%PDF-1.7\n",
        b"\x89PN",
        b"\xff\xd9\x00\x00",
        b"",
    ],
)
def test_other_prefixes_are_rejected(buffer):
    with pytest.raises(UnsupportedFormat):
        detect_image_mime_type(buffer)


@pytest.mark.parametrize("declared", ["image/png", "image/jpeg", "image/gif"])
def test_image_types_route_to_image_path(declared):
    assert resolve_file_kind(declared) == FileKind.IMAGE


def test_pdf_routes_on_declared_type_only():
    assert resolve_file_kind("application/pdf") == FileKind.PDF


@pytest.mark.parametrize("declared", ["text/plain", "application/json", "", "application/pdf; charset=binary"])
def test_unknown_types_are_rejected(declared):
    with pytest.raises(UnsupportedFileType):
        resolve_file_kind(declared)
