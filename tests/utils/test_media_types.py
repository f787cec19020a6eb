"""Unit tests for media type detection utilities.

Tests MediaType enum, MIME sniffing and the Pillow-backed format/extension lookups.
Uses synthetic data (BytesIO) without requiring external files.
"""

from io import BytesIO
from pathlib import Path

import pytest

from cl_image_optimizer.utils.media_types import (
    MediaType,
    determine_mime,
    mime_from_extension,
    mime_from_format,
    sniff_mime,
)

# ============================================================================
# MediaType Enum Tests
# ============================================================================


def test_media_type_enum_values():
    """Test MediaType enum has expected values."""
    assert MediaType.TEXT == "text"
    assert MediaType.IMAGE == "image"
    assert MediaType.VIDEO == "video"
    assert MediaType.AUDIO == "audio"
    assert MediaType.FILE == "file"


def test_from_mime_image_types():
    """Test from_mime correctly identifies image MIME types."""
    assert MediaType.from_mime("image/jpeg") == MediaType.IMAGE
    assert MediaType.from_mime("image/png") == MediaType.IMAGE
    assert MediaType.from_mime("image/gif") == MediaType.IMAGE
    assert MediaType.from_mime("image/webp") == MediaType.IMAGE


def test_from_mime_other_types():
    """Test from_mime with non-image MIME types."""
    assert MediaType.from_mime("video/mp4") == MediaType.VIDEO
    assert MediaType.from_mime("audio/mpeg") == MediaType.AUDIO
    assert MediaType.from_mime("text/plain") == MediaType.TEXT
    assert MediaType.from_mime("application/pdf") == MediaType.FILE
    assert MediaType.from_mime("") == MediaType.FILE


# ============================================================================
# Sniffing Tests
# ============================================================================


def test_sniff_png(encoded_image):
    """Test libmagic identifies PNG bytes."""
    assert sniff_mime(BytesIO(encoded_image("PNG", 16, 16))) == "image/png"


def test_sniff_jpeg(encoded_image):
    assert sniff_mime(BytesIO(encoded_image("JPEG", 16, 16))) == "image/jpeg"


def test_determine_mime_image(encoded_image):
    assert determine_mime(BytesIO(encoded_image("GIF", 16, 16))) == MediaType.IMAGE


def test_determine_mime_text():
    assert determine_mime(BytesIO(b"just some text\n")) == MediaType.TEXT


def test_determine_mime_uses_given_file_type():
    """Test an explicit file_type skips sniffing."""
    assert determine_mime(BytesIO(b"\x00\x01"), "image/png") == MediaType.IMAGE


def test_sniff_rewinds_stream(encoded_image):
    """Test sniffing works regardless of the stream position."""
    bytes_io = BytesIO(encoded_image("PNG", 16, 16))
    _ = bytes_io.seek(0, 2)

    assert sniff_mime(bytes_io) == "image/png"


# ============================================================================
# Format / Extension Lookups
# ============================================================================


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("JPEG", "image/jpeg"),
        ("jpg", "image/jpeg"),
        ("PNG", "image/png"),
        ("gif", "image/gif"),
        ("BMP", "image/bmp"),
        ("TIFF", "image/tiff"),
        ("TIF", "image/tiff"),
        ("MPO", "image/jpeg"),
        ("Image/PNG", "image/png"),
    ],
)
def test_mime_from_format(name: str, expected: str):
    assert mime_from_format(name) == expected


@pytest.mark.parametrize("name", ["", None, "unknown", "NOT-A-FORMAT"])
def test_mime_from_format_unknown(name: str | None):
    assert mime_from_format(name) is None


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("photo.jpg", "image/jpeg"),
        ("photo.JPEG", "image/jpeg"),
        ("a/b/c.png", "image/png"),
        (Path("anim.gif"), "image/gif"),
        ("scan.tif", "image/tiff"),
        ("icon.bmp", "image/bmp"),
    ],
)
def test_mime_from_extension(path: str | Path, expected: str):
    assert mime_from_extension(path) == expected


@pytest.mark.parametrize("path", ["", None, "noext", "archive.zzz", "dir.d/"])
def test_mime_from_extension_unknown(path: str | None):
    assert mime_from_extension(path) is None
