import os
from enum import StrEnum
from io import BytesIO
from pathlib import Path

import magic
from PIL import Image


class MediaType(StrEnum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    FILE = "file"

    @classmethod
    def from_mime(cls, file_type: str) -> "MediaType":
        if file_type.startswith("image"):
            return MediaType.IMAGE
        elif file_type.startswith("video"):
            return MediaType.VIDEO
        elif file_type.startswith("audio"):
            return MediaType.AUDIO
        elif file_type.startswith("text"):
            return MediaType.TEXT
        else:
            return MediaType.FILE


# Short names, and multi-picture JPEGs which Pillow opens as "MPO"
FORMAT_ALIASES = {
    "JPG": "JPEG",
    "TIF": "TIFF",
    "MPO": "JPEG",
}


def sniff_mime(bytes_io: BytesIO) -> str:
    _ = bytes_io.seek(0)
    mime = magic.Magic(mime=True)

    file_type = mime.from_buffer(bytes_io.getvalue())
    if not file_type:
        file_type = "application/octet-stream"
    return file_type


def determine_mime(bytes_io: BytesIO, file_type: str | None = None) -> MediaType:
    if not file_type:
        file_type = sniff_mime(bytes_io)
    return MediaType.from_mime(file_type)


def mime_from_format(format_name: str | None) -> str | None:
    """Map a Pillow format name ("JPEG"), short name ("jpg") or MIME to a MIME type."""
    if not format_name:
        return None

    name = format_name.strip()
    if "/" in name:
        return name.lower()

    name = name.upper()
    name = FORMAT_ALIASES.get(name, name)

    _ = Image.init()
    return Image.MIME.get(name)


def mime_from_extension(path: str | os.PathLike[str] | None) -> str | None:
    """Return the MIME type Pillow associates with the file's extension."""
    if not path:
        return None

    ext = Path(path).suffix.lower()
    if not ext:
        return None

    format_name = Image.registered_extensions().get(ext)
    if format_name is None:
        return None
    return Image.MIME.get(format_name)
