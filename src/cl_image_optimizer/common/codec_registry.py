"""Explicit MIME → codec registry backed by Pillow."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from io import BytesIO

from loguru import logger
from PIL import Image, UnidentifiedImageError

from ..utils.media_types import MediaType, determine_mime, mime_from_format, sniff_mime
from ..utils.profiling import timed
from .errors import DecodeError, EncodeError, UnresolvedFormatError
from .schemas import SourceImage


@dataclass(frozen=True)
class ImageEncoder:
    """Encode a Pillow image into one output format.

    Attributes:
        mime: MIME type produced by this encoder
        pil_format: Pillow format name passed to ``Image.save``
        supports_quality: Whether the format takes a quality parameter
        modes: Pixel modes the format accepts as-is (None = any)
        save_options: Extra keyword arguments for ``Image.save``
    """

    mime: str
    pil_format: str
    supports_quality: bool = False
    modes: frozenset[str] | None = None
    save_options: dict[str, object] = field(default_factory=dict)

    def prepare(self, image: Image.Image) -> Image.Image:
        """Convert the image to a pixel mode the format can store."""
        if self.modes is None or image.mode in self.modes:
            return image

        has_alpha = "A" in image.getbands() or "transparency" in image.info
        if has_alpha and "RGBA" in self.modes:
            return image.convert("RGBA")
        return image.convert("RGB")

    def encode(self, image: Image.Image, quality: int | None = None) -> bytes:
        save_kwargs: dict[str, object] = dict(self.save_options)
        if self.supports_quality and quality is not None:
            save_kwargs["quality"] = quality

        buffer = BytesIO()
        try:
            self.prepare(image).save(buffer, format=self.pil_format, **save_kwargs)
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeError(f"Could not encode image as {self.mime}: {exc}") from exc

        return buffer.getvalue()


class CodecRegistry:
    """Registry of the encoders available for output MIME types.

    Decoding is delegated to Pillow for every format it can open; encoding is
    restricted to the explicitly registered MIME types.
    """

    def __init__(self, encoders: Iterable[ImageEncoder] = ()):
        self._encoders: dict[str, ImageEncoder] = {}
        for encoder in encoders:
            self.register(encoder)

    def register(self, encoder: ImageEncoder) -> None:
        self._encoders[encoder.mime.lower()] = encoder

    @property
    def encodable_mimes(self) -> list[str]:
        return sorted(self._encoders)

    def supports_encode(self, mime: str | None) -> bool:
        return bool(mime) and mime.lower() in self._encoders

    def supports_decode(self, mime: str | None) -> bool:
        if not mime:
            return False
        _ = Image.init()
        return mime.lower() in {m.lower() for m in Image.MIME.values()}

    def encoder_for(self, mime: str) -> ImageEncoder:
        try:
            return self._encoders[mime.lower()]
        except KeyError:
            raise UnresolvedFormatError(
                f"No encoder registered for {mime!r}. "
                + f"Supported: {', '.join(self.encodable_mimes)}"
            ) from None

    @timed
    def decode(self, data: bytes) -> SourceImage:
        """Decode raw bytes into a SourceImage.

        Raises:
            DecodeError: If the bytes are not an image Pillow can read
        """
        bytes_io = BytesIO(data)

        file_type = sniff_mime(bytes_io)
        if determine_mime(bytes_io, file_type) != MediaType.IMAGE:
            raise DecodeError(f"Input is not an image (detected {file_type})")

        _ = bytes_io.seek(0)
        try:
            image = Image.open(bytes_io)
            image.load()
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            SyntaxError,
            ValueError,
        ) as exc:
            raise DecodeError(f"Could not decode image: {exc}") from exc

        native_format = image.format or ""
        logger.debug(
            f"Decoded {native_format or 'unknown'} image {image.width}x{image.height} "
            + f"(mode {image.mode}, {mime_from_format(native_format) or file_type})"
        )
        return SourceImage(image=image, native_format=native_format)


def default_registry() -> CodecRegistry:
    """Build a registry with the stock encoders."""
    return CodecRegistry(
        [
            ImageEncoder(
                mime="image/jpeg",
                pil_format="JPEG",
                supports_quality=True,
                modes=frozenset({"L", "RGB", "CMYK"}),
                save_options={"optimize": True},
            ),
            ImageEncoder(
                mime="image/webp",
                pil_format="WEBP",
                supports_quality=True,
                modes=frozenset({"RGB", "RGBA"}),
            ),
            ImageEncoder(
                mime="image/png",
                pil_format="PNG",
                modes=frozenset({"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}),
                save_options={"optimize": True},
            ),
            ImageEncoder(
                mime="image/gif",
                pil_format="GIF",
                modes=frozenset({"L", "P", "RGB", "RGBA"}),
            ),
            ImageEncoder(
                mime="image/bmp",
                pil_format="BMP",
                modes=frozenset({"1", "L", "P", "RGB"}),
            ),
            ImageEncoder(
                mime="image/tiff",
                pil_format="TIFF",
                modes=frozenset({"1", "L", "LA", "I", "I;16", "F", "P", "RGB", "RGBA", "CMYK"}),
            ),
        ]
    )
