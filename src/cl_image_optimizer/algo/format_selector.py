"""Output format selection (pure, no I/O)."""

import os

from loguru import logger

from ..common.codec_registry import CodecRegistry, default_registry
from ..common.errors import UnresolvedFormatError
from ..common.schemas import ParameterBundle
from ..utils.media_types import mime_from_extension, mime_from_format


def resolve_format(
    bundle: ParameterBundle,
    target_hint: str | os.PathLike[str] | None,
    source_format: str | None,
    registry: CodecRegistry | None = None,
) -> str:
    """
    Pick the output MIME type.

    Precedence: explicit ``bundle.mime_type``, then the MIME of the target
    file's extension, then the source image's format. The first candidate
    that yields a MIME decides; an unknown or missing extension yields
    nothing and falls through.

    Args:
        bundle: Negotiation parameters
        target_hint: Output file path, if writing to a file
        source_format: Format tag reported by the decoder
        registry: Codec registry used to check encodability

    Returns:
        Encodable MIME type

    Raises:
        UnresolvedFormatError: If no candidate yields an encodable type
    """
    registry = registry or default_registry()

    candidates = (
        ("explicit", bundle.mime_type),
        ("extension", mime_from_extension(target_hint)),
        ("source", mime_from_format(source_format)),
    )

    for origin, mime in candidates:
        if not mime:
            continue
        if not registry.supports_encode(mime):
            raise UnresolvedFormatError(
                f"Cannot encode {mime!r} (from {origin} format). "
                + f"Supported: {', '.join(registry.encodable_mimes)}"
            )
        logger.debug(f"Output format {mime} (from {origin} format)")
        return mime

    raise UnresolvedFormatError(
        f"Could not determine output format (source format {source_format!r})"
    )
