"""Resize + encode a source image according to a resolved plan."""

from typing import BinaryIO

from loguru import logger
from PIL import Image

from ..common.codec_registry import CodecRegistry, default_registry
from ..common.errors import EncodeError, WriteError
from ..common.schemas import DEFAULT_POLICY, OptimizerPolicy, ResolvedPlan, SourceImage
from ..utils.profiling import timed


def resize(
    image: Image.Image,
    size: tuple[int, int],
    resample: Image.Resampling = Image.Resampling.LANCZOS,
) -> Image.Image:
    """Return ``image`` resized to ``size``; the same object when already that size."""
    if image.size == size:
        return image

    try:
        return image.resize(size, resample)
    except (OSError, ValueError) as exc:
        raise EncodeError(f"Could not resize image to {size[0]}x{size[1]}: {exc}") from exc


@timed
def encode(
    sink: BinaryIO,
    source: SourceImage,
    plan: ResolvedPlan,
    registry: CodecRegistry | None = None,
    policy: OptimizerPolicy = DEFAULT_POLICY,
) -> None:
    """
    Resize ``source`` to the plan's size, encode it and write it to ``sink``.

    The whole image is encoded in memory first; nothing reaches the sink
    unless encoding succeeded.

    Raises:
        UnresolvedFormatError: If no encoder is registered for the plan's MIME
        EncodeError: If resizing or encoding fails
        WriteError: If the sink rejects the write
    """
    registry = registry or default_registry()
    encoder = registry.encoder_for(plan.target_mime)

    resized = resize(source.image, plan.size, policy.resample)
    data = encoder.encode(resized, plan.target_quality)

    try:
        _ = sink.write(data)
        sink.flush()
    except (OSError, ValueError) as exc:
        raise WriteError(f"Could not write output: {exc}") from exc

    logger.debug(f"Wrote {len(data)} bytes of {plan.target_mime}")
