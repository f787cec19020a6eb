"""Output dimension resolution (pure, no I/O)."""

from loguru import logger

from ..common.errors import InvalidImageError
from ..common.schemas import DEFAULT_POLICY, OptimizerPolicy, ParameterBundle, SourceImage


def round_px(value: float) -> int:
    """Round half-up to a whole pixel, never below 1."""
    return max(1, int(value + 0.5))


def resolve_dimensions(
    bundle: ParameterBundle,
    source: SourceImage,
    policy: OptimizerPolicy = DEFAULT_POLICY,
) -> tuple[int, int]:
    """
    Compute the output size for ``source`` under ``bundle``.

    Requested CSS-pixel dimensions are scaled by the DPR, a missing axis is
    filled in from the source aspect ratio, and the result is clamped to the
    native size (the image is never upscaled).

    Args:
        bundle: Negotiation parameters
        source: Decoded source image
        policy: Save-data scale factor

    Returns:
        (width, height) in device pixels, each in [1, native]

    Raises:
        InvalidImageError: If the source has a zero dimension
    """
    src_w, src_h = source.width, source.height
    if src_w <= 0 or src_h <= 0:
        raise InvalidImageError(f"Image has invalid dimensions {src_w}x{src_h}")

    req_w, req_h = bundle.width, bundle.height

    if req_w is not None and req_h is not None:
        w = req_w * bundle.dpr
        h = req_h * bundle.dpr
    elif req_w is not None:
        w = req_w * bundle.dpr
        h = w * src_h / src_w
    elif req_h is not None:
        h = req_h * bundle.dpr
        w = h * src_w / src_h
    else:
        if not bundle.save_data:
            return src_w, src_h
        width = round_px(src_w * policy.save_data_scale)
        height = round_px(src_h * policy.save_data_scale)
        logger.debug(f"Save-data downscale {src_w}x{src_h} -> {width}x{height}")
        return width, height

    # Clamp each axis to native, carrying the requested aspect ratio along
    if w > src_w:
        h = h * src_w / w
        w = src_w
    if h > src_h:
        w = w * src_h / h
        h = src_h

    width = min(round_px(w), src_w)
    height = min(round_px(h), src_h)

    if (req_w is not None and req_w * bundle.dpr > src_w) or (
        req_h is not None and req_h * bundle.dpr > src_h
    ):
        logger.warning(
            f"Requested size exceeds native {src_w}x{src_h}; clamped to {width}x{height}"
        )

    return width, height
