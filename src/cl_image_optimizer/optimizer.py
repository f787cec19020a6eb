"""Decode → resolve → encode pipeline for a single image."""

import os
from typing import BinaryIO

from loguru import logger

from .algo.codec_dispatcher import encode
from .algo.dimension_resolver import resolve_dimensions
from .algo.format_selector import resolve_format
from .algo.quality_resolver import resolve_quality
from .common.codec_registry import CodecRegistry, default_registry
from .common.schemas import (
    DEFAULT_POLICY,
    OptimizerPolicy,
    ParameterBundle,
    ResolvedPlan,
    SourceImage,
)


def resolve_plan(
    bundle: ParameterBundle,
    source: SourceImage,
    target_hint: str | os.PathLike[str] | None = None,
    *,
    registry: CodecRegistry | None = None,
    policy: OptimizerPolicy = DEFAULT_POLICY,
) -> ResolvedPlan:
    """
    Resolve the output size, quality and format for ``source``.

    Pure: the same inputs always give the same plan.

    Raises:
        InvalidImageError: If the source has a zero dimension
        UnresolvedFormatError: If no encodable output format is found
    """
    width, height = resolve_dimensions(bundle, source, policy)
    quality = resolve_quality(bundle, policy)
    mime = resolve_format(bundle, target_hint, source.native_format, registry)

    plan = ResolvedPlan(
        target_width=width,
        target_height=height,
        target_quality=quality,
        target_mime=mime,
    )
    logger.info(
        f"Plan: {source.width}x{source.height} {source.native_format or '?'} -> "
        + f"{width}x{height} {mime} q={quality}"
    )
    return plan


def optimize(
    data: bytes,
    sink: BinaryIO,
    bundle: ParameterBundle,
    target_hint: str | os.PathLike[str] | None = None,
    *,
    registry: CodecRegistry | None = None,
    policy: OptimizerPolicy = DEFAULT_POLICY,
) -> ResolvedPlan:
    """
    Re-encode one image for the delivery context described by ``bundle``.

    Args:
        data: Encoded source image
        sink: Binary stream receiving the output image
        bundle: Negotiation parameters
        target_hint: Output file path, used to infer the format from its extension
        registry: Codec registry (defaults to the stock Pillow codecs)
        policy: Numeric policy for the resolvers

    Returns:
        The plan that was executed

    Raises:
        OptimizerError: Any pipeline failure; nothing is written to ``sink``
            unless encoding succeeded
    """
    registry = registry or default_registry()

    source = registry.decode(data)
    plan = resolve_plan(bundle, source, target_hint, registry=registry, policy=policy)
    encode(sink, source, plan, registry, policy)
    return plan
