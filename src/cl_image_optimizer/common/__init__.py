"""Common module - schemas, errors and the codec registry."""

from .codec_registry import CodecRegistry, ImageEncoder, default_registry
from .schemas import DEFAULT_POLICY, OptimizerPolicy, ParameterBundle, ResolvedPlan, SourceImage

__all__ = [
    "CodecRegistry",
    "ImageEncoder",
    "default_registry",
    "DEFAULT_POLICY",
    "OptimizerPolicy",
    "ParameterBundle",
    "ResolvedPlan",
    "SourceImage",
]
