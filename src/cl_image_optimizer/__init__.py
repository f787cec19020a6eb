"""cl_image_optimizer - Adaptive image re-encoding for responsive delivery."""

from .algo.codec_dispatcher import encode
from .algo.dimension_resolver import resolve_dimensions
from .algo.format_selector import resolve_format
from .algo.quality_resolver import resolve_quality
from .common.codec_registry import CodecRegistry, ImageEncoder, default_registry
from .common.errors import (
    DecodeError,
    EncodeError,
    InvalidImageError,
    InvalidInputError,
    OptimizerError,
    UnresolvedFormatError,
    WriteError,
)
from .common.schemas import (
    DEFAULT_POLICY,
    OptimizerPolicy,
    ParameterBundle,
    QualityTier,
    ResolvedPlan,
    SourceImage,
)
from .optimizer import optimize, resolve_plan

__version__ = "0.1.0"

__all__ = [
    "ParameterBundle",
    "SourceImage",
    "ResolvedPlan",
    "OptimizerPolicy",
    "QualityTier",
    "DEFAULT_POLICY",
    "CodecRegistry",
    "ImageEncoder",
    "default_registry",
    "resolve_dimensions",
    "resolve_quality",
    "resolve_format",
    "resolve_plan",
    "encode",
    "optimize",
    "OptimizerError",
    "InvalidInputError",
    "DecodeError",
    "InvalidImageError",
    "UnresolvedFormatError",
    "EncodeError",
    "WriteError",
    "__version__",
]
