"""Pydantic schemas for optimizer parameters, policy and plans."""

from typing import ClassVar

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ─────────────────────────────────────────────────────────────
# Request parameters
# ─────────────────────────────────────────────────────────────


class ParameterBundle(BaseModel):
    """Content-negotiation parameters for a single optimization run.

    Unset values are ``None``. The zero/empty sentinels used by the command
    line (``quality=0``, ``width=0``, ``mime_type=""``) are accepted and
    normalised to ``None``.

    Attributes:
        mime_type: Explicit output MIME type (None = infer)
        quality: Explicit output quality (None = infer from downlink/save-data)
        width: Requested width in CSS pixels (None = infer/preserve)
        height: Requested height in CSS pixels (None = infer/preserve)
        dpr: Device pixel ratio applied to the requested dimensions
        downlink: Estimated client downlink in Mbps
        save_data: Client asked to minimise data transfer
    """

    mime_type: str | None = Field(default=None, description="Explicit output MIME type")
    quality: int | None = Field(default=None, description="Explicit output quality (1-100)")
    width: int | None = Field(default=None, ge=0, description="Requested width in CSS pixels")
    height: int | None = Field(default=None, ge=0, description="Requested height in CSS pixels")
    dpr: float = Field(default=1.0, gt=0, description="Device pixel ratio")
    downlink: float = Field(default=0.384, gt=0, description="Downlink speed in Mbps")
    save_data: bool = Field(default=False, description="Optimize to save data")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @field_validator("mime_type", mode="before")
    @classmethod
    def normalize_mime_type(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip().lower()
        return v or None

    @field_validator("quality", "width", "height", mode="after")
    @classmethod
    def zero_means_unset(cls, v: int | None) -> int | None:
        return v or None


# ─────────────────────────────────────────────────────────────
# Decoded source
# ─────────────────────────────────────────────────────────────


class SourceImage(BaseModel):
    """Decoded pixel buffer plus the format the decoder detected."""

    image: Image.Image
    native_format: str = ""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size


# ─────────────────────────────────────────────────────────────
# Resolved plan
# ─────────────────────────────────────────────────────────────


class ResolvedPlan(BaseModel):
    """Fully populated output settings handed to the codec dispatcher."""

    target_width: int = Field(..., ge=1)
    target_height: int = Field(..., ge=1)
    target_quality: int = Field(..., ge=1, le=100)
    target_mime: str = Field(..., min_length=1)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def size(self) -> tuple[int, int]:
        return (self.target_width, self.target_height)


# ─────────────────────────────────────────────────────────────
# Policy
# ─────────────────────────────────────────────────────────────


class QualityTier(BaseModel):
    """Quality used for downlinks strictly below ``max_downlink`` Mbps."""

    max_downlink: float = Field(..., gt=0)
    quality: int = Field(..., ge=1, le=100)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class OptimizerPolicy(BaseModel):
    """Tunable numeric policy for the resolvers and the resize step."""

    quality_tiers: tuple[QualityTier, ...] = (
        QualityTier(max_downlink=0.5, quality=40),
        QualityTier(max_downlink=1.5, quality=60),
        QualityTier(max_downlink=5.0, quality=75),
    )
    fallback_quality: int = Field(default=85, ge=1, le=100)
    save_data_quality_ceiling: int = Field(default=50, ge=1, le=100)
    save_data_scale: float = Field(default=0.8, gt=0, le=1)
    resample: Image.Resampling = Image.Resampling.LANCZOS

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_tiers_monotonic(self) -> "OptimizerPolicy":
        """Ensure quality never decreases as downlink grows."""
        previous: QualityTier | None = None
        for tier in self.quality_tiers:
            if previous is not None:
                if tier.max_downlink <= previous.max_downlink:
                    raise ValueError("Quality tier thresholds must be strictly increasing")
                if tier.quality < previous.quality:
                    raise ValueError("Quality tiers must not decrease with downlink")
            previous = tier

        if previous is not None and self.fallback_quality < previous.quality:
            raise ValueError("Fallback quality must not be lower than the last tier")
        return self


DEFAULT_POLICY = OptimizerPolicy()
