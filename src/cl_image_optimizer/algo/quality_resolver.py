"""Output quality resolution (pure, no I/O)."""

from loguru import logger

from ..common.schemas import DEFAULT_POLICY, OptimizerPolicy, ParameterBundle

MIN_QUALITY = 1
MAX_QUALITY = 100


def clamp_quality(quality: int) -> int:
    return max(MIN_QUALITY, min(MAX_QUALITY, quality))


def quality_for_downlink(downlink: float, policy: OptimizerPolicy = DEFAULT_POLICY) -> int:
    """Step function over the policy's downlink tiers (Mbps)."""
    for tier in policy.quality_tiers:
        if downlink < tier.max_downlink:
            return tier.quality
    return policy.fallback_quality


def resolve_quality(
    bundle: ParameterBundle,
    policy: OptimizerPolicy = DEFAULT_POLICY,
) -> int:
    """
    Compute the output compression quality.

    An explicit quality always wins. Otherwise the downlink tier decides, and
    save-data caps the result at the policy ceiling.

    Returns:
        Quality in [1, 100]
    """
    if bundle.quality is not None:
        return clamp_quality(bundle.quality)

    quality = quality_for_downlink(bundle.downlink, policy)
    if bundle.save_data:
        quality = min(quality, policy.save_data_quality_ceiling)

    quality = clamp_quality(quality)
    logger.debug(
        f"Quality {quality} for downlink={bundle.downlink}Mbps save_data={bundle.save_data}"
    )
    return quality
