"""Platform capability tier detection"""

import logging
import os
from functools import lru_cache
from typing import Optional

logger = logging.getLogger(__name__)

# API levels that change how broad storage access is obtained
ANDROID_Q = 29  # scoped storage introduced
ANDROID_R = 30  # legacy broad storage permissions deprecated

TIER_ENV_VAR = "STORAGEGATE_PLATFORM_TIER"

# Used when nothing else reports a tier. Desktop hosts behave like a
# modern tier: broad access is granted from a settings screen.
DEFAULT_TIER = ANDROID_R


def parse_tier(value: str) -> Optional[int]:
    """Parse a tier value, returning None for blank or invalid input."""
    value = value.strip()
    if not value:
        return None
    try:
        tier = int(value)
    except ValueError:
        logger.warning(f"Ignoring invalid platform tier: {value!r}")
        return None
    if tier < 1:
        logger.warning(f"Ignoring non-positive platform tier: {tier}")
        return None
    return tier


@lru_cache(maxsize=1)
def detect_tier(configured: Optional[int] = None) -> int:
    """Resolve the running platform tier.

    The tier cannot change during a process lifetime, so the result is cached.
    Resolution order: environment override, configured value, default.
    """
    env_value = os.environ.get(TIER_ENV_VAR)
    if env_value is not None:
        tier = parse_tier(env_value)
        if tier is not None:
            logger.debug(f"Platform tier {tier} from {TIER_ENV_VAR}")
            return tier

    if configured is not None:
        logger.debug(f"Platform tier {configured} from configuration")
        return configured

    logger.debug(f"Platform tier defaulting to {DEFAULT_TIER}")
    return DEFAULT_TIER
