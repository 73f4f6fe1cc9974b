"""Platform collaborators: capability tier, access oracle, grant flows."""

from .launcher import FlowLauncher, HostFlowLauncher
from .oracle import CapabilityOracle, PathAccessOracle
from .results import (
    PERMISSION_DENIED,
    PERMISSION_GRANTED,
    FlowResult,
    RuntimePromptResult,
    SettingsFlowResult,
)
from .tier import ANDROID_Q, ANDROID_R, DEFAULT_TIER, detect_tier, parse_tier

__all__ = [
    "FlowLauncher",
    "HostFlowLauncher",
    "CapabilityOracle",
    "PathAccessOracle",
    "PERMISSION_DENIED",
    "PERMISSION_GRANTED",
    "FlowResult",
    "RuntimePromptResult",
    "SettingsFlowResult",
    "ANDROID_Q",
    "ANDROID_R",
    "DEFAULT_TIER",
    "detect_tier",
    "parse_tier",
]
