"""Gate configuration."""

from .schema import AuditConfig, GateConfig, PlatformConfig, PromptConfig, StorageConfig
from .store import CONFIG_FILE, ConfigError, load_config, save_config
from .validator import ConfigValidator

__all__ = [
    "AuditConfig",
    "GateConfig",
    "PlatformConfig",
    "PromptConfig",
    "StorageConfig",
    "CONFIG_FILE",
    "ConfigError",
    "load_config",
    "save_config",
    "ConfigValidator",
]
