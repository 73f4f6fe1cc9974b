"""Loading and persisting gate configuration"""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from storagegate.platform.tier import TIER_ENV_VAR, parse_tier

from .schema import GateConfig

CONFIG_DIR = Path.home() / ".config" / "storagegate"
CONFIG_FILE = CONFIG_DIR / "config.json"

PACKAGE_ENV_VAR = "STORAGEGATE_PACKAGE_NAME"
STORAGE_ROOT_ENV_VAR = "STORAGEGATE_STORAGE_ROOT"


class ConfigError(Exception):
    """Raised when a configuration file cannot be used."""
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration {path}: {reason}")


def load_config(path: Optional[Path] = None) -> GateConfig:
    """Load configuration from JSON, then apply environment overrides.

    A missing file yields defaults. An unreadable or invalid file raises
    ConfigError.
    """
    path = path or CONFIG_FILE
    data: dict = {}
    if path.exists():
        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(path, str(e)) from e
        if not isinstance(data, dict):
            raise ConfigError(path, "top level must be an object")

    _apply_env(data)

    try:
        return GateConfig(**data)
    except ValidationError as e:
        raise ConfigError(path, str(e)) from e


def save_config(config: GateConfig, path: Optional[Path] = None) -> Path:
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(config.model_dump_json(indent=2))
    return path


def _apply_env(data: dict) -> None:
    platform = data.setdefault("platform", {})
    storage = data.setdefault("storage", {})
    if not isinstance(platform, dict) or not isinstance(storage, dict):
        # Leave it to schema validation to report
        return

    tier_env = os.environ.get(TIER_ENV_VAR)
    if tier_env is not None:
        tier = parse_tier(tier_env)
        if tier is not None:
            platform["tier"] = tier

    package_env = os.environ.get(PACKAGE_ENV_VAR)
    if package_env:
        platform["package_name"] = package_env

    root_env = os.environ.get(STORAGE_ROOT_ENV_VAR)
    if root_env:
        storage["root"] = str(Path(root_env).expanduser())
