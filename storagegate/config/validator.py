"""Configuration validator utilities for storagegate.

Checks a configuration before the gate runs: schema validity, platform
identity, and whether the storage root is usable.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from storagegate.gate.flows import select_flow
from storagegate.platform.tier import ANDROID_Q, ANDROID_R

from .schema import GateConfig

_PACKAGE_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*(\.[A-Za-z][A-Za-z0-9_]*)+$")


class ConfigValidator:
    """Utility class for validating storagegate configurations."""

    @staticmethod
    def validate_config(config_dict: Dict) -> Tuple[bool, List[str]]:
        """Validate a configuration dictionary.

        Args:
            config_dict: Configuration dictionary to validate

        Returns:
            Tuple of (is_valid, error_messages)
        """
        errors: List[str] = []

        try:
            GateConfig(**config_dict)
            return True, []
        except ValidationError as e:
            for error in e.errors():
                field = '.'.join(str(x) for x in error['loc'])
                msg = error['msg']
                errors.append(f"{field}: {msg}")
            return False, errors

    @staticmethod
    def validate_package_name(package_name: str) -> Tuple[bool, str]:
        """Validate the application package identifier.

        Args:
            package_name: Dotted identifier embedded in the settings target

        Returns:
            Tuple of (is_valid, message)
        """
        if not package_name or not package_name.strip():
            return False, "Package name cannot be empty"

        if not _PACKAGE_RE.match(package_name):
            return False, f"Invalid package name: {package_name} (expected dotted identifier like com.example.app)"

        return True, f"Valid package name: {package_name}"

    @staticmethod
    def validate_tier(tier: Optional[int]) -> Tuple[bool, str]:
        """Describe the grant flow a tier will use.

        Args:
            tier: Configured platform tier, or None to detect

        Returns:
            Tuple of (is_valid, message)
        """
        if tier is None:
            return True, "Platform tier will be detected at startup"

        if tier < 1:
            return False, f"Platform tier must be positive, got {tier}"

        flow = select_flow(tier)
        if tier >= ANDROID_R:
            return True, f"Tier {tier}: {flow.value} flow"
        if tier >= ANDROID_Q:
            return True, f"Tier {tier}: {flow.value} flow (scoped storage available)"
        return True, f"Tier {tier}: {flow.value} flow (legacy storage permissions)"

    @staticmethod
    def validate_storage_root(root: Path) -> Tuple[bool, List[str]]:
        """Check that the storage root can be provisioned.

        Args:
            root: Storage root directory

        Returns:
            Tuple of (is_valid, warnings/errors)
        """
        issues: List[str] = []
        root = Path(root).expanduser()

        if root.exists() and not root.is_dir():
            issues.append(f"Error: storage root {root} exists and is not a directory.")
            return False, issues

        if not root.exists():
            parent = root.parent
            while not parent.exists() and parent != parent.parent:
                parent = parent.parent
            if not os.access(parent, os.W_OK):
                issues.append(f"Error: cannot create storage root under {parent}.")
                return False, issues
            issues.append(f"Warning: storage root {root} does not exist yet; access will be requested.")

        return True, issues

    @staticmethod
    def test_configuration(config_dict: Dict) -> Dict[str, Any]:
        """Run comprehensive configuration tests.

        Args:
            config_dict: Configuration to test

        Returns:
            Dictionary with test results
        """
        results: Dict[str, Any] = {
            "overall_valid": True,
            "tests": {}
        }

        # Test 1: Basic schema validation
        is_valid, errors = ConfigValidator.validate_config(config_dict)
        results["tests"]["schema_validation"] = {
            "valid": is_valid,
            "errors": errors
        }
        if not is_valid:
            results["overall_valid"] = False
            return results

        config = GateConfig(**config_dict)

        # Test 2: Package name
        is_valid, message = ConfigValidator.validate_package_name(config.platform.package_name)
        results["tests"]["package_validation"] = {
            "valid": is_valid,
            "message": message
        }
        if not is_valid:
            results["overall_valid"] = False

        # Test 3: Platform tier
        is_valid, message = ConfigValidator.validate_tier(config.platform.tier)
        results["tests"]["tier_validation"] = {
            "valid": is_valid,
            "message": message
        }
        if not is_valid:
            results["overall_valid"] = False

        # Test 4: Storage root
        is_valid, issues = ConfigValidator.validate_storage_root(config.storage.root)
        results["tests"]["storage_validation"] = {
            "valid": is_valid,
            "warnings_errors": issues
        }
        if not is_valid:
            results["overall_valid"] = False

        return results
