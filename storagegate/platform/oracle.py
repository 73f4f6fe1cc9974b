"""Capability oracle: reports whether the storage grant is held."""

import logging
import os
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class CapabilityOracle(Protocol):
    """Read-only query for the current storage access grant.

    Implementations must not cache across calls; the grant can change while
    control is outside the application.
    """

    def is_access_granted(self) -> bool:
        ...


class PathAccessOracle:
    """Oracle for desktop hosts backed by filesystem access checks.

    The grant is held when the storage root exists as a directory and the
    process can read, write and traverse it.
    """

    def __init__(self, storage_root: Path):
        self.storage_root = Path(storage_root).expanduser()

    def is_access_granted(self) -> bool:
        root = self.storage_root
        if not root.is_dir():
            logger.debug(f"Storage root missing: {root}")
            return False
        granted = os.access(root, os.R_OK | os.W_OK | os.X_OK)
        logger.debug(f"Storage access for {root}: {granted}")
        return granted
