"""App-scoped storage helpers.

Files live under the configured storage root. On tiers before scoped storage
the legacy grant is required; without it writes are skipped and reads come
back empty rather than raising.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import BinaryIO, Iterable, Optional

from storagegate.platform.oracle import CapabilityOracle
from storagegate.platform.tier import ANDROID_Q

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 1024


class ScopedStorage:
    """Line-oriented file access inside the storage root"""

    def __init__(self, root: Path, tier: int, oracle: Optional[CapabilityOracle] = None):
        self.root = Path(root).expanduser()
        self.tier = tier
        self.oracle = oracle

    def path_for(self, rel_path: str) -> Path:
        """Resolve a relative path, refusing anything outside the root."""
        path = (self.root / rel_path).resolve()
        try:
            path.relative_to(self.root.resolve())
        except ValueError:
            raise ValueError(f"Path escapes storage root: {rel_path}")
        return path

    def make_dirs(self, rel_path: str) -> Path:
        path = self.path_for(rel_path)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def write_lines(self, filename: str, lines: Iterable[str]) -> bool:
        """Replace a file with the given lines. Returns False if skipped or failed."""
        if not self._legacy_access_ok():
            logger.debug(f"Skipping write of {filename}: storage access not granted")
            return False

        path = self.path_for(filename)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w") as f:
                for line in lines:
                    f.write(line + os.linesep)
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            return False
        return True

    def read_lines(self, filename: str) -> list[str]:
        """Read a file as lines without terminators. Empty when unavailable."""
        if not self._legacy_access_ok():
            logger.debug(f"Skipping read of {filename}: storage access not granted")
            return []

        path = self.path_for(filename)
        try:
            with open(path) as f:
                return [line.rstrip("\r\n") for line in f]
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")
            return []

    def _legacy_access_ok(self) -> bool:
        if self.tier >= ANDROID_Q or self.oracle is None:
            return True
        try:
            return self.oracle.is_access_granted()
        except Exception:
            logger.exception("Capability check failed")
            return False


def copy_stream(source: BinaryIO, dest: BinaryIO, buffer_size: int = COPY_BUFFER_SIZE) -> bool:
    """Copy one binary stream into another, closing both."""
    try:
        with source, dest:
            shutil.copyfileobj(source, dest, buffer_size)
    except OSError as e:
        logger.error(f"Copy failed: {e}")
        return False
    return True
