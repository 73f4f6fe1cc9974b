"""Audit trail of storage gate decisions."""

import json
import logging
from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_AUDIT_FILE = Path.home() / ".local" / "share" / "storagegate" / "audit.jsonl"


class GateAction(str, Enum):
    """Types of auditable gate events."""
    ENTRY_CHECKED = "entry_checked"
    PROMPT_SHOWN = "prompt_shown"
    FLOW_LAUNCHED = "flow_launched"
    FLOW_FAILED = "flow_failed"
    FLOW_RESULT = "flow_result"
    RESULT_IGNORED = "result_ignored"
    EXIT_CHOSEN = "exit_chosen"


@dataclass
class AuditEntry:
    """A single audit log entry."""
    timestamp: str
    action: str
    granted: Optional[bool] = None
    flow: Optional[str] = None
    token: Optional[str] = None
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "AuditEntry":
        return cls(
            timestamp=data["timestamp"],
            action=data["action"],
            granted=data.get("granted"),
            flow=data.get("flow"),
            token=data.get("token"),
            details=data.get("details", {}),
        )


class AuditLog:
    """Records gate events in memory and to a JSONL file."""

    _instance: Optional["AuditLog"] = None

    def __init__(self, log_path: Optional[Path] = None, enabled: bool = True):
        self.enabled = enabled
        self.log_path = log_path or DEFAULT_AUDIT_FILE
        self._entries: list[AuditEntry] = []
        self._max_memory_entries = 1000

    @classmethod
    def get_instance(cls) -> "AuditLog":
        """Get the singleton audit log instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def configure(cls, log_path: Optional[Path] = None, enabled: bool = True) -> "AuditLog":
        """Replace the singleton instance."""
        cls._instance = cls(log_path=log_path, enabled=enabled)
        return cls._instance

    def log(
        self,
        action: GateAction,
        granted: Optional[bool] = None,
        flow: Optional[str] = None,
        token: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> AuditEntry:
        """Log an audit entry."""
        entry = AuditEntry(
            timestamp=datetime.now().isoformat(),
            action=action.value,
            granted=granted,
            flow=flow,
            token=token,
            details=details or {},
        )

        if not self.enabled:
            return entry

        self._entries.append(entry)
        if len(self._entries) > self._max_memory_entries:
            self._entries = self._entries[-self._max_memory_entries:]

        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_path, "a") as f:
                f.write(entry.to_json() + "\n")
        except OSError as e:
            logger.warning(f"Failed to write audit log: {e}")

        return entry

    def get_recent(self, count: int = 50) -> list[AuditEntry]:
        """Get recent audit entries from memory."""
        return self._entries[-count:]

    def read_file(self, count: int = 50) -> list[AuditEntry]:
        """Read the most recent entries persisted by any process."""
        if not self.log_path.exists():
            return []

        entries = []
        with open(self.log_path) as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    entries.append(AuditEntry.from_dict(json.loads(line)))
                except (json.JSONDecodeError, KeyError):
                    logger.debug(f"Skipping malformed audit line: {line[:80]}")
        return entries[-count:]

    def get_stats(self) -> dict:
        """Count in-memory entries per action."""
        stats = {
            "total_entries": len(self._entries),
            "by_action": {},
        }
        for entry in self._entries:
            stats["by_action"][entry.action] = stats["by_action"].get(entry.action, 0) + 1
        return stats


def get_audit_log() -> AuditLog:
    """Get the global audit log instance."""
    return AuditLog.get_instance()
