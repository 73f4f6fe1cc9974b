"""Result messages sent back by OS grant flows"""

from dataclasses import dataclass
from typing import Optional, Union

# Per-permission outcomes reported by the runtime prompt
PERMISSION_GRANTED = 0
PERMISSION_DENIED = -1


@dataclass(frozen=True)
class SettingsFlowResult:
    """The settings screen returned control to the application.

    `result_code` is opaque; the OS does not report it reliably.
    """
    token: str
    result_code: Optional[int] = None


@dataclass(frozen=True)
class RuntimePromptResult:
    """The runtime permission prompt completed."""
    request_code: int
    permissions: tuple[str, ...] = ()
    grant_results: tuple[int, ...] = ()

    @property
    def all_granted(self) -> bool:
        return bool(self.grant_results) and all(
            r == PERMISSION_GRANTED for r in self.grant_results
        )


FlowResult = Union[SettingsFlowResult, RuntimePromptResult]
