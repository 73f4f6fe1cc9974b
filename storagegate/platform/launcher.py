"""OS grant flow launchers"""

import logging
import stat
from functools import partial
from pathlib import Path
from typing import Callable, Protocol, Sequence

import typer

from .results import (
    PERMISSION_DENIED,
    PERMISSION_GRANTED,
    FlowResult,
    RuntimePromptResult,
    SettingsFlowResult,
)

logger = logging.getLogger(__name__)

# Blocks until the opened screen is closed, like an activity result
wait_and_launch = partial(typer.launch, wait=True)


class FlowLauncher(Protocol):
    """Starts an OS grant flow.

    Launching is fire and forget: the result arrives later as a
    `FlowResult` message, never as a return value.
    """

    def launch_settings(self, token: str, action: str, target: str) -> None:
        ...

    def request_permissions(
        self, token: str, request_code: int, permissions: Sequence[str]
    ) -> None:
        ...


class HostFlowLauncher:
    """Grant flows for desktop hosts.

    A desktop has no all-files switch; holding the grant means owning a
    readable, writable storage root. The settings flow opens the target and
    waits for the user to close it, then provisions the root. The runtime
    prompt flow provisions the root directly and reports one outcome per
    requested permission. Results go to `deliver`, which callers wire to
    their event loop.
    """

    def __init__(
        self,
        storage_root: Path,
        deliver: Callable[[FlowResult], None],
        opener: Callable[[str], int] = wait_and_launch,
    ):
        self.storage_root = Path(storage_root).expanduser()
        self._deliver = deliver
        self._opener = opener

    def launch_settings(self, token: str, action: str, target: str) -> None:
        logger.info(f"Opening {action} for {target}")
        try:
            result_code = self._opener(target)
        except OSError as e:
            logger.warning(f"Failed to open settings target {target}: {e}")
            result_code = None
        self._provision()
        self._deliver(SettingsFlowResult(token=token, result_code=result_code))

    def request_permissions(
        self, token: str, request_code: int, permissions: Sequence[str]
    ) -> None:
        logger.info(f"Requesting permissions {list(permissions)} (request {request_code})")
        outcome = PERMISSION_GRANTED if self._provision() else PERMISSION_DENIED
        self._deliver(
            RuntimePromptResult(
                request_code=request_code,
                permissions=tuple(permissions),
                grant_results=tuple(outcome for _ in permissions),
            )
        )

    def _provision(self) -> bool:
        root = self.storage_root
        try:
            root.mkdir(parents=True, exist_ok=True)
            mode = root.stat().st_mode
            root.chmod(mode | stat.S_IRWXU)
        except OSError as e:
            logger.warning(f"Could not provision storage root {root}: {e}")
            return False
        return True
