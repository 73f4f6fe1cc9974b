"""Storage access gate.

The gate runs at every entry point of the application. While the storage
grant is missing it keeps a blocking prompt on screen; choosing Continue
starts the OS grant flow for the running platform tier, and every flow
result re-checks the grant from scratch. The loop ends only when the grant
is held or the user exits.
"""

import logging
import sys
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Sequence

from storagegate.audit import AuditLog, GateAction, get_audit_log
from storagegate.platform.launcher import FlowLauncher
from storagegate.platform.oracle import CapabilityOracle
from storagegate.platform.results import (
    FlowResult,
    RuntimePromptResult,
    SettingsFlowResult,
)

from .flows import (
    PERMISSION_REQUEST_CODE,
    SETTINGS_ACTION,
    FlowKind,
    runtime_permissions,
    select_flow,
    settings_target,
)
from .prompt import ModalPrompt, PromptPresenter

logger = logging.getLogger(__name__)


class GrantState(str, Enum):
    """Storage grant status, derived from the oracle on demand."""
    GRANTED = "granted"
    UNGRANTED = "ungranted"


class GateState(str, Enum):
    """Where the gate is in its prompt loop."""
    UNCHECKED = "unchecked"
    GRANTED = "granted"
    UNGRANTED = "ungranted"
    PROMPT_SHOWN = "prompt_shown"
    FLOW_LAUNCHED = "flow_launched"
    RECHECKING = "rechecking"
    EXITED = "exited"


@dataclass
class PendingRequest:
    """An OS grant flow that has been launched and not yet answered."""
    token: str
    kind: FlowKind
    request_code: int
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "token": self.token,
            "kind": self.kind.value,
            "request_code": self.request_code,
            "created_at": self.created_at.isoformat(),
        }


def _terminate_process(code: int) -> None:
    sys.exit(code)


class GateController:
    """Blocks the application until the storage grant is held."""

    def __init__(
        self,
        oracle: CapabilityOracle,
        presenter: PromptPresenter,
        launcher: FlowLauncher,
        *,
        tier: int,
        package_name: str,
        prompt: Optional[ModalPrompt] = None,
        request_code: int = PERMISSION_REQUEST_CODE,
        terminate: Callable[[int], None] = _terminate_process,
        tint: Optional[Callable[[], None]] = None,
        audit: Optional[AuditLog] = None,
    ):
        self.oracle = oracle
        self.presenter = presenter
        self.launcher = launcher
        self.tier = tier
        self.package_name = package_name
        self.prompt = prompt or ModalPrompt()
        self.request_code = request_code
        # Tier is fixed for the process, so the flow kind is too.
        self.flow_kind = select_flow(tier)
        self._terminate = terminate
        self._tint = tint
        self._audit = audit or get_audit_log()
        self._state = GateState.UNCHECKED
        self._pending: Optional[PendingRequest] = None

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def pending(self) -> Optional[PendingRequest]:
        return self._pending

    @property
    def granted(self) -> bool:
        return self._state == GateState.GRANTED

    def check(self) -> GrantState:
        """Ask the oracle for the current grant. Failures count as ungranted."""
        try:
            held = self.oracle.is_access_granted()
        except Exception:
            logger.exception("Capability check failed; treating storage access as ungranted")
            return GrantState.UNGRANTED
        return GrantState.GRANTED if held else GrantState.UNGRANTED

    def on_entry(self) -> GrantState:
        """Run the gate for one entry point into the application."""
        if self._state == GateState.EXITED:
            return GrantState.UNGRANTED
        if self._tint is not None:
            try:
                self._tint()
            except Exception:
                logger.exception("Surface tint failed")
        return self._evaluate(entry=True)

    def present_prompt(self) -> None:
        """Show the blocking access prompt."""
        self._state = GateState.PROMPT_SHOWN
        logger.info("Storage access missing; showing access prompt")
        self._audit.log(GateAction.PROMPT_SHOWN, granted=False, flow=self.flow_kind.value)
        try:
            self.presenter.show(self.prompt, self.choose_continue, self.choose_exit)
        except Exception:
            logger.exception("Failed to show access prompt")

    def choose_continue(self) -> None:
        """Continue action: launch the grant flow for this platform tier."""
        if self._state == GateState.EXITED:
            return
        if self._pending is not None:
            logger.warning(f"Replacing unanswered grant request {self._pending.token}")

        request = PendingRequest(
            token=uuid.uuid4().hex,
            kind=self.flow_kind,
            request_code=self.request_code,
        )
        # Set before launching: a launcher may deliver its result synchronously.
        self._pending = request
        self._state = GateState.FLOW_LAUNCHED
        self._audit.log(
            GateAction.FLOW_LAUNCHED,
            flow=request.kind.value,
            token=request.token,
            details={"tier": self.tier},
        )
        logger.info(f"Launching {request.kind.value} flow (tier {self.tier})")

        try:
            if request.kind == FlowKind.SETTINGS_SCREEN:
                self.launcher.launch_settings(
                    request.token, SETTINGS_ACTION, settings_target(self.package_name)
                )
            else:
                self.launcher.request_permissions(
                    request.token, request.request_code, runtime_permissions(self.tier)
                )
        except Exception as e:
            logger.exception("Failed to launch grant flow; prompting again")
            self._audit.log(
                GateAction.FLOW_FAILED,
                flow=request.kind.value,
                token=request.token,
                details={"error": str(e)},
            )
            if self._pending is request:
                self._pending = None
                self._evaluate()

    def choose_exit(self) -> None:
        """Exit action: terminate the whole process."""
        self._state = GateState.EXITED
        self._pending = None
        logger.info("User chose to exit without storage access")
        self._audit.log(GateAction.EXIT_CHOSEN)
        self._terminate(0)

    def on_flow_result(self, token: str, result_code: Optional[int] = None) -> None:
        """Settings screen returned. Its payload is not trusted; re-check."""
        if self._state == GateState.EXITED:
            return
        self._audit.log(
            GateAction.FLOW_RESULT,
            flow=FlowKind.SETTINGS_SCREEN.value,
            token=token,
        )
        self._pending = None
        self._evaluate()

    def on_runtime_prompt_result(
        self,
        request_code: int,
        grant_results: Sequence[int],
        permissions: Sequence[str] = (),
    ) -> None:
        """Runtime prompt returned. Results for other request codes are ignored."""
        if self._state == GateState.EXITED:
            return
        if request_code != self.request_code:
            logger.debug(f"Ignoring permission result for foreign request {request_code}")
            self._audit.log(GateAction.RESULT_IGNORED, details={"request_code": request_code})
            return
        self._audit.log(
            GateAction.FLOW_RESULT,
            flow=FlowKind.RUNTIME_PROMPT.value,
            token=self._pending.token if self._pending else None,
        )
        self._pending = None
        self._evaluate()

    def dispatch(self, result: FlowResult) -> None:
        """Route a flow result message to its handler."""
        if isinstance(result, SettingsFlowResult):
            self.on_flow_result(result.token, result.result_code)
        elif isinstance(result, RuntimePromptResult):
            self.on_runtime_prompt_result(
                result.request_code, result.grant_results, result.permissions
            )
        else:
            logger.warning(f"Unknown flow result: {result!r}")

    def _evaluate(self, entry: bool = False) -> GrantState:
        self._state = GateState.UNCHECKED if entry else GateState.RECHECKING
        grant = self.check()
        if entry:
            self._audit.log(GateAction.ENTRY_CHECKED, granted=grant == GrantState.GRANTED)

        if grant == GrantState.GRANTED:
            self._state = GateState.GRANTED
            logger.debug("Storage access granted")
            return grant

        self._state = GateState.UNGRANTED
        self.present_prompt()
        return grant
