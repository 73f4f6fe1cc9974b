"""Application shell that runs the storage gate before every protected screen"""

import logging
from functools import partial
from pathlib import Path
from typing import Callable, Optional, Sequence

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from storagegate.config.schema import GateConfig
from storagegate.gate.controller import GateController, GrantState
from storagegate.gate.prompt import ModalPrompt, PromptChoice
from storagegate.platform.launcher import (
    FlowLauncher,
    HostFlowLauncher,
    wait_and_launch,
)
from storagegate.platform.oracle import CapabilityOracle, PathAccessOracle
from storagegate.platform.results import (
    FlowResult,
    RuntimePromptResult,
    SettingsFlowResult,
)
from storagegate.platform.tier import detect_tier
from storagegate.storage import ScopedStorage

from .access_modal import StorageAccessModal
from .themes import THEMES, get_theme

logger = logging.getLogger(__name__)

PROJECTS_DIR = "projects"


class FlowCompleted(Message):
    """An OS grant flow delivered its result."""

    def __init__(self, result: FlowResult):
        super().__init__()
        self.result = result


class ModalPresenter:
    """Shows the access prompt as a Textual modal screen."""

    def __init__(self, app: App):
        self.app = app

    def show(
        self,
        prompt: ModalPrompt,
        on_continue: Callable[[], None],
        on_exit: Callable[[], None],
    ) -> None:
        def _chosen(choice: Optional[PromptChoice]) -> None:
            if choice == PromptChoice.EXIT:
                on_exit()
            else:
                on_continue()

        self.app.push_screen(StorageAccessModal(prompt), _chosen)


class ThreadedFlowLauncher:
    """Runs a host launcher in a worker thread and posts results to the app.

    A launcher that blows up still produces a result, so the gate re-checks
    instead of waiting forever.
    """

    def __init__(
        self,
        app: App,
        host: Optional[FlowLauncher] = None,
        storage_root: Optional[Path] = None,
        opener: Optional[Callable[[str], int]] = None,
    ):
        self.app = app
        if host is None:
            if storage_root is None:
                raise ValueError("storage_root is required without a host launcher")
            host = HostFlowLauncher(
                storage_root, deliver=self._deliver, opener=opener or wait_and_launch
            )
        self.host = host

    def launch_settings(self, token: str, action: str, target: str) -> None:
        fallback = SettingsFlowResult(token=token)
        self._start(partial(self.host.launch_settings, token, action, target), fallback)

    def request_permissions(
        self, token: str, request_code: int, permissions: Sequence[str]
    ) -> None:
        fallback = RuntimePromptResult(request_code=request_code, permissions=tuple(permissions))
        self._start(
            partial(self.host.request_permissions, token, request_code, permissions),
            fallback,
        )

    def _start(self, work: Callable[[], None], fallback: FlowResult) -> None:
        self.app.run_worker(
            partial(self._run, work, fallback),
            name="grant-flow",
            group="grant-flow",
            thread=True,
            exit_on_error=False,
        )

    def _run(self, work: Callable[[], None], fallback: FlowResult) -> None:
        try:
            work()
        except Exception:
            logger.exception("Grant flow failed")
            self._deliver(fallback)

    def _deliver(self, result: FlowResult) -> None:
        self.app.call_from_thread(self.app.post_message, FlowCompleted(result))


class HomeScreen(Screen):
    """First protected screen: the project list in app storage."""

    BINDINGS = [
        Binding("q", "app.quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
    ]

    def __init__(self, storage: ScopedStorage, **kwargs):
        super().__init__(**kwargs)
        self.storage = storage

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(f"Storage ready at [bold]{self.storage.root}[/]", id="home-status")
        yield Static("", id="project-list")
        yield Footer()

    def on_mount(self):
        self.action_refresh()

    def action_refresh(self):
        listing = self.query_one("#project-list", Static)
        try:
            projects_dir = self.storage.make_dirs(PROJECTS_DIR)
            names = sorted(p.name for p in projects_dir.iterdir() if p.is_dir())
        except OSError as e:
            logger.error(f"Could not list projects: {e}")
            listing.update(f"[red]Could not list projects: {e}[/]")
            return

        if not names:
            listing.update("[dim]No projects yet[/]")
        else:
            listing.update("\n".join(f"  {name}" for name in names))


class GatedApp(App):
    """Textual shell where every protected screen entry passes the gate."""

    TITLE = "storagegate"

    def __init__(
        self,
        config: Optional[GateConfig] = None,
        *,
        oracle: Optional[CapabilityOracle] = None,
        launcher: Optional[FlowLauncher] = None,
        tier: Optional[int] = None,
    ):
        super().__init__()
        self.gate_config = config or GateConfig()
        for theme in THEMES.values():
            self.register_theme(theme)

        self.tier = tier if tier is not None else detect_tier(self.gate_config.platform.tier)
        root = self.gate_config.storage.root
        self.oracle = oracle or PathAccessOracle(root)
        self.storage = ScopedStorage(root, self.tier, self.oracle)
        self.gate = GateController(
            self.oracle,
            ModalPresenter(self),
            launcher or ThreadedFlowLauncher(self, storage_root=root),
            tier=self.tier,
            package_name=self.gate_config.platform.package_name,
            prompt=self.gate_config.prompt.to_prompt(),
            request_code=self.gate_config.platform.request_code,
            terminate=self._terminate,
            tint=self._apply_tint,
        )
        self._waiting_screen: Optional[Screen] = None

    def on_mount(self):
        self.enter(HomeScreen(self.storage))

    def enter(self, screen: Screen) -> bool:
        """Push a protected screen once the gate lets it through.

        While access is missing the screen is parked and pushed as soon as a
        flow result finds the grant held.
        """
        if self.gate.on_entry() == GrantState.GRANTED:
            self._waiting_screen = None
            self.push_screen(screen)
            return True
        self._waiting_screen = screen
        return False

    def on_flow_completed(self, message: FlowCompleted) -> None:
        self.gate.dispatch(message.result)
        if self.gate.granted and self._waiting_screen is not None:
            screen, self._waiting_screen = self._waiting_screen, None
            self.push_screen(screen)

    def _apply_tint(self) -> None:
        self.theme = get_theme(self.gate_config.theme).name

    def _terminate(self, code: int) -> None:
        self.exit(return_code=code)
