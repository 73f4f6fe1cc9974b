"""Blocking storage access prompt"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from storagegate.gate.prompt import ModalPrompt, PromptChoice


class StorageAccessModal(ModalScreen[PromptChoice]):
    """Modal asking the user to grant storage access or exit.

    There is no way to dismiss it other than its two buttons.
    """

    CSS = """
    StorageAccessModal {
        align: center middle;
        background: rgba(0, 0, 0, 0.6);
    }

    #access-container {
        width: 64;
        height: auto;
        background: $surface;
        border: tall $secondary;
        padding: 1 2;
    }

    #access-title {
        text-style: bold;
        height: 2;
    }

    #access-message {
        color: $text-muted;
        height: auto;
        margin-bottom: 1;
    }

    #access-actions {
        height: 3;
        align: right middle;
    }

    #access-actions Button {
        margin-left: 2;
    }
    """

    BINDINGS = [
        Binding("escape", "ignore", show=False),
    ]

    def __init__(self, prompt: ModalPrompt):
        super().__init__()
        self.prompt = prompt

    def compose(self) -> ComposeResult:
        with Vertical(id="access-container"):
            yield Static(self.prompt.title, id="access-title")
            yield Static(self.prompt.message, id="access-message")
            with Horizontal(id="access-actions"):
                yield Button(self.prompt.exit_label, id="exit", variant="error")
                yield Button(self.prompt.continue_label, id="continue", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "continue":
            self.dismiss(PromptChoice.CONTINUE)
        elif event.button.id == "exit":
            self.dismiss(PromptChoice.EXIT)

    def action_ignore(self):
        # Not cancelable: only the two actions close the prompt
        pass
