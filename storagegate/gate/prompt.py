"""Modal prompt contract shown while storage access is missing"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol


class PromptChoice(str, Enum):
    """Action picked on the access prompt."""
    CONTINUE = "continue"
    EXIT = "exit"


@dataclass(frozen=True)
class ModalPrompt:
    """Descriptor for the blocking access prompt.

    The prompt is never cancelable by a dismissal gesture; it only closes
    through one of its two actions.
    """
    title: str = "File access required"
    message: str = (
        "This application stores its projects on shared storage and cannot "
        "run without access to it. Grant file access to continue."
    )
    continue_label: str = "Continue"
    exit_label: str = "Exit"
    cancelable: bool = False


class PromptPresenter(Protocol):
    """Surface able to display the access prompt."""

    def show(
        self,
        prompt: ModalPrompt,
        on_continue: Callable[[], None],
        on_exit: Callable[[], None],
    ) -> None:
        ...
