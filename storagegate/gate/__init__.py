"""Storage access gate.

Keeps the application's protected screens out of reach until the process
holds broad storage access, re-prompting on every entry point.
"""

from .controller import GateController, GateState, GrantState, PendingRequest
from .flows import (
    FlowKind,
    LEGACY_STORAGE_PERMISSIONS,
    PERMISSION_REQUEST_CODE,
    SETTINGS_ACTION,
    runtime_permissions,
    select_flow,
    settings_target,
)
from .prompt import ModalPrompt, PromptChoice, PromptPresenter

__all__ = [
    "GateController",
    "GateState",
    "GrantState",
    "PendingRequest",
    "FlowKind",
    "LEGACY_STORAGE_PERMISSIONS",
    "PERMISSION_REQUEST_CODE",
    "SETTINGS_ACTION",
    "runtime_permissions",
    "select_flow",
    "settings_target",
    "ModalPrompt",
    "PromptChoice",
    "PromptPresenter",
]
