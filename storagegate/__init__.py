"""storagegate - keeps an application closed until storage access is granted."""

__version__ = "0.1.0"

from .gate import FlowKind, GateController, GateState, GrantState, ModalPrompt, select_flow

__all__ = [
    "FlowKind",
    "GateController",
    "GateState",
    "GrantState",
    "ModalPrompt",
    "select_flow",
]
