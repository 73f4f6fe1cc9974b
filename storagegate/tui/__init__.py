"""Textual shell for storagegate."""

from .access_modal import StorageAccessModal
from .app import FlowCompleted, GatedApp, HomeScreen, ModalPresenter, ThreadedFlowLauncher

__all__ = [
    "StorageAccessModal",
    "FlowCompleted",
    "GatedApp",
    "HomeScreen",
    "ModalPresenter",
    "ThreadedFlowLauncher",
]
