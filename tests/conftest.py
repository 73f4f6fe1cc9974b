"""Shared fakes for gate tests"""

import pytest

from storagegate.audit import AuditLog
from storagegate.platform.tier import TIER_ENV_VAR, detect_tier


class FakeOracle:
    """Oracle with a settable answer that counts queries."""

    def __init__(self, granted: bool = False):
        self.granted = granted
        self.calls = 0

    def is_access_granted(self) -> bool:
        self.calls += 1
        return self.granted


class BrokenOracle:
    def is_access_granted(self) -> bool:
        raise RuntimeError("capability service unavailable")


class RecordingPresenter:
    """Records every prompt shown and keeps its action callbacks."""

    def __init__(self):
        self.shown = []
        self.on_continue = None
        self.on_exit = None

    def show(self, prompt, on_continue, on_exit):
        self.shown.append(prompt)
        self.on_continue = on_continue
        self.on_exit = on_exit


class RecordingLauncher:
    """Records launches without delivering results."""

    def __init__(self, fail: bool = False):
        self.settings_calls = []
        self.permission_calls = []
        self.fail = fail

    def launch_settings(self, token, action, target):
        if self.fail:
            raise OSError("no settings activity")
        self.settings_calls.append((token, action, target))

    def request_permissions(self, token, request_code, permissions):
        if self.fail:
            raise OSError("no permission activity")
        self.permission_calls.append((token, request_code, tuple(permissions)))


@pytest.fixture(autouse=True)
def isolated_audit(tmp_path):
    log = AuditLog.configure(log_path=tmp_path / "audit.jsonl", enabled=True)
    yield log
    AuditLog._instance = None


@pytest.fixture(autouse=True)
def clean_tier(monkeypatch):
    monkeypatch.delenv(TIER_ENV_VAR, raising=False)
    monkeypatch.delenv("STORAGEGATE_PACKAGE_NAME", raising=False)
    monkeypatch.delenv("STORAGEGATE_STORAGE_ROOT", raising=False)
    detect_tier.cache_clear()
    yield
    detect_tier.cache_clear()


@pytest.fixture
def oracle():
    return FakeOracle()


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def launcher():
    return RecordingLauncher()
