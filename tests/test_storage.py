"""Tests for app-scoped storage helpers"""

import io

import pytest

from storagegate.platform.tier import ANDROID_Q
from storagegate.storage import ScopedStorage, copy_stream

from conftest import BrokenOracle, FakeOracle


class TestScopedStorage:
    """ScopedStorage"""

    def test_write_then_read_lines(self, tmp_path):
        storage = ScopedStorage(tmp_path, tier=ANDROID_Q)

        assert storage.write_lines("projects/demo/files.txt", ["main.xml", "layout.xml"])
        assert storage.read_lines("projects/demo/files.txt") == ["main.xml", "layout.xml"]

    def test_write_replaces_contents(self, tmp_path):
        storage = ScopedStorage(tmp_path, tier=ANDROID_Q)
        storage.write_lines("list.txt", ["a", "b", "c"])
        storage.write_lines("list.txt", ["z"])

        assert storage.read_lines("list.txt") == ["z"]

    def test_read_missing_file_is_empty(self, tmp_path):
        storage = ScopedStorage(tmp_path, tier=ANDROID_Q)
        assert storage.read_lines("nope.txt") == []

    def test_make_dirs(self, tmp_path):
        storage = ScopedStorage(tmp_path, tier=ANDROID_Q)
        path = storage.make_dirs("projects/one/res")

        assert path.is_dir()
        assert path == (tmp_path / "projects" / "one" / "res").resolve()

    def test_rejects_paths_outside_root(self, tmp_path):
        storage = ScopedStorage(tmp_path / "root", tier=ANDROID_Q)
        with pytest.raises(ValueError):
            storage.path_for("../escape.txt")

    def test_legacy_tier_without_grant_skips_io(self, tmp_path):
        storage = ScopedStorage(tmp_path, tier=ANDROID_Q - 1, oracle=FakeOracle(granted=False))
        (tmp_path / "existing.txt").write_text("kept\n")

        assert storage.write_lines("new.txt", ["x"]) is False
        assert not (tmp_path / "new.txt").exists()
        assert storage.read_lines("existing.txt") == []

    def test_legacy_tier_with_grant(self, tmp_path):
        storage = ScopedStorage(tmp_path, tier=ANDROID_Q - 1, oracle=FakeOracle(granted=True))

        assert storage.write_lines("new.txt", ["x"])
        assert storage.read_lines("new.txt") == ["x"]

    def test_legacy_tier_with_failing_oracle(self, tmp_path):
        storage = ScopedStorage(tmp_path, tier=ANDROID_Q - 1, oracle=BrokenOracle())
        assert storage.write_lines("new.txt", ["x"]) is False

    def test_scoped_tier_ignores_oracle(self, tmp_path):
        storage = ScopedStorage(tmp_path, tier=ANDROID_Q, oracle=FakeOracle(granted=False))
        assert storage.write_lines("new.txt", ["x"])


class TestCopyStream:
    """copy_stream"""

    def test_copies_everything(self):
        payload = bytes(range(256)) * 10
        source = io.BytesIO(payload)
        captured = {}

        class Sink(io.BytesIO):
            def close(self):
                captured["data"] = self.getvalue()
                super().close()

        assert copy_stream(source, Sink(), buffer_size=100)
        assert captured["data"] == payload
        assert source.closed
