"""Tests for the storagegate CLI"""

import json

import pytest
from typer.testing import CliRunner

from storagegate.cli import app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    def _write(**overrides):
        data = {
            "platform": {"package_name": "com.example.sketch", "tier": 33},
            "storage": {"root": str(tmp_path / "root")},
            "audit": {"file": str(tmp_path / "audit.jsonl")},
        }
        data.update(overrides)
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data))
        return path
    return _write


class TestCheck:
    """check command"""

    def test_not_granted_exits_one(self, config_file):
        result = runner.invoke(app, ["check", "--config", str(config_file())])
        assert result.exit_code == 1
        assert "NOT GRANTED" in result.output

    def test_granted_exits_zero(self, config_file, tmp_path):
        path = config_file()
        (tmp_path / "root").mkdir()

        result = runner.invoke(app, ["check", "--config", str(path)])
        assert result.exit_code == 0
        assert "GRANTED" in result.output

    def test_bad_config_exits_two(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{")

        result = runner.invoke(app, ["check", "--config", str(path)])
        assert result.exit_code == 2


class TestStatus:
    """status command"""

    def test_shows_settings_target_for_modern_tier(self, config_file):
        result = runner.invoke(app, ["status", "--config", str(config_file())])

        assert result.exit_code == 0
        assert "settings_screen" in result.output
        assert "package:com.example.sketch" in result.output

    def test_shows_permissions_for_legacy_tier(self, config_file):
        path = config_file(platform={"package_name": "com.example.sketch", "tier": 28})

        result = runner.invoke(app, ["status", "--config", str(path)])

        assert result.exit_code == 0
        assert "runtime_prompt" in result.output
        assert "READ_EXTERNAL_STORAGE" in result.output


class TestValidate:
    """validate command"""

    def test_valid_config(self, config_file):
        result = runner.invoke(app, ["validate", "--config", str(config_file())])
        assert result.exit_code == 0
        assert "schema_validation" in result.output

    def test_invalid_package(self, config_file):
        path = config_file(platform={"package_name": "nodots"})

        result = runner.invoke(app, ["validate", "--config", str(path)])
        assert result.exit_code == 1


class TestAudit:
    """audit command"""

    def test_empty(self, config_file):
        result = runner.invoke(app, ["audit", "--config", str(config_file())])
        assert result.exit_code == 0
        assert "No gate events" in result.output

    def test_lists_entries(self, config_file, tmp_path):
        path = config_file()
        (tmp_path / "audit.jsonl").write_text(
            json.dumps({"timestamp": "2026-01-01T10:00:00", "action": "prompt_shown", "granted": False}) + "\n"
        )

        result = runner.invoke(app, ["audit", "--config", str(path)])
        assert result.exit_code == 0
        assert "prompt_shown" in result.output
