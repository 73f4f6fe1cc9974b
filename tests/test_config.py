"""Tests for configuration loading and validation"""

import json

import pytest

from storagegate.config import (
    ConfigError,
    ConfigValidator,
    GateConfig,
    load_config,
    save_config,
)
from storagegate.gate.flows import PERMISSION_REQUEST_CODE


class TestLoadConfig:
    """load_config"""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.json")

        assert config.platform.request_code == PERMISSION_REQUEST_CODE
        assert config.platform.tier is None
        assert config.prompt.continue_label == "Continue"
        assert config.prompt.exit_label == "Exit"

    def test_reads_json_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "platform": {"package_name": "com.example.sketch", "tier": 28},
            "storage": {"root": str(tmp_path / "data")},
            "prompt": {"title": "Files needed"},
        }))

        config = load_config(path)

        assert config.platform.package_name == "com.example.sketch"
        assert config.platform.tier == 28
        assert config.storage.root == tmp_path / "data"
        assert config.prompt.to_prompt().title == "Files needed"
        assert config.prompt.to_prompt().cancelable is False

    def test_environment_overrides(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"platform": {"tier": 33}}))
        monkeypatch.setenv("STORAGEGATE_PLATFORM_TIER", "27")
        monkeypatch.setenv("STORAGEGATE_PACKAGE_NAME", "org.example.env")
        monkeypatch.setenv("STORAGEGATE_STORAGE_ROOT", str(tmp_path / "env-root"))

        config = load_config(path)

        assert config.platform.tier == 27
        assert config.platform.package_name == "org.example.env"
        assert config.storage.root == tmp_path / "env-root"

    def test_invalid_json_raises_config_error(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError) as exc:
            load_config(path)
        assert exc.value.path == path

    def test_invalid_values_raise_config_error(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"platform": {"tier": 0}}))

        with pytest.raises(ConfigError):
            load_config(path)

    def test_non_object_raises_config_error(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigError):
            load_config(path)

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        config = GateConfig()
        config.platform.package_name = "com.example.saved"

        save_config(config, path)

        assert load_config(path).platform.package_name == "com.example.saved"


class TestConfigValidator:
    """ConfigValidator"""

    def test_validate_config_reports_fields(self):
        is_valid, errors = ConfigValidator.validate_config({"platform": {"tier": -3}})

        assert not is_valid
        assert any(e.startswith("platform.tier") for e in errors)

    @pytest.mark.parametrize("name,valid", [
        ("com.example.app", True),
        ("org.storage_gate.App2", True),
        ("", False),
        ("noperiod", False),
        ("com..double", False),
        ("1com.example", False),
    ])
    def test_validate_package_name(self, name, valid):
        assert ConfigValidator.validate_package_name(name)[0] is valid

    def test_validate_tier_describes_flow(self):
        assert ConfigValidator.validate_tier(None) == (True, "Platform tier will be detected at startup")
        assert "settings_screen" in ConfigValidator.validate_tier(33)[1]
        assert "legacy" in ConfigValidator.validate_tier(28)[1]
        assert ConfigValidator.validate_tier(0)[0] is False

    def test_storage_root_that_is_a_file(self, tmp_path):
        target = tmp_path / "file"
        target.write_text("x")

        is_valid, issues = ConfigValidator.validate_storage_root(target)

        assert not is_valid
        assert "not a directory" in issues[0]

    def test_storage_root_not_yet_created(self, tmp_path):
        is_valid, issues = ConfigValidator.validate_storage_root(tmp_path / "later")

        assert is_valid
        assert issues[0].startswith("Warning")

    def test_test_configuration(self, tmp_path):
        results = ConfigValidator.test_configuration({
            "platform": {"package_name": "com.example.app", "tier": 29},
            "storage": {"root": str(tmp_path)},
        })

        assert results["overall_valid"]
        assert set(results["tests"]) == {
            "schema_validation",
            "package_validation",
            "tier_validation",
            "storage_validation",
        }

    def test_test_configuration_stops_on_schema_error(self):
        results = ConfigValidator.test_configuration({"platform": {"tier": "high"}})

        assert not results["overall_valid"]
        assert list(results["tests"]) == ["schema_validation"]
