"""
Tests for configuration loading.

Tests the pydantic models, YAML loading and environment overrides.
"""
from pathlib import Path

import pytest

from dreamdeploy.config import Config, load_config, save_config
from dreamdeploy.config.constants import DEFAULT_INITIAL_LEDGER_SUPPLY
from dreamdeploy.core.exceptions import InvalidConfigError


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        "deploy:\n"
        "  network: memory\n"
        "  initial_ledger_supply: 5000\n"
        "  auto_order: true\n"
        "logging:\n"
        "  console_level: info\n"
    )
    return path


class TestDefaults:
    def test_default_values(self):
        config = Config()

        assert config.deploy.network == "memory"
        assert config.deploy.initial_ledger_supply == DEFAULT_INITIAL_LEDGER_SUPPLY
        assert config.deploy.initial_ledger_supply == 1000000000000000000000
        assert config.deploy.validate_order is True
        assert config.deploy.auto_order is False
        assert config.logging.file_level == "debug"

    def test_missing_default_file_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DREAMDEPLOY_CONFIG", str(tmp_path / "absent.yaml"))

        assert load_config() == Config()


class TestLoadConfig:
    def test_load_from_file(self, config_file):
        config = load_config(config_file)

        assert config.deploy.initial_ledger_supply == 5000
        assert config.deploy.auto_order is True
        assert config.logging.console_level == "info"

    def test_config_from_env_path(self, config_file, monkeypatch):
        monkeypatch.setenv("DREAMDEPLOY_CONFIG", str(config_file))

        assert load_config().deploy.initial_ledger_supply == 5000

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(InvalidConfigError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(path) == Config()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("deploy: [unclosed\n")

        with pytest.raises(InvalidConfigError, match="Invalid YAML"):
            load_config(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(InvalidConfigError, match="mapping"):
            load_config(path)

    @pytest.mark.parametrize("supply", [0, -1, "lots"])
    def test_invalid_supply(self, tmp_path, supply):
        path = tmp_path / "config.yaml"
        path.write_text(f"deploy:\n  initial_ledger_supply: {supply}\n")

        with pytest.raises(InvalidConfigError):
            load_config(path)


class TestEnvOverrides:
    def test_network_and_supply(self, config_file, monkeypatch):
        monkeypatch.setenv("DREAMDEPLOY_NETWORK", "sepolia")
        monkeypatch.setenv("DREAMDEPLOY_INITIAL_LEDGER_SUPPLY", "42")

        config = load_config(config_file)

        assert config.deploy.network == "sepolia"
        assert config.deploy.initial_ledger_supply == 42
        # Untouched file values survive
        assert config.deploy.auto_order is True

    def test_log_level(self, config_file, monkeypatch):
        monkeypatch.setenv("DREAMDEPLOY_LOG_LEVEL", "ERROR")

        assert load_config(config_file).logging.console_level == "error"

    def test_bad_supply_variable(self, config_file, monkeypatch):
        monkeypatch.setenv("DREAMDEPLOY_INITIAL_LEDGER_SUPPLY", "1e21")

        with pytest.raises(InvalidConfigError, match="must be an integer"):
            load_config(config_file)


class TestSaveConfig:
    def test_round_trip(self, tmp_path):
        config = Config()
        config.deploy.initial_ledger_supply = 77
        path = save_config(config, tmp_path / "out" / "config.yaml")

        assert path.exists()
        assert load_config(path).deploy.initial_ledger_supply == 77
