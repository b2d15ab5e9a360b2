"""
Tests for watcher configuration loading.
"""

import pytest
import yaml

import sniwatch.configs
from sniwatch import protocol
from sniwatch.configs import BUS_ENV_VAR, WatcherConfig, get_config, load_config


@pytest.fixture(autouse=True)
def clear_bus_env(monkeypatch):
    monkeypatch.delenv(BUS_ENV_VAR, raising=False)


def write_config(tmp_path, data):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


class TestDefaults:

    def test_default_config(self):
        config = WatcherConfig()
        assert config.object_path == "/StatusNotifierWatcher"
        assert config.well_known_names == list(protocol.WATCHER_BUS_NAMES)
        assert config.bus.bus_type == "session"
        assert config.bus.replace_existing is True
        assert config.log_level == "INFO"

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.yaml")
        assert config == WatcherConfig()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == WatcherConfig()


class TestOverrides:

    def test_file_values(self, tmp_path):
        path = write_config(tmp_path, {
            "log_level": "DEBUG",
            "well_known_names": ["org.test.Watcher"],
            "bus": {"bus_type": "system", "replace_existing": False},
        })
        config = load_config(path)
        assert config.log_level == "DEBUG"
        assert config.well_known_names == ["org.test.Watcher"]
        assert config.bus.bus_type == "system"
        assert config.bus.replace_existing is False

    def test_unknown_keys_ignored(self, tmp_path):
        path = write_config(tmp_path, {"colour": "blue", "bus": {"speed": 9}})
        config = load_config(path)
        assert not hasattr(config, "colour")
        assert not hasattr(config.bus, "speed")

    def test_bus_section_must_be_mapping(self, tmp_path):
        path = write_config(tmp_path, {"bus": "system"})
        assert load_config(path).bus.bus_type == "session"

    def test_invalid_bus_type(self, tmp_path):
        path = write_config(tmp_path, {"bus": {"bus_type": "starter"}})
        with pytest.raises(ValueError):
            load_config(path)

    def test_environment_wins(self, tmp_path, monkeypatch):
        path = write_config(tmp_path, {"bus": {"bus_type": "session"}})
        monkeypatch.setenv(BUS_ENV_VAR, "SYSTEM")
        assert load_config(path).bus.bus_type == "system"


class TestWellKnownNames:

    def test_single_name_is_wrapped(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("well_known_names: org.test.Watcher\n")
        assert load_config(path).well_known_names == ["org.test.Watcher"]

    def test_list_kept(self, tmp_path):
        path = write_config(tmp_path, {"well_known_names": ["org.a.Watcher", "org.b.Watcher"]})
        assert load_config(path).well_known_names == ["org.a.Watcher", "org.b.Watcher"]

    @pytest.mark.parametrize("value", [[1, 2], {"org.a.Watcher": True}, 7])
    def test_not_names(self, tmp_path, value):
        path = write_config(tmp_path, {"well_known_names": value})
        with pytest.raises(ValueError):
            load_config(path)


class TestGetConfig:

    def test_loaded_once_from_default_path(self, tmp_path, monkeypatch):
        path = write_config(tmp_path, {"log_level": "DEBUG"})
        monkeypatch.setattr(sniwatch.configs, "DEFAULT_CONFIG_PATH", path)
        monkeypatch.setattr(sniwatch.configs, "default_config", None)

        first = get_config()
        path.write_text(yaml.safe_dump({"log_level": "ERROR"}))

        assert first.log_level == "DEBUG"
        assert get_config() is first
