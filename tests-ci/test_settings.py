"""
Tests for core/settings.py - YAML config + per-cycle snapshots
"""
import pytest
import yaml

from core.settings import DEFAULT_CLIENT_ID, NotifyConfig, SettingsStore, clean_token, load_config


@pytest.mark.unit
class TestSettingsStore:

    def test_defaults(self):
        store = SettingsStore()

        assert store.snapshot() == NotifyConfig(channels="", client_id=DEFAULT_CLIENT_ID, oauth="")
        assert store.get("monitoring.polling_interval") == 60
        assert store.get("monitoring.skip_overlapping") is True

    def test_snapshot_strips_oauth_prefix(self, settings):
        snapshot = settings.snapshot()

        assert snapshot.oauth == "test_token"
        assert snapshot.client_id == "test_client_id"
        assert snapshot.channels == "alpha beta gamma"

    def test_channel_list_is_joined(self):
        store = SettingsStore({"twitch": {"channels": ["Alpha", "beta"]}})

        assert store.snapshot().channels == "Alpha beta"

    def test_partial_section_keeps_defaults(self):
        store = SettingsStore({"monitoring": {"polling_interval": 5}})

        assert store.get("monitoring.polling_interval") == 5
        assert store.get("monitoring.transport") == "auto"

    def test_set_applies_to_next_snapshot(self, settings):
        before = settings.snapshot()
        settings.set("channels", "delta")

        assert before.channels == "alpha beta gamma"
        assert settings.snapshot().channels == "delta"

    def test_set_dotted_key(self, settings):
        settings.set("monitoring.polling_interval", 30)

        assert settings.get("monitoring.polling_interval") == 30

    def test_get_missing(self, settings):
        assert settings.get("nope.nothing", "fallback") == "fallback"

    def test_snapshot_is_frozen(self, settings):
        with pytest.raises(AttributeError):
            settings.snapshot().channels = "x"


@pytest.mark.unit
class TestConfigFile:

    def test_from_file_and_reload(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"twitch": {"channels": "one"}}))
        store = SettingsStore.from_file(str(path))
        assert store.snapshot().channels == "one"

        path.write_text(yaml.safe_dump({"twitch": {"channels": "two"}}))
        store.reload()

        assert store.snapshot().channels == "two"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_config(str(path)) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "absent.yaml"))

    def test_example_config_is_valid(self):
        from pathlib import Path
        example = Path(__file__).resolve().parent.parent / "config" / "config.example.yaml"
        config = load_config(str(example))

        assert "channels" in config["twitch"]
        assert config["monitoring"]["polling_interval"] == 60


@pytest.mark.unit
@pytest.mark.parametrize("raw,expected", [
    ("oauth:abc", "abc"),
    ("abc", "abc"),
    ("  abc  ", "abc"),
    (None, ""),
])
def test_clean_token(raw, expected):
    assert clean_token(raw) == expected
