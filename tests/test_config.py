"""Tests for configuration management."""

import json

import pytest
from pydantic import ValidationError

from eventrecur_cli.config import Config, ConfigManager, get_config_manager


def test_default_config():
    """Test default configuration."""
    config = Config()
    assert config.output.format == "table"
    assert config.ui.language == "en"
    assert config.preview.limit == 6
    assert config.events.time == "19:00"
    assert config.rules.weekday == 5
    assert config.rules.interval_days == 7
    assert config.rules.month_position == 1
    assert config.rules.day_of_month == 1


def test_config_manager_uses_user_config_dir(isolated_dirs):
    """Config files land in the platformdirs config directory."""
    config_manager = ConfigManager(profile="test")
    assert config_manager.config_file == isolated_dirs / "config" / "test.json"
    assert config_manager.config_dir.exists()


def test_config_save_load():
    """Test saving and loading configuration."""
    config_manager = ConfigManager(profile="test")
    config_manager.set("ui.language", "pt")
    assert config_manager.get("ui.language") == "pt"

    # A new manager with the same profile reads the saved value
    assert ConfigManager(profile="test").get("ui.language") == "pt"


def test_get_unknown_key_returns_none():
    config_manager = ConfigManager(profile="test")
    assert config_manager.get("ui.missing") is None
    assert config_manager.get("ui.language.deeper") is None


def test_set_validates_value():
    """Out-of-range rule defaults are rejected and nothing is written."""
    config_manager = ConfigManager(profile="test")
    with pytest.raises(ValidationError):
        config_manager.set("rules.interval_days", 0)
    assert config_manager.get("rules.interval_days") == 7
    assert not config_manager.config_file.exists()


def test_reset_single_key():
    config_manager = ConfigManager(profile="test")
    config_manager.set("preview.limit", 10)
    config_manager.reset("preview.limit")
    assert config_manager.get("preview.limit") == 6


def test_reset_all():
    config_manager = ConfigManager(profile="test")
    config_manager.set("rules.weekday", 0)
    config_manager.set("ui.language", "pt")
    config_manager.reset()
    assert config_manager.config == Config()
    saved = json.loads(config_manager.config_file.read_text())
    assert saved["rules"]["weekday"] == 5


def test_corrupted_config_falls_back_to_defaults():
    config_manager = ConfigManager(profile="broken")
    config_manager.config_file.write_text("{not json")
    assert config_manager.load_config() == Config()


def test_list_profiles():
    ConfigManager(profile="youth").save_config()
    ConfigManager(profile="default").save_config()
    assert ConfigManager(profile="default").list_profiles() == ["default", "youth"]


def test_get_config_manager_is_cached_per_profile():
    first = get_config_manager("default")
    assert get_config_manager("default") is first
    other = get_config_manager("youth")
    assert other is not first
    assert other.profile == "youth"
