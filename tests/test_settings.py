import json

import pytest

from backend import DEFAULT_CUSTOM_DURATIONS
from backend import settings as app_settings
from backend.custom_durations import CustomDurationStore


def test_defaults_written_on_first_run(settings_file):
    assert not settings_file.exists()
    assert app_settings.get_value("sound_level") == 1.0
    assert settings_file.exists()
    data = json.loads(settings_file.read_text(encoding="utf-8"))
    keys = [item["key"] for item in data]
    assert keys == ["sound_level", "custom_durations"]


def test_set_value_persists(settings_file):
    app_settings.set_value("sound_level", 0.25)
    app_settings.clear_cache()
    assert app_settings.get_value("sound_level") == 0.25

    app_settings.set_value("theme", "dark")
    data = json.loads(settings_file.read_text(encoding="utf-8"))
    assert {"key": "theme", "value": "dark", "type": "str"} in data


def test_corrupt_file_falls_back_to_defaults(settings_file):
    settings_file.write_text("{not json", encoding="utf-8")
    assert app_settings.get_value("custom_durations") == DEFAULT_CUSTOM_DURATIONS
    # defaults replace the unreadable file
    assert json.loads(settings_file.read_text(encoding="utf-8"))


def test_defaults_not_shared_between_loads():
    app_settings.get_value("custom_durations")["inhale"] = 99
    app_settings.clear_cache()
    assert app_settings.DEFAULT_SETTINGS[1]["value"]["inhale"] == 4


def test_store_loads_defaults():
    store = CustomDurationStore()
    assert store.load() == DEFAULT_CUSTOM_DURATIONS


def test_store_update_preserves_other_phases():
    store = CustomDurationStore()
    store.save({"inhale": 5, "hold_inhale": 2, "exhale": 6, "hold_exhale": 1})
    updated = store.update("hold_inhale", 0)
    assert updated == {"inhale": 5, "hold_inhale": 0, "exhale": 6, "hold_exhale": 1}

    app_settings.clear_cache()
    assert CustomDurationStore().load() == updated


def test_store_clamps_negative_values():
    store = CustomDurationStore()
    assert store.update("inhale", -3)["inhale"] == 0
    assert store.load()["inhale"] == 0


def test_store_rejects_unknown_phase():
    with pytest.raises(ValueError):
        CustomDurationStore().update("sigh", 3)
