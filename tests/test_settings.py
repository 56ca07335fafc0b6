import json

from backend import settings


def test_defaults_written_on_first_run():
    assert settings.get_value("write_delay") == 0.0
    assert settings.get_value("view_mode") == "list"
    stored = json.loads(settings.SETTINGS_PATH.read_text())
    assert [item["key"] for item in stored] == [
        item["key"] for item in settings.DEFAULT_SETTINGS
    ]


def test_set_value_persists():
    settings.set_value("view_mode", "grid")
    settings.clear_cache()
    assert settings.get_value("view_mode") == "grid"


def test_unknown_key_is_appended():
    settings.set_value("unit", "lb")
    settings.clear_cache()
    assert settings.get_value("unit") == "lb"
    assert settings.get_value("missing", "fallback") == "fallback"


def test_missing_defaults_are_merged():
    settings.SETTINGS_PATH.write_text(
        json.dumps([{"key": "view_mode", "value": "grid", "type": "str"}])
    )
    assert settings.get_value("view_mode") == "grid"
    assert settings.get_value("search_debounce") == 0.2


def test_corrupt_file_falls_back_to_defaults(caplog):
    settings.SETTINGS_PATH.write_text("{not json")
    assert settings.get_value("log_level") == "INFO"
    assert "Could not read settings" in caplog.text
    assert isinstance(json.loads(settings.SETTINGS_PATH.read_text()), list)
