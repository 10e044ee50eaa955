"""
Tests for engine settings.
"""

import pytest
from formlogic.config import EngineSettings, SettingsError, load_settings, settings_from_dict


def test_defaults():
    settings = EngineSettings()
    assert settings.language == "th"
    assert settings.list_separator == ", "
    assert settings.layout_types == {"section", "paragraph", "image"}


def test_settings_are_frozen():
    with pytest.raises(AttributeError):
        EngineSettings().language = "en"


def test_load_yaml(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text('language: en\nlist_separator: " / "\nlayout_types: [section]\n', encoding="utf-8")

    settings = load_settings(str(path))

    assert settings.language == "en"
    assert settings.list_separator == " / "
    assert settings.layout_types == frozenset({"section"})


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(str(path)) == EngineSettings()


def test_unknown_key():
    with pytest.raises(SettingsError):
        settings_from_dict({"langauge": "en"})


def test_not_a_mapping(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("- en\n", encoding="utf-8")
    with pytest.raises(SettingsError):
        load_settings(str(path))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("language: [unclosed\n", encoding="utf-8")
    with pytest.raises(SettingsError):
        load_settings(str(path))
