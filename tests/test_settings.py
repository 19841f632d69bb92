import logging

import pytest

pytest.importorskip("PySide6")

from PySide6.QtCore import QSettings

from src.core.settings import FilterSettings


@pytest.fixture
def ini_settings(tmp_path):
    return QSettings(str(tmp_path / "settings.ini"), QSettings.IniFormat)


def test_defaults_when_empty(ini_settings):
    assert FilterSettings.load(ini_settings) == FilterSettings()


def test_round_trip(ini_settings):
    FilterSettings(search_column=2, refresh_on_add=True, placeholder_text="Search",
                   log_level="debug").save(ini_settings)
    loaded = FilterSettings.load(ini_settings)
    assert loaded.search_column == 2
    assert loaded.refresh_on_add is True
    assert loaded.placeholder_text == "Search"
    assert loaded.log_level == "DEBUG"


def test_invalid_values_fall_back(ini_settings, caplog):
    ini_settings.setValue("filter/search_column", "abc")
    ini_settings.setValue("filter/log_level", "LOUD")
    with caplog.at_level(logging.WARNING):
        loaded = FilterSettings.load(ini_settings)
    assert loaded.search_column == 0
    assert loaded.log_level == "INFO"
    assert "search_column" in caplog.text


def test_apply_logging():
    root = logging.getLogger()
    previous = root.level
    try:
        FilterSettings(log_level="WARNING").apply_logging()
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)
