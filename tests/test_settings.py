import json

from src.core.settings import DEFAULT_CONFIG, Settings


def test_defaults_when_file_missing(tmp_path):
    settings = Settings(tmp_path / "config" / "settings.json")

    assert settings.config == DEFAULT_CONFIG
    assert settings.bookmarks_path == "data/bookmark.json"
    assert settings.catalog_base_url == "https://openlibrary.org"
    assert settings.request_timeout == 15.0
    assert settings.search_limit == 30


def test_settings_persistence(tmp_path):
    settings_file = tmp_path / "config" / "settings.json"

    settings = Settings(settings_file)
    settings.save_config({"search_limit": 10, "log_level": "DEBUG"})

    settings_reloaded = Settings(settings_file)
    assert settings_reloaded.search_limit == 10
    assert settings_reloaded.log_level == "DEBUG"
    assert settings_reloaded.bookmarks_path == DEFAULT_CONFIG["bookmarks_path"]


def test_partial_file_keeps_other_defaults(tmp_path):
    settings_file = tmp_path / "settings.json"
    settings_file.write_text(json.dumps({"bookmarks_path": "elsewhere/b.json"}), encoding="utf-8")

    settings = Settings(settings_file)

    assert settings.bookmarks_path == "elsewhere/b.json"
    assert settings.covers_base_url == "https://covers.openlibrary.org"
