import json
from pathlib import Path

DEFAULT_CONFIG = {
    "bookmarks_path": "data/bookmark.json",
    "catalog_base_url": "https://openlibrary.org",
    "covers_base_url": "https://covers.openlibrary.org",
    "request_timeout": 15.0,
    "search_limit": 30,
    "log_level": "INFO",
}


class Settings:
    def __init__(self, config_path="config/settings.json"):
        self.config_path = Path(config_path)
        self.config = self._load_config()

    def _load_config(self):
        config = dict(DEFAULT_CONFIG)
        if not self.config_path.exists():
            # Defaults when the file is missing
            return config

        with open(self.config_path, 'r', encoding='utf-8') as f:
            config.update(json.load(f))
        return config

    def save_config(self, new_config):
        """
        Update and save configuration to JSON file.
        """
        self.config.update(new_config)

        # Ensure directory exists
        if not self.config_path.parent.exists():
            self.config_path.parent.mkdir(parents=True)

        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(self.config, f, indent=4)

    @property
    def bookmarks_path(self):
        return self.config.get("bookmarks_path", DEFAULT_CONFIG["bookmarks_path"])

    @property
    def catalog_base_url(self):
        return self.config.get("catalog_base_url", DEFAULT_CONFIG["catalog_base_url"])

    @property
    def covers_base_url(self):
        return self.config.get("covers_base_url", DEFAULT_CONFIG["covers_base_url"])

    @property
    def request_timeout(self):
        return float(self.config.get("request_timeout", DEFAULT_CONFIG["request_timeout"]))

    @property
    def search_limit(self):
        return int(self.config.get("search_limit", DEFAULT_CONFIG["search_limit"]))

    @property
    def log_level(self):
        return self.config.get("log_level", DEFAULT_CONFIG["log_level"])
