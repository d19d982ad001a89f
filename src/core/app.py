import logging
from pathlib import Path

from .settings import Settings
from .storage import BookmarkStore
from .data_processor import DataProcessor
from .services.bookmark_service import BookmarkService
from .services.catalog_client import CatalogClient

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level="INFO"):
    """Configure root logging once for an entry point."""
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


class CoreApp:
    """
    Headless application core: settings, bookmark service and catalog lookups.
    Both the CLI and the desktop window talk to bookmarks only through this.
    """
    def __init__(self, config_path="config/settings.json", bookmarks_path=None, catalog=None):
        self.settings = Settings(config_path)
        self.store = BookmarkStore(bookmarks_path or self.settings.bookmarks_path)
        self.bookmarks = BookmarkService(self.store)
        self.catalog = catalog or CatalogClient(
            base_url=self.settings.catalog_base_url,
            covers_base_url=self.settings.covers_base_url,
            timeout=self.settings.request_timeout,
        )
        self.data_processor = DataProcessor()
        logger.debug("CoreApp ready (bookmarks at %s)", self.store.path)

    @property
    def bookmarks_path(self) -> Path:
        return self.store.path

    def export_bookmarks(self, output_path):
        return self.data_processor.export(self.bookmarks.get_all(), output_path)

    def search_catalog(self, query):
        return self.catalog.search(query, limit=self.settings.search_limit)

    def book_details(self, entry):
        return self.catalog.book_details(key=entry.catalog_key, title=entry.title)

    def close(self):
        self.catalog.close()
