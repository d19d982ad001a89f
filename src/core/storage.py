import json
import logging
import os
import tempfile
from pathlib import Path

from .errors import CorruptState, InvalidInput, StorageUnavailable
from .models import BookmarkEntry

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT = "[]"


class BookmarkStore:
    """
    Owns the bookmark document on disk: one pretty-printed JSON array.

    A missing file is created empty on first load. An unreadable or
    malformed file is reported, never reset, so the user's data can be
    recovered by hand.
    """

    def __init__(self, path="data/bookmark.json"):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> list:
        """Read the whole collection, bootstrapping an empty document if absent."""
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("Creating empty bookmark file at %s", self._path)
            self._write_text(EMPTY_DOCUMENT)
            return []
        except (OSError, UnicodeDecodeError) as e:
            raise StorageUnavailable(self._path, str(e)) from e

        # An empty file is treated as an empty collection
        if not text.strip():
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error("Bookmark file %s is not valid JSON: %s", self._path, e)
            raise CorruptState(self._path, str(e)) from e

        if not isinstance(data, list):
            raise CorruptState(self._path, f"expected a JSON array, got {type(data).__name__}")

        entries = []
        for position, item in enumerate(data):
            try:
                entries.append(BookmarkEntry.from_dict(item))
            except ValueError as e:
                raise CorruptState(self._path, f"entry {position}: {e}") from e
        return entries

    def save(self, entries) -> None:
        """Serialize and write the whole collection. Nothing is written if serialization fails."""
        payload = [entry.to_dict() for entry in entries]
        try:
            text = json.dumps(payload, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"Bookmark data cannot be saved as JSON: {e}") from e
        self._write_text(text)
        logger.debug("Saved %d bookmarks to %s", len(payload), self._path)

    def _write_text(self, text: str) -> None:
        # Temp file + replace so a crash never leaves a truncated document
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                suffix=".json",
                prefix=".bookmark_",
                dir=str(self._path.parent),
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                Path(temp_path).replace(self._path)
            except BaseException:
                Path(temp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageUnavailable(self._path, str(e)) from e
