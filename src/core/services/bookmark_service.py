import logging
import threading
from collections.abc import Mapping
from contextlib import contextmanager
from datetime import datetime, timezone

from src.core.errors import InvalidInput, NotFound
from src.core.identity import id_for_book
from src.core.models import BookmarkEntry
from src.core.storage import BookmarkStore

logger = logging.getLogger(__name__)

_locks = {}
_locks_guard = threading.Lock()


def _lock_for(store: BookmarkStore) -> threading.Lock:
    """One lock per resolved bookmark file, shared by every service in the process."""
    key = str(store.path.resolve())
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.Lock()
        return lock


def utc_now() -> str:
    """Current time as ISO-8601 UTC with milliseconds, e.g. 2024-01-31T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BookmarkService:
    """
    The only way callers read or change bookmarks.

    Each operation loads the whole collection, transforms it and, when it
    mutates, writes the whole collection back before returning. Operations
    on the same file are serialized by a lock.
    """

    def __init__(self, store: BookmarkStore, clock=utc_now):
        self.store = store
        self._clock = clock
        self._lock = _lock_for(store)

    @contextmanager
    def _collection(self):
        with self._lock:
            yield self.store.load()

    def get_all(self) -> list:
        with self._collection() as entries:
            return entries

    def get(self, bookmark_id):
        """Return the entry with `bookmark_id`, or None."""
        with self._collection() as entries:
            return next((e for e in entries if e.id == bookmark_id), None)

    def is_bookmarked(self, bookmark_id) -> bool:
        if bookmark_id is None:
            return False
        with self._collection() as entries:
            return any(e.id == bookmark_id for e in entries)

    def add(self, book) -> list:
        """
        Bookmark `book`, replacing any entry with the same id.
        The new entry goes to the front of the collection.
        """
        bookmark_id = self._require_id(book)
        with self._collection() as entries:
            entries = self._add_to(entries, book, bookmark_id)
            self.store.save(entries)
        logger.info("Bookmarked %s", bookmark_id)
        return entries

    def remove(self, bookmark_id) -> list:
        with self._collection() as entries:
            remaining = [e for e in entries if e.id != bookmark_id]
            self.store.save(remaining)
        if len(remaining) < len(entries):
            logger.info("Removed bookmark %s", bookmark_id)
        else:
            logger.debug("Remove of unknown bookmark %s ignored", bookmark_id)
        return remaining

    def update(self, bookmark_id, updates) -> list:
        """
        Merge `updates` into an existing entry and move it to the front.
        Raises NotFound if no entry has `bookmark_id`.
        """
        if not isinstance(updates, Mapping):
            raise InvalidInput("Updates must be a mapping of field names to values")
        with self._collection() as entries:
            index = next((i for i, e in enumerate(entries) if e.id == bookmark_id), None)
            if index is None:
                raise NotFound(bookmark_id)
            updated = entries.pop(index).with_updates(dict(updates), self._clock())
            entries.insert(0, updated)
            self.store.save(entries)
        logger.info("Updated bookmark %s (%s)", bookmark_id, ", ".join(updates) or "no fields")
        return entries

    def toggle(self, book) -> bool:
        """
        Remove `book` if bookmarked, otherwise add it.
        Returns the new status (True/False).
        """
        bookmark_id = self._require_id(book)
        with self._collection() as entries:
            if any(e.id == bookmark_id for e in entries):
                entries = [e for e in entries if e.id != bookmark_id]
                status = False
            else:
                entries = self._add_to(entries, book, bookmark_id)
                status = True
            self.store.save(entries)
        logger.info("Toggled bookmark %s -> %s", bookmark_id, status)
        return status

    def _add_to(self, entries, book, bookmark_id):
        entry = BookmarkEntry.from_book(book, bookmark_id, self._clock())
        return [entry] + [e for e in entries if e.id != bookmark_id]

    @staticmethod
    def _require_id(book) -> str:
        if book is not None and not isinstance(book, Mapping):
            raise InvalidInput(f"Invalid book data: expected a mapping, got {type(book).__name__}")
        bookmark_id = id_for_book(book)
        if not bookmark_id:
            raise InvalidInput("Invalid book data")
        return bookmark_id
