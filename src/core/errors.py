"""Exceptions raised by the bookmark store and service."""


class BookmarkError(Exception):
    """Base class for every bookmark failure surfaced to callers."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidInput(BookmarkError):
    """Raised when a record cannot be identified or a field cannot be written."""


class NotFound(BookmarkError):
    """Raised when an update targets an id that is not in the collection."""

    def __init__(self, bookmark_id: str) -> None:
        self.bookmark_id = bookmark_id
        super().__init__(f"Bookmark not found: {bookmark_id}")


class StorageUnavailable(BookmarkError):
    """
    Raised when the bookmark document cannot be read or written.

    First-time absence of the file is not an error; the store creates it.
    """

    def __init__(self, path, reason: str) -> None:
        self.path = path
        super().__init__(f"Bookmark storage unavailable at {path}: {reason}")


class CorruptState(BookmarkError):
    """Raised when the bookmark document exists but cannot be parsed."""

    def __init__(self, path, reason: str) -> None:
        self.path = path
        super().__init__(f"Bookmark file {path} is corrupt: {reason}")
