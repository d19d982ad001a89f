ID_SEPARATOR = "||"


def first_author(record):
    """Return the first author name of a book-like record, or an empty string."""
    authors = record.get("author_name")
    if not authors:
        return ""
    if isinstance(authors, str):
        return authors
    if not isinstance(authors, (list, tuple)):
        return ""
    return authors[0] or ""


def id_for_book(record):
    """
    Build the canonical bookmark id for a book-like record.

    The catalog key wins when present. Books found through free-text search
    often lack one, so the fallback joins title, first author and cover id.
    Two different books sharing all three values will collide.
    Returns None when the record is missing.
    """
    if record is None:
        return None
    key = record.get("key")
    if key:
        return str(key)
    parts = [
        record.get("title") or "",
        first_author(record),
        record.get("cover_i") or "",
    ]
    return ID_SEPARATOR.join(str(part) for part in parts)
