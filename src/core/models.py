import copy
from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional

from .errors import InvalidInput

# Persisted key -> attribute name
PERSISTED_FIELDS = {
    "_id": "id",
    "title": "title",
    "author_name": "author_names",
    "cover_i": "cover_image_id",
    "key": "catalog_key",
    "review": "review",
    "addedAt": "added_at",
    "updatedAt": "updated_at",
    "raw": "raw",
}

# Never written by update()
PROTECTED_FIELDS = {"id", "added_at", "updated_at"}


AUTHOR_TYPES = (str, list, tuple)


def normalize_authors(value):
    """Author names as a list. Unsupported shapes count as no authors."""
    if not value or not isinstance(value, AUTHOR_TYPES):
        return []
    if isinstance(value, str):
        return [value]
    return [str(name) for name in value]


@dataclass
class BookmarkEntry:
    """
    One saved book.

    Known fields are typed; `raw` keeps the payload the caller bookmarked and
    `extra` keeps any other persisted keys. Neither is interpreted here.
    """

    id: str
    title: str = ""
    author_names: list = field(default_factory=list)
    cover_image_id: Optional[Any] = None
    catalog_key: Optional[str] = None
    review: str = ""
    added_at: str = ""
    updated_at: Optional[str] = None
    raw: Any = None
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_book(cls, book, bookmark_id: str, added_at: str) -> "BookmarkEntry":
        """Build a fresh entry from a catalog record."""
        return cls(
            id=bookmark_id,
            title=book.get("title") or "",
            author_names=normalize_authors(book.get("author_name")),
            cover_image_id=book.get("cover_i") or None,
            catalog_key=book.get("key") or None,
            review=book.get("review") or "",
            added_at=added_at,
            raw=copy.deepcopy(dict(book)),
        )

    @classmethod
    def from_dict(cls, data: dict) -> "BookmarkEntry":
        """Rebuild an entry from its persisted object. Raises ValueError if unusable."""
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        bookmark_id = data.get("_id")
        if not isinstance(bookmark_id, str):
            raise ValueError("entry has no string '_id'")
        authors = data.get("author_name")
        if authors is not None and not isinstance(authors, (str, list)):
            raise ValueError(f"'author_name' must be a string or a list, got {type(authors).__name__}")

        known = {}
        extra = {}
        for key, value in data.items():
            attr = PERSISTED_FIELDS.get(key)
            if attr is None:
                extra[key] = value
            else:
                known[attr] = value

        return cls(
            id=bookmark_id,
            title=known.get("title") or "",
            author_names=normalize_authors(known.get("author_names")),
            cover_image_id=known.get("cover_image_id"),
            catalog_key=known.get("catalog_key"),
            review=known.get("review") or "",
            added_at=known.get("added_at") or "",
            updated_at=known.get("updated_at"),
            raw=known.get("raw"),
            extra=extra,
        )

    def to_dict(self) -> dict:
        data = {
            "_id": self.id,
            "title": self.title,
            "author_name": list(self.author_names),
            "cover_i": self.cover_image_id,
            "key": self.catalog_key,
            "review": self.review,
            "addedAt": self.added_at,
        }
        if self.updated_at is not None:
            data["updatedAt"] = self.updated_at
        data["raw"] = self.raw
        data.update(self.extra)
        return data

    def with_updates(self, updates: dict, updated_at: str) -> "BookmarkEntry":
        """
        Return a copy with `updates` shallow-merged in and `updated_at` stamped.

        Keys may use persisted names (`author_name`) or attribute names
        (`author_names`). Unknown keys are kept in `extra`.
        """
        attributes = {f.name for f in fields(self)} - {"extra"}
        changes = {}
        extra = dict(self.extra)

        for key, value in updates.items():
            attr = PERSISTED_FIELDS.get(key, key if key in attributes else None)
            if attr is None:
                extra[key] = value
                continue
            if attr in PROTECTED_FIELDS:
                raise InvalidInput(f"Field '{key}' cannot be updated")
            if attr == "author_names":
                if value is not None and not isinstance(value, AUTHOR_TYPES):
                    raise InvalidInput(f"Field '{key}' must be a string or a list of names")
                value = normalize_authors(value)
            elif attr in ("title", "review"):
                value = value or ""
            changes[attr] = value

        entry = replace(self, **changes)
        entry.extra = extra
        entry.updated_at = updated_at
        return entry

    @property
    def author(self) -> str:
        """Joined author names for display."""
        return ", ".join(self.author_names)
