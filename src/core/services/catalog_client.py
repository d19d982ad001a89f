"""
Read-only Open Library client.

Provides the lookups the discovery views need:
- free-text and title search
- subject shelves
- work JSON and detail enrichment (year, genre, editions, e-book availability)

Lookups never raise for network or HTTP failures: they log and return an
empty result, so a bookmark action is never blocked by the catalog.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://openlibrary.org"
DEFAULT_COVERS_URL = "https://covers.openlibrary.org"
DEFAULT_TIMEOUT = 15.0
DEFAULT_USER_AGENT = "BookFinder/0.1 (desktop bookmark manager)"

EBOOK_AVAILABLE = "Available ✓"
EBOOK_UNAVAILABLE = "N/A"

TOP_SELLER_TITLES = [
    "Harry Potter and the Philosopher's Stone",
    "The Hobbit",
    "Brave New World",
    "To Kill a Mockingbird",
    "Pride and Prejudice",
    "The Great Gatsby",
    "The Lord of the Rings",
    "The Da Vinci Code",
    "The Maze Runner",
    "The Chronicles of Narnia",
]

# (id, label, subject query)
SUBJECT_SHELVES = [
    ("fiction", "Fiction", "fiction"),
    ("fantasy", "Fantasy", "fantasy"),
    ("scienceFiction", "Science Fiction", "science fiction"),
    ("biographies", "Biographies", "biography"),
    ("romance", "Romance", "romance"),
    ("childrens", "Children's", "children"),
    ("history", "History", "history"),
    ("religion", "Religion", "religion"),
]


@dataclass
class BookDetails:
    """Display enrichment for a bookmark; every field has a readable default."""

    year: str = "Unknown"
    genre: str = "Not specified"
    editions: str = "Unknown"
    ebook: str = EBOOK_UNAVAILABLE


def normalize_work_key(key: str) -> str:
    """Coerce a key to the '/works/...' form used by the work endpoints."""
    if key.startswith("/works/"):
        return key
    return "/works/" + key.lstrip("/")


class CatalogClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        covers_base_url: str = DEFAULT_COVERS_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.covers_base_url = covers_base_url.rstrip("/")
        self._client = client or httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": DEFAULT_USER_AGENT},
        )

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _get_json(self, path: str, params: Optional[dict] = None):
        try:
            response = self._client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Catalog request %s failed: %s", path, e)
            return None

    def search(self, query: str, limit: int = 30) -> list:
        """Free-text search. Only results with a cover are returned."""
        if not query or not query.strip():
            return []
        data = self._get_json("/search.json", {"q": query.strip(), "limit": limit})
        if not data:
            return []
        return [doc for doc in data.get("docs", []) if doc.get("cover_i")]

    def search_by_title(self, title: str):
        """Best match for `title`, or None."""
        data = self._get_json("/search.json", {"title": title, "limit": 1})
        if not data or not data.get("docs"):
            return None
        doc = dict(data["docs"][0])
        key = doc.get("key")
        if key and not key.startswith("/"):
            doc["key"] = "/" + key
        return doc

    def popular_books(self, titles=None) -> list:
        """Resolve a curated list of titles, skipping those the catalog can't find."""
        found = []
        for title in titles or TOP_SELLER_TITLES:
            doc = self.search_by_title(title)
            if doc is not None:
                found.append(doc)
        return found

    def books_by_subject(self, subject: str, limit: int = 10) -> list:
        """Works on a subject shelf that have a cover, in search-result shape."""
        data = self._get_json(f"/subjects/{quote(subject)}.json", {"limit": limit})
        if not data:
            return []
        books = []
        for work in data.get("works", []):
            if not work.get("cover_id"):
                continue
            books.append({
                "title": work.get("title"),
                "author_name": [a.get("name") for a in work.get("authors") or []],
                "cover_i": work["cover_id"],
                "key": work.get("key"),
            })
        return books[:limit]

    def get_work(self, key: str):
        if not key:
            return None
        return self._get_json(f"{normalize_work_key(key)}.json")

    def ebook_availability(self, work_key: str) -> str:
        if not work_key:
            return EBOOK_UNAVAILABLE

        work = self.get_work(work_key)
        if work:
            if work.get("ebooks"):
                return EBOOK_AVAILABLE
            if (work.get("availability") or {}).get("ebook"):
                return EBOOK_AVAILABLE

        editions = self._get_json(f"{normalize_work_key(work_key)}/editions.json", {"limit": 50})
        for edition in (editions or {}).get("entries", []):
            formats = edition.get("ebooks") or edition.get("formats") or []
            if formats or edition.get("ebook_access") == "public":
                return EBOOK_AVAILABLE
        return EBOOK_UNAVAILABLE

    def book_details(self, key: Optional[str] = None, title: Optional[str] = None) -> BookDetails:
        """
        Enrich a bookmark for display. Uses the work record when `key` is a
        work key, otherwise the best title match.
        """
        details = BookDetails()

        if key and key.startswith("/works/"):
            work = self.get_work(key)
            if not work:
                return details
            year = work.get("first_publish_date") or work.get("first_publish_year")
            if year:
                details.year = str(year)
            if work.get("subjects"):
                details.genre = ", ".join(work["subjects"][:3])
            # Work records carry no edition count; covers/revision approximate it
            if work.get("covers"):
                details.editions = str(len(work["covers"]))
            elif work.get("revision"):
                details.editions = str(work["revision"])
            details.ebook = self.ebook_availability(key)

        elif title:
            doc = self.search_by_title(title)
            if not doc:
                return details
            if doc.get("first_publish_year"):
                details.year = str(doc["first_publish_year"])
            if doc.get("subject"):
                details.genre = ", ".join(doc["subject"][:3])
            if doc.get("edition_count"):
                details.editions = str(doc["edition_count"])
            doc_key = doc.get("key")
            if doc_key:
                work_key = doc_key if doc_key.startswith("/works/") else "/works/" + doc_key.replace("/books/", "").lstrip("/")
                details.ebook = self.ebook_availability(work_key)

        return details

    def cover_url(self, cover_id, size: str = "L"):
        if not cover_id:
            return None
        return f"{self.covers_base_url}/b/id/{cover_id}-{size}.jpg"
