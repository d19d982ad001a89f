from PyQt6.QtCore import QAbstractTableModel, Qt

from src.core.identity import id_for_book
from src.core.models import normalize_authors


class SearchResultsModel(QAbstractTableModel):
    """
    Catalog search results (plain dicts from the catalog client) with
    their bookmark state.
    """

    def __init__(self):
        super().__init__()
        self._results = []
        self._bookmarked = set()
        self._headers = ["Fav", "Title", "Authors", "First Published"]

    def set_results(self, results, bookmarked_ids=()):
        self.beginResetModel()
        self._results = list(results)
        self._bookmarked = set(bookmarked_ids)
        self.endResetModel()

    def set_bookmarked_ids(self, bookmarked_ids):
        self._bookmarked = set(bookmarked_ids)
        if self._results:
            self.dataChanged.emit(self.index(0, 0), self.index(len(self._results) - 1, 0))

    def rowCount(self, parent=None):
        return len(self._results)

    def columnCount(self, parent=None):
        return len(self._headers)

    def data(self, index, role=Qt.ItemDataRole.DisplayRole):
        if not index.isValid():
            return None
        book = self._results[index.row()]

        if role == Qt.ItemDataRole.DisplayRole:
            col = index.column()
            if col == 0:
                return "★" if id_for_book(book) in self._bookmarked else "☆"
            elif col == 1:
                return book.get("title") or "Unknown Title"
            elif col == 2:
                return ", ".join(normalize_authors(book.get("author_name"))) or "Unknown Author"
            elif col == 3:
                year = book.get("first_publish_year")
                return str(year) if year else ""

        elif role == Qt.ItemDataRole.UserRole:
            return book

        return None

    def headerData(self, section, orientation, role):
        if role == Qt.ItemDataRole.DisplayRole and orientation == Qt.Orientation.Horizontal:
            return self._headers[section]
        return None

    def book_at(self, row):
        if 0 <= row < len(self._results):
            return self._results[row]
        return None
