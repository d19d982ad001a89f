from PyQt6.QtCore import QAbstractTableModel, Qt


class BookmarkTableModel(QAbstractTableModel):
    """
    MVC Model: Wraps the bookmark DataFrame for the View.
    Rows keep collection order (most recent activity first).
    """

    def __init__(self, data=None):
        super().__init__()
        self._data = data
        self._headers = ["Title", "Authors", "Review", "Bookmarked", "Updated"]
        self._columns = ["title", "authors", "review", "added_at", "updated_at"]

    def set_data(self, df):
        self.beginResetModel()
        self._data = df
        self.endResetModel()

    def rowCount(self, parent=None):
        return len(self._data) if self._data is not None else 0

    def columnCount(self, parent=None):
        return len(self._headers)

    def data(self, index, role=Qt.ItemDataRole.DisplayRole):
        if not index.isValid() or self._data is None:
            return None

        row = index.row()
        col = index.column()

        if role == Qt.ItemDataRole.DisplayRole:
            value = self._data.iloc[row][self._columns[col]]
            if col == 0:
                return str(value) if value else "Unknown Title"
            if col == 1:
                return str(value) if value else "Unknown Author"
            if col == 2:
                # First line only; the review panel shows the rest
                return str(value).splitlines()[0] if value else ""
            if col in (3, 4):
                # ISO timestamp -> "YYYY-MM-DD HH:MM"
                return str(value)[:16].replace("T", " ") if value else ""

        elif role == Qt.ItemDataRole.ToolTipRole and col == 2:
            return str(self._data.iloc[row]['review']) or None

        elif role == Qt.ItemDataRole.UserRole:
            return str(self._data.iloc[row]['id'])

        return None

    def headerData(self, section, orientation, role):
        if role == Qt.ItemDataRole.DisplayRole:
            if orientation == Qt.Orientation.Horizontal:
                return self._headers[section]
            else:
                return str(section + 1)
        return None

    def get_bookmark_id_at(self, row):
        if self._data is not None and 0 <= row < len(self._data):
            return str(self._data.iloc[row]['id'])
        return None

    def row_of(self, bookmark_id):
        if self._data is None:
            return -1
        matches = self._data.index[self._data['id'] == bookmark_id].tolist()
        return matches[0] if matches else -1
