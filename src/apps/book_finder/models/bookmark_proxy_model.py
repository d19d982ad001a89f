from PyQt6.QtCore import QSortFilterProxyModel, Qt


class BookmarkSortFilterProxyModel(QSortFilterProxyModel):
    """
    Proxy Model for filtering and sorting bookmarks.
    """
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFilterCaseSensitivity(Qt.CaseSensitivity.CaseInsensitive)
        self.setFilterKeyColumn(-1)

    def filterAcceptsRow(self, source_row, source_parent):
        """
        Match the filter text against Title (0), Authors (1) or the full review.
        """
        regex = self.filterRegularExpression()
        if not regex.pattern():
            return True

        model = self.sourceModel()
        title = model.index(source_row, 0, source_parent).data()
        authors = model.index(source_row, 1, source_parent).data()
        # The review column only displays its first line; match the tooltip (full text)
        review = model.index(source_row, 2, source_parent).data(Qt.ItemDataRole.ToolTipRole)

        for value in (title, authors, review):
            if value and regex.match(str(value)).hasMatch():
                return True
        return False
