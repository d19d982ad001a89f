from PyQt6.QtWidgets import QTableView, QHeaderView, QAbstractItemView, QMenu
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QAction


class BookmarkTableView(QTableView):
    """
    Table of bookmarks.
    Features:
    - Sortable columns
    - Context menu (details, remove)
    - Header menu for column visibility
    """

    # Signals
    details_requested = pyqtSignal(object) # Emits index
    remove_requested = pyqtSignal(object) # Emits index

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setup_ui()

    def setup_ui(self):
        self.setAlternatingRowColors(True)
        self.setShowGrid(False)
        self.setSortingEnabled(True)

        self.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)

        header = self.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.Interactive)
        header.setStretchLastSection(True)
        self.verticalHeader().setVisible(False)

        self.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.customContextMenuRequested.connect(self.show_context_menu)

        header.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        header.customContextMenuRequested.connect(self.show_header_menu)

    def setModel(self, model):
        super().setModel(model)
        # Collection order (most recent activity first) until a header is clicked
        self.horizontalHeader().setSortIndicator(-1, Qt.SortOrder.AscendingOrder)

        # 0: Title, 1: Authors, 2: Review, 3: Bookmarked, 4: Updated
        self.setColumnWidth(0, 280)
        self.setColumnWidth(1, 180)
        self.setColumnWidth(2, 220)
        self.setColumnWidth(3, 130)

    def show_header_menu(self, position):
        """
        Show context menu for toggling column visibility.
        """
        model = self.model()
        if not model:
            return

        menu = QMenu(self)
        for col in range(model.columnCount()):
            header_text = model.headerData(col, Qt.Orientation.Horizontal, Qt.ItemDataRole.DisplayRole)
            action = QAction(str(header_text or f"Column {col}"), self)
            action.setCheckable(True)
            action.setChecked(not self.isColumnHidden(col))
            action.setData(col)
            action.triggered.connect(self.toggle_column)
            menu.addAction(action)

        menu.exec(self.horizontalHeader().mapToGlobal(position))

    def toggle_column(self):
        action = self.sender()
        if action:
            self.setColumnHidden(action.data(), not action.isChecked())

    def show_context_menu(self, position):
        index = self.indexAt(position)
        if not index.isValid():
            return

        menu = QMenu()

        act_details = QAction("Show Details", self)
        act_details.triggered.connect(lambda: self.details_requested.emit(index))
        menu.addAction(act_details)

        menu.addSeparator()

        act_remove = QAction("Remove Bookmark", self)
        act_remove.triggered.connect(lambda: self.remove_requested.emit(index))
        menu.addAction(act_remove)

        menu.exec(self.viewport().mapToGlobal(position))
