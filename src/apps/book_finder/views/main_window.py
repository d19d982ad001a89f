from PyQt6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QSplitter, QToolBar, QLineEdit,
                             QSizePolicy, QComboBox, QTabWidget, QTableView, QAbstractItemView,
                             QHeaderView)
from PyQt6.QtGui import QAction
from PyQt6.QtCore import Qt
from src.apps.book_finder.views.components.bookmark_table_view import BookmarkTableView
from src.core.services.catalog_client import SUBJECT_SHELVES


class MainWindow(QMainWindow):
    """
    MVC View: The main application window.
    Tabs for bookmarks and catalog discovery, with the review panel on the right.
    """
    BOOKMARKS_TAB = 0
    DISCOVER_TAB = 1

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Book Finder")
        self.resize(1100, 760)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QVBoxLayout(central_widget)

        # Toolbar
        self.toolbar = QToolBar("Main Toolbar")
        self.addToolBar(self.toolbar)

        self.act_refresh = QAction("Refresh", self)
        self.act_refresh.setToolTip("Reload bookmarks from disk")
        self.toolbar.addAction(self.act_refresh)

        self.act_toggle_info = QAction("Info Panel", self)
        self.act_toggle_info.setCheckable(True)
        self.act_toggle_info.setChecked(False)
        self.act_toggle_info.triggered.connect(self.toggle_info_panel)
        self.toolbar.addAction(self.act_toggle_info)

        self.act_settings = QAction("Settings", self)
        self.act_settings.setToolTip("Configure application settings")
        self.toolbar.addAction(self.act_settings)

        self.toolbar.addSeparator()

        self.act_popular = QAction("Popular", self)
        self.act_popular.setToolTip("Show the curated top-seller list")
        self.toolbar.addAction(self.act_popular)

        # Subject shelves
        self.combo_shelves = QComboBox()
        self.combo_shelves.setPlaceholderText("Browse a shelf...")
        self.combo_shelves.setFixedWidth(180)
        for shelf_id, label, query in SUBJECT_SHELVES:
            self.combo_shelves.addItem(label, query)
        self.combo_shelves.setCurrentIndex(-1)
        self.toolbar.addWidget(self.combo_shelves)

        self.catalog_input = QLineEdit()
        self.catalog_input.setPlaceholderText("Search books...")
        self.catalog_input.setToolTip("Search the catalog (press Enter)")
        self.catalog_input.setFixedWidth(220)
        self.toolbar.addWidget(self.catalog_input)

        self.act_toggle_bookmark = QAction("Bookmark", self)
        self.act_toggle_bookmark.setToolTip("Add or remove the selected search result")
        self.toolbar.addAction(self.act_toggle_bookmark)

        empty = QWidget()
        empty.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)
        self.toolbar.addWidget(empty)

        self.filter_input = QLineEdit()
        self.filter_input.setPlaceholderText("Filter bookmarks...")
        self.filter_input.setToolTip("Filter bookmarks by title, author or review")
        self.filter_input.setFixedWidth(200)
        self.toolbar.addWidget(self.filter_input)

        # Splitter for Tabs | Review panel
        splitter = QSplitter(Qt.Orientation.Horizontal)

        self.tabs = QTabWidget()
        self.table_view = BookmarkTableView()
        self.tabs.addTab(self.table_view, "Bookmarks")

        self.results_view = QTableView()
        self.results_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.results_view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.results_view.setAlternatingRowColors(True)
        self.results_view.verticalHeader().setVisible(False)
        self.results_view.horizontalHeader().setStretchLastSection(True)
        self.results_view.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Interactive)
        self.tabs.addTab(self.results_view, "Discover")
        splitter.addWidget(self.tabs)

        self.review_container = QWidget()
        self.review_layout = QVBoxLayout(self.review_container)
        self.review_layout.setContentsMargins(0, 0, 0, 0)
        splitter.addWidget(self.review_container)

        # Hidden until toggled or a bookmark is opened
        self.review_container.hide()

        splitter.setStretchFactor(0, 2)
        splitter.setStretchFactor(1, 1)

        main_layout.addWidget(splitter)

    def add_review_view(self, view_widget):
        self.review_layout.addWidget(view_widget)

    def toggle_info_panel(self, checked):
        self.review_container.setVisible(checked)

    def show_info_panel(self):
        self.act_toggle_info.setChecked(True)
        self.review_container.show()
