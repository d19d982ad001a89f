from PyQt6.QtWidgets import QMessageBox, QApplication
from PyQt6.QtCore import QModelIndex, Qt, QRegularExpression
import logging

from src.core.app import CoreApp
from src.core.errors import BookmarkError
from src.core.identity import id_for_book
from src.core.services.file_watcher import BookmarkFileWatcher
from src.apps.book_finder.models.bookmark_table_model import BookmarkTableModel
from src.apps.book_finder.models.bookmark_proxy_model import BookmarkSortFilterProxyModel
from src.apps.book_finder.models.search_results_model import SearchResultsModel
from src.apps.book_finder.views.main_window import MainWindow
from src.apps.book_finder.views.review_view import ReviewView
from src.apps.book_finder.views.settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)


class MainController:
    """
    MVC Controller: The Glue.
    Responsibilities:
    1. Handle user actions from Views (search, bookmark, review, remove).
    2. Call the bookmark service / catalog through CoreApp.
    3. Update Views with new data.
    """
    def __init__(self, app_core=None, watch_file=True):
        self.app_core = app_core or CoreApp()
        self.bookmarks = self.app_core.bookmarks

        # Initialize Views
        self.main_window = MainWindow()
        self.review_view = ReviewView()
        self.main_window.add_review_view(self.review_view)

        # Bookmark table: model -> proxy -> view
        self.table_model = BookmarkTableModel()
        self.proxy_model = BookmarkSortFilterProxyModel()
        self.proxy_model.setSourceModel(self.table_model)
        self.main_window.table_view.setModel(self.proxy_model)

        self.results_model = SearchResultsModel()
        self.main_window.results_view.setModel(self.results_model)

        # Connect Signals
        self.main_window.act_refresh.triggered.connect(self.refresh_bookmarks)
        self.main_window.act_settings.triggered.connect(self.open_settings)
        self.main_window.act_toggle_bookmark.triggered.connect(self.toggle_selected_result)
        self.main_window.act_popular.triggered.connect(self.load_popular)
        self.main_window.filter_input.textChanged.connect(self.on_filter)
        self.main_window.catalog_input.returnPressed.connect(self.search_catalog)
        self.main_window.combo_shelves.activated.connect(self.on_shelf_selected)
        self.main_window.table_view.selectionModel().selectionChanged.connect(self.on_selection_changed)
        self.main_window.table_view.details_requested.connect(self.on_details_requested)
        self.main_window.table_view.remove_requested.connect(self.on_remove_requested)
        self.main_window.results_view.doubleClicked.connect(self.on_result_double_click)

        self.review_view.save_requested.connect(self.save_review)
        self.review_view.delete_review_requested.connect(self.delete_review)
        self.review_view.remove_requested.connect(self.remove_bookmark)
        self.review_view.details_requested.connect(self.load_details)

        # Reload when the file changes outside this window
        self.file_watcher = None
        if watch_file:
            self.file_watcher = BookmarkFileWatcher(str(self.app_core.bookmarks_path))
            self.file_watcher.handler.bookmarks_changed.connect(self.on_bookmarks_file_changed)

        self.refresh_bookmarks()

        if self.file_watcher:
            self.file_watcher.start_watching()

    def show(self):
        self.main_window.show()

    def close(self):
        if self.file_watcher:
            self.file_watcher.stop_watching()
        self.main_window.close()

    def _report(self, action, error):
        logger.error("%s failed: %s", action, error)
        QMessageBox.critical(self.main_window, "Error", f"{action} failed: {error}")

    # Bookmarks tab

    def refresh_bookmarks(self):
        """Reload the collection and keep the current selection if it still exists."""
        selected_id = self.review_view.current_id
        try:
            entries = self.bookmarks.get_all()
        except BookmarkError as e:
            self.table_model.set_data(None)
            self.review_view.clear()
            self._report("Loading bookmarks", e)
            return

        self.table_model.set_data(self.app_core.data_processor.to_frame(entries))
        self.results_model.set_bookmarked_ids(e.id for e in entries)
        self.main_window.setWindowTitle(f"Book Finder - {len(entries)} bookmarks")

        if selected_id:
            self.select_bookmark(selected_id)

    def select_bookmark(self, bookmark_id):
        row = self.table_model.row_of(bookmark_id)
        if row < 0:
            self.review_view.clear()
            return
        proxy_idx = self.proxy_model.mapFromSource(self.table_model.index(row, 0))
        if proxy_idx.isValid():
            self.main_window.table_view.selectRow(proxy_idx.row())
            self.main_window.table_view.scrollTo(proxy_idx)

    def on_bookmarks_file_changed(self, path):
        logger.debug("Bookmark file changed: %s", path)
        self.refresh_bookmarks()

    def on_filter(self, text):
        if not text:
            self.proxy_model.setFilterRegularExpression("")
        else:
            regex = QRegularExpression(QRegularExpression.escape(text))
            regex.setPatternOptions(QRegularExpression.PatternOption.CaseInsensitiveOption)
            self.proxy_model.setFilterRegularExpression(regex)

    def _bookmark_id_at(self, proxy_index: QModelIndex):
        source_index = self.proxy_model.mapToSource(proxy_index)
        return self.table_model.get_bookmark_id_at(source_index.row())

    def on_selection_changed(self, selected, deselected):
        indexes = selected.indexes()
        if not indexes:
            self.review_view.clear()
            return
        bookmark_id = self._bookmark_id_at(indexes[0])
        try:
            # Fetch fresh entry from the service rather than the table
            self.review_view.set_entry(self.bookmarks.get(bookmark_id))
        except BookmarkError as e:
            self._report("Loading bookmark", e)

    def on_details_requested(self, index):
        bookmark_id = self._bookmark_id_at(index)
        self.main_window.show_info_panel()
        self.load_details(bookmark_id)

    def on_remove_requested(self, index):
        self.remove_bookmark(self._bookmark_id_at(index))

    def save_review(self, bookmark_id, review):
        try:
            self.bookmarks.update(bookmark_id, {"review": review})
        except BookmarkError as e:
            self._report("Saving review", e)
            return
        self.refresh_bookmarks()

    def delete_review(self, bookmark_id):
        self.save_review(bookmark_id, "")

    def remove_bookmark(self, bookmark_id):
        if not bookmark_id:
            return
        try:
            self.bookmarks.remove(bookmark_id)
        except BookmarkError as e:
            self._report("Removing bookmark", e)
            return
        self.review_view.clear()
        self.refresh_bookmarks()

    def load_details(self, bookmark_id):
        try:
            entry = self.bookmarks.get(bookmark_id)
        except BookmarkError as e:
            self._report("Loading bookmark", e)
            return
        if entry is None:
            return

        QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
        try:
            details = self.app_core.book_details(entry)
        finally:
            QApplication.restoreOverrideCursor()
        if self.review_view.current_id == bookmark_id:
            self.review_view.set_details(details)

    # Discover tab

    def _show_results(self, results):
        try:
            bookmarked = [e.id for e in self.bookmarks.get_all()]
        except BookmarkError as e:
            self._report("Loading bookmarks", e)
            bookmarked = []
        self.results_model.set_results(results, bookmarked)
        self.main_window.tabs.setCurrentIndex(MainWindow.DISCOVER_TAB)
        if not results:
            self.main_window.statusBar().showMessage("No results found.", 5000)

    def search_catalog(self):
        query = self.main_window.catalog_input.text().strip()
        if not query:
            return
        QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
        try:
            results = self.app_core.search_catalog(query)
        finally:
            QApplication.restoreOverrideCursor()
        self._show_results(results)

    def load_popular(self):
        QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
        try:
            results = self.app_core.catalog.popular_books()
        finally:
            QApplication.restoreOverrideCursor()
        self._show_results(results)

    def on_shelf_selected(self, index):
        subject = self.main_window.combo_shelves.itemData(index)
        if not subject:
            return
        QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
        try:
            results = self.app_core.catalog.books_by_subject(subject)
        finally:
            QApplication.restoreOverrideCursor()
        self._show_results(results)

    def on_result_double_click(self, index: QModelIndex):
        self.toggle_result(index.row())

    def toggle_selected_result(self):
        rows = self.main_window.results_view.selectionModel().selectedRows()
        if rows:
            self.toggle_result(rows[0].row())

    def toggle_result(self, row):
        book = self.results_model.book_at(row)
        if book is None:
            return
        try:
            status = self.bookmarks.toggle(book)
        except BookmarkError as e:
            self._report("Bookmarking", e)
            return
        title = book.get("title") or id_for_book(book)
        self.main_window.statusBar().showMessage(
            f"Bookmarked {title}" if status else f"Removed {title}", 5000)
        self.refresh_bookmarks()

    def open_settings(self):
        settings = self.app_core.settings
        dialog = SettingsDialog(settings.config, self.main_window)
        if dialog.exec():
            settings.save_config(dialog.get_settings())
            QMessageBox.information(self.main_window, "Success", "Settings saved. Some changes apply after restart.")
