import os
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
from PyQt6.QtCore import QObject, pyqtSignal


class BookmarkFileHandler(QObject, FileSystemEventHandler):
    """
    Handles file system events for one bookmark file and emits Qt signals.
    """
    bookmarks_changed = pyqtSignal(str)

    def __init__(self, target_path):
        QObject.__init__(self) # Init Qt Object
        self.target_path = os.path.normcase(os.path.abspath(target_path))

    def _matches(self, path):
        return os.path.normcase(os.path.abspath(path)) == self.target_path

    def on_created(self, event):
        if not event.is_directory and self._matches(event.src_path):
            self.bookmarks_changed.emit(event.src_path)

    def on_modified(self, event):
        if not event.is_directory and self._matches(event.src_path):
            self.bookmarks_changed.emit(event.src_path)

    def on_moved(self, event):
        # Saves land via rename of a temp file onto the bookmark file
        if not event.is_directory and self._matches(event.dest_path):
            self.bookmarks_changed.emit(event.dest_path)


class BookmarkFileWatcher(QObject):
    """
    Watches the bookmark file so views can refresh after edits made elsewhere
    (e.g. the command line).
    """
    def __init__(self, bookmarks_path):
        super().__init__()
        self.bookmarks_path = os.path.abspath(bookmarks_path)
        self.observer = Observer()
        self.handler = BookmarkFileHandler(self.bookmarks_path)
        self.watch = None

    def start_watching(self):
        if self.watch:
            self.observer.unschedule(self.watch)

        folder = os.path.dirname(self.bookmarks_path)
        os.makedirs(folder, exist_ok=True)
        self.watch = self.observer.schedule(self.handler, folder, recursive=False)
        if not self.observer.is_alive():
            self.observer.start()

    def stop_watching(self):
        if self.observer.is_alive():
            self.observer.stop()
            self.observer.join()
