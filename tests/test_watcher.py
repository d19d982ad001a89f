import time

from src.core.models import BookmarkEntry
from src.core.storage import BookmarkStore
from src.core.services.file_watcher import BookmarkFileWatcher


def wait_for(qapp, condition, timeout=2.0):
    start_time = time.time()
    while not condition() and time.time() - start_time < timeout:
        qapp.processEvents()
        time.sleep(0.1)


def test_save_triggers_signal(qapp, tmp_path):
    """
    Test that saving the bookmark file triggers the signal.
    """
    bookmarks_file = tmp_path / "bookmark.json"
    store = BookmarkStore(bookmarks_file)
    store.load()

    service = BookmarkFileWatcher(str(bookmarks_file))
    signals_received = []
    service.handler.bookmarks_changed.connect(lambda p: signals_received.append(p))
    service.start_watching()

    store.save([BookmarkEntry(id="/works/OL1W", title="Dune", added_at="t")])

    wait_for(qapp, lambda: signals_received)
    service.stop_watching()

    assert len(signals_received) > 0


def test_ignore_other_files(qapp, tmp_path):
    """
    Test that writing a different file in the same folder DOES NOT trigger the signal.
    """
    bookmarks_file = tmp_path / "bookmark.json"
    service = BookmarkFileWatcher(str(bookmarks_file))
    signals_received = []
    service.handler.bookmarks_changed.connect(lambda p: signals_received.append(p))
    service.start_watching()

    (tmp_path / "notes.txt").write_text("dummy content")

    wait_for(qapp, lambda: False, timeout=1.0)
    service.stop_watching()

    assert len(signals_received) == 0
