import pytest

from src.core.app import CoreApp
from src.apps.book_finder.controllers.main_controller import MainController


@pytest.fixture
def core(tmp_path):
    app = CoreApp(tmp_path / "settings.json", bookmarks_path=tmp_path / "bookmark.json")
    yield app
    app.close()


@pytest.fixture
def controller(qapp, core):
    controller = MainController(core, watch_file=False)
    yield controller
    controller.close()


def test_ui_startup(controller):
    """
    Smoke test: Ensure MainController initializes MainWindow without error.
    """
    assert controller.main_window is not None
    assert controller.main_window.isVisible() is False
    assert controller.table_model.rowCount() == 0


def test_table_follows_collection(controller, core, dune, keyless_book):
    core.bookmarks.add(dune)
    core.bookmarks.add(keyless_book)
    controller.refresh_bookmarks()

    assert controller.table_model.rowCount() == 2
    assert controller.table_model.get_bookmark_id_at(0) == "No Key Book||X||1"
    assert controller.main_window.windowTitle() == "Book Finder - 2 bookmarks"


def test_review_save_and_remove(controller, core, dune):
    core.bookmarks.add(dune)
    controller.refresh_bookmarks()

    controller.main_window.table_view.selectRow(0)
    assert controller.review_view.current_id == "/works/OL1W"

    controller.review_view.txt_review.setPlainText("Great")
    controller.review_view.on_save()
    assert core.bookmarks.get("/works/OL1W").review == "Great"

    controller.remove_bookmark("/works/OL1W")
    assert core.bookmarks.get_all() == []
    assert controller.table_model.rowCount() == 0
    assert controller.review_view.current_id is None


def test_filter_matches_review(controller, core, dune, keyless_book):
    core.bookmarks.add(dune)
    core.bookmarks.add(keyless_book)
    core.bookmarks.update("/works/OL1W", {"review": "Sandworms!"})
    controller.refresh_bookmarks()

    controller.on_filter("sandworm")
    assert controller.proxy_model.rowCount() == 1

    controller.on_filter("")
    assert controller.proxy_model.rowCount() == 2


def test_toggle_search_result(controller, core, dune):
    controller.results_model.set_results([dune])

    controller.toggle_result(0)
    assert core.bookmarks.is_bookmarked("/works/OL1W")
    assert controller.results_model.index(0, 0).data() == "★"

    controller.toggle_result(0)
    assert not core.bookmarks.is_bookmarked("/works/OL1W")
    assert controller.results_model.index(0, 0).data() == "☆"
