import os
import sys

import pytest

# Add project root
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Qt tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    from PyQt6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app


@pytest.fixture
def dune():
    return {
        "key": "/works/OL1W",
        "title": "Dune",
        "author_name": ["Frank Herbert"],
        "cover_i": 12345,
    }


@pytest.fixture
def keyless_book():
    return {"title": "No Key Book", "author_name": ["X"], "cover_i": 1}
