from PyQt6.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QFormLayout,
                             QLabel, QTextEdit, QPushButton)
from PyQt6.QtCore import pyqtSignal


class ReviewView(QWidget):
    """
    MVC View: details and review editor for the selected bookmark.
    Passive View: doesn't save data itself, emits signals.
    """

    save_requested = pyqtSignal(str, str) # bookmark id, review
    delete_review_requested = pyqtSignal(str) # bookmark id
    remove_requested = pyqtSignal(str) # bookmark id
    details_requested = pyqtSignal(str) # bookmark id

    def __init__(self):
        super().__init__()
        self.current_id = None
        self.setMinimumWidth(240)
        self.init_ui()
        self.clear()

    def init_ui(self):
        layout = QVBoxLayout()

        self.lbl_title = QLabel()
        self.lbl_title.setStyleSheet("font-weight: bold; font-size: 14px;")
        self.lbl_title.setWordWrap(True)
        layout.addWidget(self.lbl_title)

        self.lbl_author = QLabel()
        self.lbl_author.setWordWrap(True)
        layout.addWidget(self.lbl_author)

        form = QFormLayout()
        self.lbl_year = QLabel()
        self.lbl_genre = QLabel()
        self.lbl_genre.setWordWrap(True)
        self.lbl_editions = QLabel()
        self.lbl_ebook = QLabel()
        self.lbl_added = QLabel()
        form.addRow("Year Published:", self.lbl_year)
        form.addRow("Genre:", self.lbl_genre)
        form.addRow("Editions:", self.lbl_editions)
        form.addRow("E-book:", self.lbl_ebook)
        form.addRow("Bookmarked:", self.lbl_added)
        layout.addLayout(form)

        self.btn_details = QPushButton("Load Details")
        self.btn_details.setToolTip("Look up year, genre, editions and e-book availability")
        self.btn_details.clicked.connect(lambda: self._emit_for_current(self.details_requested))
        layout.addWidget(self.btn_details)

        layout.addWidget(QLabel("Your Review:"))
        self.txt_review = QTextEdit()
        self.txt_review.setPlaceholderText("Write your thoughts about this book...")
        layout.addWidget(self.txt_review)

        btn_layout = QHBoxLayout()
        self.btn_save = QPushButton("Save Review")
        self.btn_save.clicked.connect(self.on_save)
        btn_layout.addWidget(self.btn_save)

        self.btn_delete_review = QPushButton("Delete Review")
        self.btn_delete_review.clicked.connect(lambda: self._emit_for_current(self.delete_review_requested))
        btn_layout.addWidget(self.btn_delete_review)

        self.btn_remove = QPushButton("Remove")
        self.btn_remove.setToolTip("Remove from bookmarks")
        self.btn_remove.clicked.connect(lambda: self._emit_for_current(self.remove_requested))
        btn_layout.addWidget(self.btn_remove)

        layout.addLayout(btn_layout)
        layout.addStretch()
        self.setLayout(layout)

    def set_entry(self, entry):
        """Show a BookmarkEntry (or clear the panel when None)."""
        if entry is None:
            self.clear()
            return
        self.current_id = entry.id
        self.lbl_title.setText(entry.title or "Unknown Title")
        self.lbl_author.setText(entry.author or "Unknown Author")
        self.lbl_added.setText(entry.added_at[:16].replace("T", " ") or "Unknown")
        self.txt_review.setPlainText(entry.review)
        self.btn_save.setText("Update Review" if entry.review else "Save Review")
        self.set_details(None)
        self._set_enabled(True)

    def set_details(self, details):
        self.lbl_year.setText(details.year if details else "-")
        self.lbl_genre.setText(details.genre if details else "-")
        self.lbl_editions.setText(details.editions if details else "-")
        self.lbl_ebook.setText(details.ebook if details else "-")

    def clear(self):
        self.current_id = None
        self.lbl_title.setText("No bookmark selected")
        self.lbl_author.setText("")
        self.lbl_added.setText("")
        self.txt_review.clear()
        self.set_details(None)
        self._set_enabled(False)

    def on_save(self):
        if self.current_id:
            self.save_requested.emit(self.current_id, self.txt_review.toPlainText())

    def _emit_for_current(self, signal):
        if self.current_id:
            signal.emit(self.current_id)

    def _set_enabled(self, enabled):
        for widget in (self.btn_details, self.txt_review, self.btn_save,
                       self.btn_delete_review, self.btn_remove):
            widget.setEnabled(enabled)
