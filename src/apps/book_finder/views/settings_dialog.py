from PyQt6.QtWidgets import (QDialog, QVBoxLayout, QFormLayout, QLineEdit,
                             QDialogButtonBox, QSpinBox, QDoubleSpinBox, QComboBox)

from src.core.settings import DEFAULT_CONFIG

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class SettingsDialog(QDialog):
    """
    Dialog to manage application settings.
    """
    def __init__(self, current_settings, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.resize(420, 260)
        self.current_settings = current_settings

        self.setup_ui()
        self.load_settings()

    def setup_ui(self):
        layout = QVBoxLayout(self)

        form_layout = QFormLayout()

        # Changing the bookmark file takes effect on restart
        self.edit_bookmarks_path = QLineEdit()
        self.edit_bookmarks_path.setReadOnly(True)
        self.edit_bookmarks_path.setToolTip("Path to the bookmark JSON file.")
        form_layout.addRow("Bookmarks File:", self.edit_bookmarks_path)

        self.edit_catalog_url = QLineEdit()
        form_layout.addRow("Catalog URL:", self.edit_catalog_url)

        self.spin_timeout = QDoubleSpinBox()
        self.spin_timeout.setRange(1.0, 120.0)
        self.spin_timeout.setSuffix(" s")
        form_layout.addRow("Request Timeout:", self.spin_timeout)

        self.spin_search_limit = QSpinBox()
        self.spin_search_limit.setRange(1, 100)
        form_layout.addRow("Search Results:", self.spin_search_limit)

        self.combo_log_level = QComboBox()
        self.combo_log_level.addItems(LOG_LEVELS)
        form_layout.addRow("Log Level:", self.combo_log_level)

        layout.addLayout(form_layout)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def load_settings(self):
        get = lambda key: self.current_settings.get(key, DEFAULT_CONFIG[key])
        self.edit_bookmarks_path.setText(str(get("bookmarks_path")))
        self.edit_catalog_url.setText(get("catalog_base_url"))
        self.spin_timeout.setValue(float(get("request_timeout")))
        self.spin_search_limit.setValue(int(get("search_limit")))
        level = str(get("log_level")).upper()
        self.combo_log_level.setCurrentText(level if level in LOG_LEVELS else "INFO")

    def get_settings(self):
        """
        Return the updated settings dictionary.
        """
        return {
            # "bookmarks_path" is read-only here
            "catalog_base_url": self.edit_catalog_url.text().strip() or DEFAULT_CONFIG["catalog_base_url"],
            "request_timeout": self.spin_timeout.value(),
            "search_limit": self.spin_search_limit.value(),
            "log_level": self.combo_log_level.currentText(),
        }
