import sys
import os

# Ensure src is in path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from PyQt6.QtWidgets import QApplication
from src.core.app import CoreApp, configure_logging
from src.apps.book_finder.controllers.main_controller import MainController

def main():
    app = QApplication(sys.argv)
    core = CoreApp()
    configure_logging(core.settings.log_level)

    controller = MainController(core)
    controller.show()
    exit_code = app.exec()

    controller.close()
    core.close()
    sys.exit(exit_code)

if __name__ == "__main__":
    main()
