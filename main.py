# main.py

import sys
import logging
import shared

from qt_compat import QMainWindow
from qt_compat import QApplication
from qt_compat import QStatusBar

from qss import GLOBAL_QSS
from gps_panel import LocationPanel
from gps_qt_platform import QtPositionProvider
from status_bar_handler import StatusBarHandler
from shared import logger


# --------------------------------------
# Main Window Class
# --------------------------------------
class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("GPS Locator")

        self.resize(shared.window_width or 420, shared.window_height or 300)
        self.move(shared.window_pos_x or 200, shared.window_pos_y or 100)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

        self.provider = QtPositionProvider(self)
        self.panel = LocationPanel(self.provider, toast=self.status_bar.showMessage)
        self.setCentralWidget(self.panel)

        # Warnings and errors from the location core show up in the status bar
        self.log_handler = StatusBarHandler(self.show_log_message, level=logging.WARNING)
        logger.addHandler(self.log_handler)

    def show_log_message(self, msg, level):
        self.status_bar.showMessage(msg, 5000 if level >= logging.ERROR else 3000)

    def closeEvent(self, event):
        self.panel.release()
        logger.removeHandler(self.log_handler)

        # Save size/position
        pos = self.pos()
        size = self.size()
        shared.window_pos_x = pos.x()
        shared.window_pos_y = pos.y()
        shared.window_width = size.width()
        shared.window_height = size.height()
        shared.save_settings()

        super().closeEvent(event)


# --------------------------------------
# Application Entry Point
# --------------------------------------
def main():
    shared.ensure_settings_exists()
    shared.load_settings()

    app = QApplication(sys.argv)
    app.setApplicationName(shared.APP_NAME)
    app.setStyleSheet(GLOBAL_QSS)

    win = MainWindow()
    win.show()

    exit_code = app.exec()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
