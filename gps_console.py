# gps_console.py
"""Headless runner: prints every location status until Ctrl+C."""
import signal
import sys

from PySide6.QtCore import QCoreApplication, QTimer

import shared
from gps_coordinator import LocationCoordinator
from gps_format import status_line
from gps_qt_platform import QtPositionProvider
from gps_types import AllSourcesDisabled, AuthorizationDenied
from shared import logger


class ConsoleSink:
    def __init__(self, app):
        self.app = app

    def present(self, status):
        print(status_line(status), flush=True)

        # nothing more will come for these
        if isinstance(status, (AllSourcesDisabled, AuthorizationDenied)):
            self.app.exit(1)


def main():
    shared.ensure_settings_exists()
    shared.load_settings()

    app = QCoreApplication(sys.argv)
    app.setApplicationName(shared.APP_NAME)

    provider = QtPositionProvider()
    coordinator = LocationCoordinator(provider, ConsoleSink(app))

    signal.signal(signal.SIGINT, lambda *_: app.quit())
    # Let Python see SIGINT while Qt's loop is running
    tick = QTimer()
    tick.timeout.connect(lambda: None)
    tick.start(250)

    QTimer.singleShot(0, coordinator.start)
    exit_code = app.exec()

    coordinator.stop()
    logger.info("   ✅ Console runner finished")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
