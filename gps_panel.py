# gps_panel.py
import shared

from qt_compat import Qt
from qt_compat import QWidget
from qt_compat import QVBoxLayout
from qt_compat import QLabel
from qt_compat import QPushButton
from qt_compat import QMessageBox
from qt_compat import QSizePolicy

import gps_format as fmt
from gps_coordinator import LocationCoordinator
from gps_types import AllSourcesDisabled, Fix
from shared import logger, FOOTER

TOAST_SHORT_MS = 2000
TOAST_LONG_MS  = 3500


class LocationPanel(QWidget):
    """Button + label. Renders whatever the coordinator presents."""

    def __init__(self, provider, toast=None, parent=None):
        super().__init__(parent)
        self.provider = provider
        self.toast    = toast   # callable(msg, timeout_ms) or None
        self.coordinator = LocationCoordinator(provider, self)

        self.txt_location = QLabel("Press the button to get your location")
        self.txt_location.setProperty("typo", "mono")
        self.txt_location.setAlignment(Qt.AlignCenter)
        self.txt_location.setWordWrap(True)
        self.txt_location.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.txt_location.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

        self.btn_get_location = QPushButton("Get Location")
        self.btn_get_location.setProperty("btn", "primary")
        self.btn_get_location.clicked.connect(self.on_get_location)

        footer = QLabel(FOOTER)
        footer.setFixedHeight(30)
        footer.setAlignment(Qt.AlignCenter)
        footer.setProperty("typo", "h2")

        layout = QVBoxLayout()
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(10)
        layout.addWidget(self.txt_location)
        layout.addWidget(self.btn_get_location)
        layout.addWidget(footer)
        self.setLayout(layout)

    def on_get_location(self):
        self.txt_location.setText(fmt.INITIALIZING_TEXT)
        self.coordinator.start()

    def release(self):
        self.coordinator.stop()

    # Presentation sink
    def present(self, status):
        self.txt_location.setText(fmt.label_text(status))

        if isinstance(status, Fix):
            self._toast(fmt.toast_text(status), TOAST_SHORT_MS)
        elif isinstance(status, AllSourcesDisabled):
            self.show_disabled_alert()
        else:
            self._toast(fmt.toast_text(status), TOAST_LONG_MS)

    def show_disabled_alert(self):
        box = QMessageBox(self)
        box.setWindowTitle(fmt.DISABLED_TITLE)
        box.setText(fmt.DISABLED_TEXT)
        settings_btn = box.addButton("Settings", QMessageBox.AcceptRole)
        box.addButton("Cancel", QMessageBox.RejectRole)
        box.setDefaultButton(settings_btn)
        box.exec()

        if box.clickedButton() is settings_btn:
            try:
                self.provider.open_location_settings()
            except Exception as e:
                logger.error(f"  ❌ Could not open location settings: {e}")

    def _toast(self, msg, timeout_ms):
        if not msg or not shared.show_toasts or self.toast is None:
            return
        self.toast(msg, timeout_ms)
