# qt_compat.py
# QLocationPermission needs Qt 6.5+, so there is no PySide2 fallback here.
from PySide6 import QtCore, QtGui, QtWidgets


# QtWidget Classes
# ==========================================
QApplication        = QtWidgets.QApplication
QLabel              = QtWidgets.QLabel
QMainWindow         = QtWidgets.QMainWindow
QMessageBox         = QtWidgets.QMessageBox
QPushButton         = QtWidgets.QPushButton
QSizePolicy         = QtWidgets.QSizePolicy
QStatusBar          = QtWidgets.QStatusBar
QVBoxLayout         = QtWidgets.QVBoxLayout
QWidget             = QtWidgets.QWidget

# QtGui Classes
# =========================================
QDesktopServices= QtGui.QDesktopServices

# QtCore Classes
# =========================================
Qt              = QtCore.Qt
QUrl            = QtCore.QUrl
