#===== COLOUR SCHEME =========

# DARK_BLUE   = "#112365"
# LIGHT_BLUE  = "#B5CBF5"
# ORANGE      = "#E0751C"


# Deep Blue theme (adjust to taste)
GLOBAL_QSS = """

QWidget {
    background-color: #112365;
    color: #aaaaaa;
    font-family: "Helvetica Neue", Arial, sans-serif;
    font-size: 13px;
}

QLabel[typo="mono"] {
    font-family: Menlo, "Courier New", monospace;
    font-size: 14px;
    color: #DDE8FF;
}

QLabel[typo="h2"] {
    font-size: 11px;
    color: #B5CBF5;
}

QPushButton[btn="primary"] {
    background: #E0751C;
    color: #fff;
    font-weight: 600;
    border-radius: 6px;
    min-height: 32px;
}
QPushButton[btn="primary"]:hover {
    background: #E88430;
}
QPushButton[btn="primary"]:pressed {
    background: #B85E17;
}

QStatusBar {
    color: #DDE8FF;
}

QMessageBox QPushButton {
    border-radius: 6px;
    font-weight: 600;
    color: #fff;
    min-width: 80px;
    min-height: 28px;
}

QMessageBox QPushButton:default {
    background: #E0751C;
}

/* Cancel / secondary button */
QMessageBox QPushButton:!default {
    background: #999999;
}

"""
