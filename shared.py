# shared.py

import logging
import platform
import json
import datetime

from os import getenv
from pathlib import Path
from PySide6.QtCore import QStandardPaths

# --------------------
# Versioning
__version__ = "1.2.0"
# --------------------

SETTINGS = {}

session_start = datetime.datetime.now()


FOOTER  = f"GpsLocator ({__version__})"


# -------------------------------
# Application Paths
# -------------------------------

APP_NAME = "GpsLocator"

# AppData for internal use (not user-visible)
DATA_DIR = Path(QStandardPaths.writableLocation(QStandardPaths.AppDataLocation)) / APP_NAME

DATA_DIR.mkdir(parents=True, exist_ok=True)

SETTINGS_FILE = DATA_DIR / "settings.json"

# -------------------------------
# Logging Setup
# -------------------------------
if platform.system() == "Darwin":
    LOG_DIR = Path.home() / "Library" / "Logs" / APP_NAME

elif platform.system() == "Windows":
    LOG_DIR = Path(getenv("APPDATA", str(Path.home() / "AppData" / "Roaming"))) / APP_NAME / "logs"

else:
    LOG_DIR = Path.home() / f".{APP_NAME.lower()}" / "logs"


LOG_DIR.mkdir(parents=True, exist_ok=True)

log_file = LOG_DIR / "gpslocator_log.txt"

logging.basicConfig(level=logging.INFO)
#logging.basicConfig(level=logging.DEBUG)


# Create app logger
logger = logging.getLogger("GpsLocatorLogger")
logger.propagate = False

if not logger.handlers:
    fh = logging.FileHandler(log_file, mode='w', encoding='utf-8')
    fh.setLevel(logging.DEBUG)
    formatter = logging.Formatter('[%(asctime)s] %(levelname)s: %(message)s', datefmt='%H:%M:%S')
    fh.setFormatter(formatter)
    logger.addHandler(fh)

logger.info("   ✅ Logger is ready.")


# --- Acquisition Settings ---
gps_min_interval_ms = 1000
gps_min_distance_m  = 1.0

# Empty plugin name means "let Qt pick the platform default"
precise_plugin      = ""
approximate_plugin  = ""

# --- USB receiver ---
nmea_port = ""
nmea_baud = 4800

# --- Switches ---
show_toasts = True

# Window size and position
window_pos_x = 0
window_pos_y = 0
window_width = 0
window_height = 0


# -------------------------------
# Settings Keys & Persistence
# -------------------------------

SETTINGS_SCHEMA = {
    "gps_min_interval_ms": {"type": "int", "default": 1000},
    "gps_min_distance_m": {"type": "float", "default": 1.0},
    "precise_plugin": {"type": "str", "default": ""},
    "approximate_plugin": {"type": "str", "default": ""},
    "nmea_port": {"type": "str", "default": ""},
    "nmea_baud": {"type": "int", "default": 4800},
    "show_toasts": {"type": "bool", "default": True},
    "window_pos_x": {"type": "int", "default": 200},
    "window_pos_y": {"type": "int", "default": 100},
    "window_width": {"type": "int", "default": 420},
    "window_height": {"type": "int", "default": 300},
}


def to_settings():
    result = {}
    for key, meta in SETTINGS_SCHEMA.items():
        result[key] = globals().get(key, meta["default"])
    return result


def from_settings(settings: dict):
    if not isinstance(settings, dict):
        logger.error("  ❌ shared settings is not a dictionary.")
        return

    for key, meta in SETTINGS_SCHEMA.items():
        expected_type = meta["type"]
        default_value = meta["default"]

        raw_value = settings.get(key, default_value)

        try:
            if expected_type == "int":
                value = int(raw_value)
            elif expected_type == "float":
                value = float(raw_value)
            elif expected_type == "bool":
                value = bool(raw_value)
            elif expected_type == "str":
                value = str(raw_value)
            else:
                value = raw_value

            globals()[key] = value
            SETTINGS[key] = value

        except Exception as e:
            logger.error(f"   ❌ shared Failed to load '{key}' as {expected_type} Error: {e}")
            globals()[key] = default_value
            SETTINGS[key] = default_value


def load_settings():
    try:
        with open(SETTINGS_FILE, "r") as f:
            loaded = json.load(f)

    except Exception as e:
        logger.error(f"   ❌ shared load_settings {e}")
        loaded = {}

    from_settings(loaded)


def save_default_settings():
    try:
        defaults = {k: v["default"] for k, v in SETTINGS_SCHEMA.items()}
        with open(SETTINGS_FILE, "w", encoding="utf-8") as f:
            json.dump(defaults, f, indent=2)
        logger.info("   ✅ Default settings saved successfully.")
    except Exception as e:
        logger.error(f"  ❌ failed to save default settings: {e}")


def save_settings():
    try:
        with open(SETTINGS_FILE, "w", encoding="utf-8") as f:
            json.dump(to_settings(), f, indent=2)
        logger.info("   ✅ Runtime settings saved successfully.")
    except Exception as e:
        logger.error(f"  ❌ save_settings Error: {e}")


def ensure_settings_exists():
    if not SETTINGS_FILE.exists():
        logger.error("   ❌ No settings file found. Saving default settings...")
        save_default_settings()
