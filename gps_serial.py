# gps_serial.py
from __future__ import annotations

from typing import Optional

from serial.tools import list_ports

import shared
from shared import logger


def score_port(p) -> int:
    """Higher score = more likely to be a USB GPS receiver."""
    desc = (getattr(p, "description", "") or "").lower()
    hwid = (getattr(p, "hwid", "") or "").lower()
    dev = (getattr(p, "device", "") or "")

    score = 0
    # Prolific PL2303 (BU-353 and friends)
    if "pl2303" in desc or "pl2303" in hwid:
        score += 50
    if "prolific" in desc or "prolific" in hwid:
        score += 30
    if "067b" in hwid:
        score += 20
    # u-blox receivers enumerate as CDC-ACM
    if "u-blox" in desc or "1546" in hwid:
        score += 40
    if "gps" in desc or "gnss" in desc:
        score += 25
    if dev.startswith("/dev/cu."):
        score += 5
    return score


def find_gps_port() -> Optional[str]:
    """Best-guess serial port of an attached GPS receiver, or None."""
    try:
        ports = list(list_ports.comports())
    except Exception as e:
        logger.warning(f"   👆 Serial port scan failed: {e}")
        return None

    candidates = [p for p in ports if score_port(p) > 5]
    if not candidates:
        return None

    candidates.sort(key=score_port, reverse=True)
    return getattr(candidates[0], "device", None)


def nmea_source_parameters() -> Optional[dict]:
    """
    Parameters for Qt's 'nmea' positioning plugin, or None when no receiver
    is configured or plugged in.
    """
    port = shared.nmea_port or find_gps_port()
    if not port:
        return None

    logger.info(f"   ✅ Using NMEA receiver on {port}")
    return {
        "nmea.source": f"serial:{port}",
        "nmea.baudrate": int(shared.nmea_baud),
    }
