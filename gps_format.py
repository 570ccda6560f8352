# gps_format.py
from __future__ import annotations

from gps_types import (
    AllSourcesDisabled,
    AuthorizationDenied,
    Fix,
    Searching,
    SubscriptionError,
)

INITIALIZING_TEXT = "Initializing location services..."
SEARCHING_TEXT = "Acquiring location...\nPlease wait or move to an open area"
SEARCHING_TOAST = "Searching for location signal..."
DISABLED_TITLE = "GPS Disabled"
DISABLED_TEXT = "GPS is disabled. Please enable GPS in settings to obtain location."
DENIED_TOAST = "Location permission denied."
DENIED_TEXT = "Location permission denied.\nAllow location access and press the button again."


def fix_text(fix: Fix) -> str:
    return (
        f"Latitude: {fix.latitude:.6f}\n"
        f"Longitude: {fix.longitude:.6f}\n"
        f"Accuracy: {fix.accuracy_m:.1f} meters\n"
        f"Provider: {fix.source.provider_name}"
    )


def label_text(status) -> str:
    """Text for the location label. Every status replaces what was shown before."""
    if isinstance(status, Fix):
        return fix_text(status)
    if isinstance(status, Searching):
        return SEARCHING_TEXT
    if isinstance(status, AllSourcesDisabled):
        return DISABLED_TEXT
    if isinstance(status, AuthorizationDenied):
        return DENIED_TEXT
    if isinstance(status, SubscriptionError):
        return f"Error: {status.message}"
    return INITIALIZING_TEXT


def status_line(status) -> str:
    """One-line rendering, used by the console runner and the log."""
    if isinstance(status, Fix):
        return (f"FIX | {status.latitude:.6f},{status.longitude:.6f} | "
                f"acc={status.accuracy_m:.1f}m | {status.source.provider_name}")
    if isinstance(status, Searching):
        return "SEARCHING | waiting for first location"
    if isinstance(status, AllSourcesDisabled):
        return "DISABLED | all location sources are switched off"
    if isinstance(status, AuthorizationDenied):
        return "DENIED | location permission denied"
    if isinstance(status, SubscriptionError):
        return f"ERROR | {status.source.provider_name}: {status.message}"
    return f"UNKNOWN | {status!r}"


def toast_text(status):
    """Short notification for a status, or None when there is nothing to say."""
    if isinstance(status, Fix):
        return f"Location Updated ({status.source.provider_name})"
    if isinstance(status, Searching):
        return SEARCHING_TOAST
    if isinstance(status, AuthorizationDenied):
        return DENIED_TOAST
    if isinstance(status, SubscriptionError):
        return f"Location error ({status.source.provider_name}): {status.message}"
    return None
