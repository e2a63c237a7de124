"""Engine tunables from the ``BOOKING_ENGINE`` settings dict."""

from __future__ import annotations

from typing import Any

from django.conf import settings  # type: ignore

DEFAULTS: dict[str, Any] = {
    "DEFAULT_CURRENCY": "EUR",
    "MAX_AVAILABILITY_DAYS": 366,
    "WAITLIST_NOTIFY_ASYNC": True,
    "SMS_BACKEND": "apps.notifications.senders.LoggingSMSSender",
}


def engine_setting(name: str) -> Any:
    """Return a ``BOOKING_ENGINE`` value, falling back to the built-in default."""
    overrides = getattr(settings, "BOOKING_ENGINE", None) or {}
    if name in overrides:
        return overrides[name]
    if name not in DEFAULTS:
        raise KeyError(f"Unknown booking engine setting: {name}")
    return DEFAULTS[name]
