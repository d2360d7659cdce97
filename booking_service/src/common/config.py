import os
from datetime import timedelta
from typing import Optional


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return float(value)


ROOT_PATH = os.getenv("ROOT_PATH", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Reminder dispatch
REMINDER_SCAN_INTERVAL = timedelta(
    seconds=float(os.getenv("REMINDER_SCAN_INTERVAL_SECONDS", "3600"))
)
REMINDER_LEAD_TIME = timedelta(
    hours=float(os.getenv("REMINDER_LEAD_TIME_HOURS", "24"))
)
REMINDER_DISPATCH_ENABLED = (
    os.getenv("REMINDER_DISPATCH_ENABLED", "true").lower() == "true"
)
NOTIFICATION_TIMEOUT_SECONDS = _optional_float("NOTIFICATION_TIMEOUT_SECONDS")

# Doctor catalog; the seeded in-memory catalog is used when no URL is set
DOCTOR_CATALOG_URL = os.getenv("DOCTOR_CATALOG_URL")
DOCTOR_CATALOG_TIMEOUT_SECONDS = float(
    os.getenv("DOCTOR_CATALOG_TIMEOUT_SECONDS", "5")
)
