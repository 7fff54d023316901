"""
Centralized configuration module for clinic-wide settings.

Values are read from environment variables (a `.env` file is loaded by
python-dotenv in `holter_clinic.main.load_environment`) and cached as
module-level constants for the common case. The getter functions re-read the
environment so tests can monkeypatch variables.
"""

import logging
import os
from datetime import date, datetime, tzinfo
from typing import List
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes")

# ===========================
# Timezone Configuration
# ===========================


def get_app_timezone() -> ZoneInfo:
    """
    Get the clinic timezone from environment variable.

    Returns:
        ZoneInfo: Clinic timezone (defaults to UTC if not configured)

    Environment Variables:
        TZ: Timezone identifier (e.g., 'Asia/Tehran', 'UTC')
            Default: 'UTC'

    Examples:
        >>> # In .env file:
        >>> # TZ=Asia/Tehran
        >>> tz = get_app_timezone()
        >>> print(tz)  # Asia/Tehran
    """
    tz_name = os.getenv("TZ", "UTC")

    try:
        return ZoneInfo(tz_name)
    except Exception as e:
        logger.warning(
            f"Invalid timezone '{tz_name}' specified in TZ environment variable. "
            f"Falling back to UTC. Error: {e}"
        )
        return ZoneInfo("UTC")


APP_TZ = get_app_timezone()


def clinic_now(tz: tzinfo = APP_TZ) -> datetime:
    """Current clinic wall-clock time as a naive datetime."""
    return datetime.now(tz).replace(tzinfo=None)


def to_clinic_time(moment: datetime, tz: tzinfo = APP_TZ) -> datetime:
    """Convert an aware datetime to naive clinic wall-clock time.

    Naive datetimes are assumed to already be clinic-local and are returned
    unchanged.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz).replace(tzinfo=None)


# ===========================
# Overdue Scan Configuration
# ===========================


def get_overdue_scan_interval() -> int:
    """
    Get the number of seconds between background overdue scans.

    Environment Variables:
        OVERDUE_SCAN_INTERVAL_SECONDS: Positive integer
            Default: 60 (one scan per minute)
    """
    raw_value = os.getenv("OVERDUE_SCAN_INTERVAL_SECONDS", "60")
    try:
        interval = int(raw_value)
    except ValueError:
        logger.warning(
            "Invalid OVERDUE_SCAN_INTERVAL_SECONDS, using default",
            extra={"context": {"value": raw_value, "default": 60}},
        )
        return 60
    if interval <= 0:
        logger.warning(
            "OVERDUE_SCAN_INTERVAL_SECONDS must be positive, using default",
            extra={"context": {"value": raw_value, "default": 60}},
        )
        return 60
    return interval


OVERDUE_SCAN_INTERVAL_SECONDS = get_overdue_scan_interval()


# ===========================
# Blocked Dates Configuration
# ===========================


def get_blocked_dates() -> List[str]:
    """
    Get the initial list of days on which no installs may be scheduled.

    Environment Variables:
        BLOCKED_DATES: Comma-separated ISO dates
            Default: empty

    Examples:
        >>> # In .env file:
        >>> # BLOCKED_DATES=2024-07-18,2024-07-19
        >>> get_blocked_dates()
        ['2024-07-18', '2024-07-19']

    Malformed entries are skipped with a warning.
    """
    raw_value = os.getenv("BLOCKED_DATES", "")
    days: List[str] = []
    for chunk in raw_value.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            day = date.fromisoformat(chunk).isoformat()
        except ValueError:
            logger.warning(
                "Ignoring malformed entry in BLOCKED_DATES",
                extra={"context": {"value": chunk}},
            )
            continue
        if day not in days:
            days.append(day)
    return days


# ===========================
# Fleet Configuration
# ===========================


def _get_non_negative_int(name: str, default: int) -> int:
    raw_value = os.getenv(name, str(default))
    try:
        value = int(raw_value)
    except ValueError:
        value = -1
    if value < 0:
        logger.warning(
            f"Invalid {name}, using default",
            extra={"context": {"value": raw_value, "default": default}},
        )
        return default
    return value


def get_initial_fleet_sizes() -> dict:
    """
    Get how many rhythm holters, pressure holters and cables to create at start.

    Environment Variables:
        INITIAL_RHYTHM_HOLTERS: Default 15
        INITIAL_PRESSURE_HOLTERS: Default 5
        INITIAL_CABLES: Default 25
    """
    return {
        "rhythm": _get_non_negative_int("INITIAL_RHYTHM_HOLTERS", 15),
        "pressure": _get_non_negative_int("INITIAL_PRESSURE_HOLTERS", 5),
        "cables": _get_non_negative_int("INITIAL_CABLES", 25),
    }


# ===========================
# Logging Configuration
# ===========================


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def get_log_to_file() -> bool:
    return os.getenv("LOG_TO_FILE", "false").strip().lower() in _TRUTHY


def get_log_json() -> bool:
    return os.getenv("LOG_JSON", "false").strip().lower() in _TRUTHY


def log_clinic_config():
    """
    Log the active clinic configuration.

    Should be called during startup to provide visibility into the timezone
    and scan interval being used.
    """
    logger.info(
        "Clinic configuration initialized",
        extra={
            "context": {
                "timezone": str(APP_TZ),
                "overdue_scan_interval_seconds": get_overdue_scan_interval(),
                "blocked_dates": get_blocked_dates(),
                "fleet": get_initial_fleet_sizes(),
            }
        },
    )
