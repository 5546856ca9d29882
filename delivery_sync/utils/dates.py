from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo

# Spreadsheet day 0; includes the 1900 leap-year bug offset.
SERIAL_EPOCH = date(1899, 12, 30)
DISPLAY_FORMAT = "%d/%m/%Y"


def _as_serial(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return None
        return float(value)
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            parsed = float(cleaned)
        except ValueError:
            return None
        if math.isnan(parsed) or math.isinf(parsed):
            return None
        return parsed
    return None


def serial_to_date(serial: float) -> date:
    """Convert a spreadsheet day serial to a calendar date (time of day dropped)."""
    return SERIAL_EPOCH + timedelta(days=math.floor(serial))


def format_order_date(value: Any) -> str:
    """
    Render a cell value as a display date.

    Numeric serials (including numeric text) and date/datetime cells become
    ``DD/MM/YYYY``; any other text is returned trimmed and unchanged.
    """
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime(DISPLAY_FORMAT)
    if isinstance(value, date):
        return value.strftime(DISPLAY_FORMAT)
    serial = _as_serial(value)
    if serial is not None:
        try:
            return serial_to_date(serial).strftime(DISPLAY_FORMAT)
        except OverflowError:
            return str(value).strip()
    if isinstance(value, float):
        # NaN from an empty pandas cell
        return ""
    return str(value).strip()


def localized_timestamp(tz_name: str, now: Optional[datetime] = None) -> str:
    """Format ``now`` like an en-MY locale string, e.g. ``19/10/2026, 3:05:09 pm``."""
    current = now or datetime.now(timezone.utc)
    local = current.astimezone(ZoneInfo(tz_name))
    hour = local.hour % 12 or 12
    suffix = "am" if local.hour < 12 else "pm"
    return f"{local.strftime(DISPLAY_FORMAT)}, {hour}:{local.strftime('%M:%S')} {suffix}"


def utc_isoformat(now: Optional[datetime] = None) -> str:
    current = now or datetime.now(timezone.utc)
    return current.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
