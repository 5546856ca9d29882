from __future__ import annotations

import math
from datetime import datetime, timezone

from delivery_sync.utils.dates import format_order_date, localized_timestamp, utc_isoformat


def test_serial_one_is_last_day_of_1899():
    assert format_order_date(1) == "31/12/1899"


def test_serial_45000():
    assert format_order_date(45000) == "15/03/2023"
    assert format_order_date(45000.75) == "15/03/2023"
    assert format_order_date("45000") == "15/03/2023"


def test_non_numeric_text_passes_through():
    assert format_order_date("12 Mar 2024") == "12 Mar 2024"
    assert format_order_date(" 2024-03-12 ") == "2024-03-12"


def test_datetime_cells_are_formatted():
    assert format_order_date(datetime(2024, 3, 9, 14, 30)) == "09/03/2024"


def test_missing_values_are_blank():
    assert format_order_date(None) == ""
    assert format_order_date(math.nan) == ""


def test_localized_timestamp_kuala_lumpur():
    now = datetime(2026, 10, 19, 7, 5, 9, tzinfo=timezone.utc)
    assert localized_timestamp("Asia/Kuala_Lumpur", now) == "19/10/2026, 3:05:09 pm"
    midnight = datetime(2026, 10, 18, 16, 0, 0, tzinfo=timezone.utc)
    assert localized_timestamp("Asia/Kuala_Lumpur", midnight) == "19/10/2026, 12:00:00 am"


def test_utc_isoformat():
    now = datetime(2026, 10, 19, 7, 5, 9, tzinfo=timezone.utc)
    assert utc_isoformat(now) == "2026-10-19T07:05:09.000Z"
