"""
Turn raw ticket rows into analytics and aging record sets.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Any, List, Optional, Sequence

from delivery_sync.ingest.columns import candidates_for, cell_to_text, resolve_raw, resolve_value
from delivery_sync.ingest.departments import normalize_department
from delivery_sync.ingest.spreadsheet import RawRow
from delivery_sync.models import COMPLETED, PENDING, AgingRecord, AnalyticsRecord, TransformResult
from delivery_sync.utils.config import TransformOptions
from delivery_sync.utils.dates import format_order_date

logger = logging.getLogger(__name__)

AGING_THRESHOLD = 1
_LEADING_INT = re.compile(r"[+-]?\d+")


def parse_aging(value: Any) -> int:
    """
    Parse an aging cell into a non-negative int.

    Text is read up to its first non-digit (``"5 days"`` is 5); text without a
    leading number is 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        return max(int(value), 0)
    match = _LEADING_INT.match(str(value).strip().replace(",", ""))
    if not match:
        return 0
    return max(int(match.group(0)), 0)


def derive_status(aging: int) -> str:
    return PENDING if aging >= AGING_THRESHOLD else COMPLETED


def build_analytics_record(row: RawRow, options: TransformOptions) -> Optional[AnalyticsRecord]:
    extra = options.extra_columns
    ticket_id = resolve_value(row, candidates_for("ticket_id", extra))
    if not ticket_id:
        return None

    aging = parse_aging(resolve_raw(row, candidates_for("aging", extra)))
    return AnalyticsRecord(
        ticket_id=ticket_id,
        order_received=format_order_date(resolve_raw(row, candidates_for("order_received", extra))),
        type=resolve_value(row, candidates_for("type", extra)),
        urgent=resolve_value(row, candidates_for("urgent", extra)) or "No",
        customer=resolve_value(row, candidates_for("customer", extra)),
        dept=normalize_department(resolve_value(row, candidates_for("dept", extra)), options.departments),
        aging=aging,
        status=derive_status(aging),
        updated_by=options.updated_by,
    )


def select_aging(analytics: Sequence[AnalyticsRecord]) -> List[AgingRecord]:
    """Pending subset of already-built analytics records, without ``status``."""
    return [record.to_aging() for record in analytics if record.aging >= AGING_THRESHOLD]


def transform_rows(rows: Sequence[RawRow], options: Optional[TransformOptions] = None) -> TransformResult:
    opts = options or TransformOptions()
    analytics: List[AnalyticsRecord] = []
    skipped = 0
    for idx, row in enumerate(rows, start=1):
        record = build_analytics_record(row, opts)
        if record is None:
            skipped += 1
            aging_hint = cell_to_text(resolve_raw(row, candidates_for("aging", opts.extra_columns)))
            logger.warning("Skipping row %d: missing ticket id (aging=%r)", idx, aging_hint)
            continue
        analytics.append(record)

    aging = select_aging(analytics)
    logger.info(
        "Transformed %d row(s): %d analytics, %d aging, %d skipped",
        len(rows), len(analytics), len(aging), skipped,
    )
    return TransformResult(analytics=analytics, aging=aging, skipped=skipped)


__all__ = ["build_analytics_record", "derive_status", "parse_aging", "select_aging", "transform_rows"]
