"""
Header-variant resolution for delivery ticket exports.

Each logical field has an ordered list of accepted header spellings; earlier
spellings win when a sheet carries more than one of them.
"""
from __future__ import annotations

import math
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

NormalizedName = str

FIELD_CANDIDATES: Dict[str, List[str]] = {
    "ticket_id": [
        "Ticket ID",
        "Ticket_ID",
        "TicketID",
        "ticket_id",
        "Ticket No",
        "Ticket No.",
        "Ticket Number",
        "Ticket",
    ],
    "order_received": [
        "Order Received",
        "Order_Received",
        "order_received",
        "Order Received Date",
        "Date Received",
        "Order Date",
        "Date",
    ],
    "type": ["Type", "Ticket Type", "Order Type", "type"],
    "urgent": ["Urgent", "Urgent?", "Is Urgent", "urgent", "Priority"],
    "customer": ["Customer", "Customer Name", "Client", "customer"],
    "dept": ["Dept", "Department", "Dept.", "dept", "Section"],
    "aging": [
        "Aging",
        "Ageing",
        "aging",
        "Aging (Days)",
        "Ageing (Days)",
        "Aging Days",
        "Days Aging",
    ],
}


def normalize_header(header: Any) -> NormalizedName:
    return re.sub(r"\s+", " ", str(header or "")).strip().lower()


def candidates_for(field: str, extra: Optional[Mapping[str, Iterable[str]]] = None) -> List[str]:
    """Built-in spellings for ``field`` followed by any configured extras."""
    seen: List[str] = []
    for name in FIELD_CANDIDATES.get(field, []):
        if name not in seen:
            seen.append(name)
    if extra:
        for name in extra.get(field, []) or []:
            if name not in seen:
                seen.append(name)
    return seen


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def cell_to_text(value: Any) -> str:
    if _is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def resolve_raw(row: Mapping[str, Any], candidates: Iterable[str]) -> Any:
    """
    Return the first non-null cell value among ``candidates``.

    Exact header keys are tried before case/whitespace-insensitive matches so
    a sheet with both ``Aging`` and ``aging`` honours the listed order.
    """
    lookup: Optional[Dict[NormalizedName, str]] = None
    for candidate in candidates:
        if candidate in row and not _is_missing(row[candidate]):
            return row[candidate]
        if lookup is None:
            lookup = {}
            for key in row.keys():
                lookup.setdefault(normalize_header(key), key)
        key = lookup.get(normalize_header(candidate))
        if key is not None and not _is_missing(row[key]):
            return row[key]
    return None


def resolve_value(row: Mapping[str, Any], candidates: Iterable[str]) -> str:
    return cell_to_text(resolve_raw(row, candidates))


def find_header(headers: Iterable[Any], candidates: Iterable[str]) -> Optional[str]:
    """Return the first header (as it appears in the sheet) matching a candidate."""
    columns = {}
    for header in headers:
        columns.setdefault(normalize_header(header), header)
    for candidate in candidates:
        alias = normalize_header(candidate)
        if alias in columns:
            return columns[alias]
    return None


__all__ = [
    "FIELD_CANDIDATES",
    "candidates_for",
    "cell_to_text",
    "find_header",
    "normalize_header",
    "resolve_raw",
    "resolve_value",
]
