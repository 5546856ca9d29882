"""
Ingestion helpers for turning delivery ticket exports into sync records.
"""

from .columns import FIELD_CANDIDATES, resolve_value
from .departments import normalize_department
from .spreadsheet import find_workbook, read_rows
from .transform import parse_aging, transform_rows

__all__ = [
    "FIELD_CANDIDATES",
    "find_workbook",
    "normalize_department",
    "parse_aging",
    "read_rows",
    "resolve_value",
    "transform_rows",
]
