"""
Locate and read the delivery ticket workbook.

Only the first sheet is read. The header row is the first row (within
``HEADER_SCAN_ROWS``) that carries a ticket-id header, so exports with a title
banner above the table still load.
"""
from __future__ import annotations

import logging
import math
import zipfile
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from delivery_sync.errors import SpreadsheetError
from delivery_sync.ingest.columns import candidates_for, find_header

logger = logging.getLogger(__name__)

HEADER_SCAN_ROWS = 20
WORKBOOK_PATTERNS = ("*.xlsx", "*.xlsm")

RawRow = Dict[str, Any]


def find_workbook(path: Union[str, Path]) -> Path:
    """
    Resolve ``path`` to a workbook file.

    A directory selects its most recently modified workbook.
    """
    target = Path(path)
    if target.is_dir():
        candidates: List[Path] = []
        for pattern in WORKBOOK_PATTERNS:
            candidates.extend(p for p in target.glob(pattern) if not p.name.startswith("~$"))
        if not candidates:
            raise SpreadsheetError(f"No spreadsheet found in directory: {target}")
        latest = max(candidates, key=lambda p: p.stat().st_mtime)
        logger.info("Using latest workbook in %s: %s", target, latest.name)
        return latest
    if not target.exists():
        raise SpreadsheetError(f"Spreadsheet not found: {target}")
    return target


def _locate_header_row(preview: pd.DataFrame, candidates: List[str]) -> Optional[int]:
    for idx in range(min(len(preview), HEADER_SCAN_ROWS)):
        cells = [v for v in preview.iloc[idx].tolist() if not _is_blank(v)]
        if find_header(cells, candidates) is not None:
            return idx
    return None


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _header_names(values: List[Any]) -> List[str]:
    names: List[str] = []
    for pos, value in enumerate(values):
        name = "" if _is_blank(value) else str(value).strip()
        if not name:
            name = f"column_{pos + 1}"
        base, n = name, 2
        while name in names:
            name = f"{base}.{n}"
            n += 1
        names.append(name)
    return names


def read_rows(
    path: Union[str, Path], extra_columns: Optional[Mapping[str, Iterable[str]]] = None
) -> List[RawRow]:
    """
    Read the first sheet of the workbook into a list of raw row mappings.

    Cell values are left as parsed (numbers, text, datetimes); empty cells
    become ``None`` and fully blank rows are dropped. A header row without any
    data rows yields an empty list. ``extra_columns`` adds configured header
    spellings to the ticket-id lookup used to find the header row.
    """
    file_path = find_workbook(path)
    try:
        sheet = pd.read_excel(file_path, engine="openpyxl", sheet_name=0, header=None, dtype=object)
    except (ValueError, OSError, zipfile.BadZipFile) as exc:
        raise SpreadsheetError(f"Could not read spreadsheet {file_path}: {exc}") from exc

    sheet = sheet.dropna(how="all")
    if sheet.empty:
        raise SpreadsheetError(f"First sheet of {file_path} is empty")

    header_idx = _locate_header_row(sheet, candidates_for("ticket_id", extra_columns))
    if header_idx is None:
        logger.warning("No ticket id header found in %s; using the first row as header", file_path.name)
        header_idx = 0
    elif header_idx:
        logger.info("Header row detected at sheet row %d", header_idx + 1)

    headers = _header_names(sheet.iloc[header_idx].tolist())
    body = sheet.iloc[header_idx + 1 :]

    rows: List[RawRow] = []
    for values in body.itertuples(index=False, name=None):
        row = {name: (None if _is_blank(val) else val) for name, val in zip(headers, values)}
        if all(v is None for v in row.values()):
            continue
        rows.append(row)

    if not rows:
        logger.warning("First sheet of %s has a header but no data rows", file_path.name)

    logger.info("Read %d row(s) from %s", len(rows), file_path.name)
    return rows


__all__ = ["RawRow", "find_workbook", "read_rows"]
