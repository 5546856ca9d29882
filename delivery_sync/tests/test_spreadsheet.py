from __future__ import annotations

import os
from pathlib import Path

import pandas as pd
import pytest

from delivery_sync.errors import SpreadsheetError
from delivery_sync.ingest.spreadsheet import find_workbook, read_rows
from delivery_sync.ingest.transform import transform_rows
from delivery_sync.utils.config import TransformOptions


def _write(path: Path, frame: pd.DataFrame, **kw) -> Path:
    frame.to_excel(path, index=False, engine="openpyxl", **kw)
    return path


def test_reads_first_sheet_rows(tmp_path):
    path = tmp_path / "tickets.xlsx"
    df = pd.DataFrame(
        {
            "Ticket ID": ["T1", "T2", None],
            "Order Received": [45000, 45001, 45002],
            "Dept": ["QAS SALES", None, "Logistic"],
            "Aging": [0, 3, 5],
        }
    )
    _write(path, df)

    rows = read_rows(path)
    assert len(rows) == 3
    assert rows[0]["Ticket ID"] == "T1"
    assert rows[1]["Dept"] is None
    assert rows[2]["Ticket ID"] is None

    result = transform_rows(rows)
    assert [r.ticket_id for r in result.analytics] == ["T1", "T2"]
    assert result.analytics[0].order_received == "15/03/2023"
    assert [r.ticket_id for r in result.aging] == ["T2"]


def test_header_row_below_title_banner(tmp_path):
    path = tmp_path / "report.xlsx"
    frame = pd.DataFrame(
        [
            ["Delivery Ticket Report", None],
            [None, None],
            ["Ticket ID", "Aging"],
            ["T9", 2],
        ]
    )
    frame.to_excel(path, index=False, header=False, engine="openpyxl")

    rows = read_rows(path)
    assert rows == [{"Ticket ID": "T9", "Aging": 2}]


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(SpreadsheetError):
        read_rows(tmp_path / "nope.xlsx")


def test_empty_sheet_is_fatal(tmp_path):
    path = _write(tmp_path / "empty.xlsx", pd.DataFrame())
    with pytest.raises(SpreadsheetError):
        read_rows(path)


def test_header_without_rows_is_empty(tmp_path):
    path = _write(tmp_path / "header_only.xlsx", pd.DataFrame(columns=["Ticket ID", "Aging"]))
    assert read_rows(path) == []


def test_configured_ticket_header_below_banner(tmp_path):
    path = tmp_path / "jobs.xlsx"
    frame = pd.DataFrame([["Report", None], ["Job Ref", "Aging"], ["J1", 3]])
    frame.to_excel(path, index=False, header=False, engine="openpyxl")
    extra = {"ticket_id": ["Job Ref"]}

    rows = read_rows(path, extra)
    assert rows == [{"Job Ref": "J1", "Aging": 3}]

    result = transform_rows(rows, TransformOptions(extra_columns=extra))
    assert [r.ticket_id for r in result.analytics] == ["J1"]
    assert [r.ticket_id for r in result.aging] == ["J1"]


def test_directory_picks_latest_workbook(tmp_path):
    old = _write(tmp_path / "old.xlsx", pd.DataFrame({"Ticket ID": ["A"]}))
    new = _write(tmp_path / "new.xlsx", pd.DataFrame({"Ticket ID": ["B"]}))
    os.utime(old, (1_000_000, 1_000_000))
    os.utime(new, (2_000_000, 2_000_000))
    (tmp_path / "~$new.xlsx").write_bytes(b"lock")

    assert find_workbook(tmp_path) == new
    assert read_rows(tmp_path)[0]["Ticket ID"] == "B"


def test_directory_without_workbooks_is_fatal(tmp_path):
    with pytest.raises(SpreadsheetError):
        find_workbook(tmp_path)
