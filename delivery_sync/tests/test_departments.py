from __future__ import annotations

import pytest

from delivery_sync.ingest.departments import DEPARTMENT_MAP, normalize_department


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("QAS SALES", "SALES"),
        ("Proc. Collection", "PROCUREMENT"),
        ("  Logistic  ", "LOGISTICS"),
        ("Foo Bar", "FOO BAR"),
        ("", "N/A"),
        ("   ", "N/A"),
        (None, "N/A"),
    ],
)
def test_normalize_department(raw, expected):
    assert normalize_department(raw) == expected


def test_lookup_is_case_sensitive():
    assert "qas sales" not in DEPARTMENT_MAP
    assert normalize_department("qas sales") == "QAS SALES"


def test_overrides_take_precedence():
    overrides = {"QAS SALES": "RETAIL", "Ops": "OPERATIONS"}
    assert normalize_department("QAS SALES", overrides) == "RETAIL"
    assert normalize_department("Ops", overrides) == "OPERATIONS"
    assert normalize_department("Sales", overrides) == "SALES"


def test_deterministic():
    assert normalize_department("Warehouse") == normalize_department("Warehouse") == "WAREHOUSE"
