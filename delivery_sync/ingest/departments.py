from __future__ import annotations

from typing import Dict, Mapping, Optional

UNKNOWN_DEPARTMENT = "N/A"

# Exact (case-sensitive) spellings seen in the ticket exports.
DEPARTMENT_MAP: Dict[str, str] = {
    "Proc. Collection": "PROCUREMENT",
    "Proc Collection": "PROCUREMENT",
    "Procurement": "PROCUREMENT",
    "PROCUREMENT": "PROCUREMENT",
    "Purchasing": "PROCUREMENT",
    "QAS SALES": "SALES",
    "QAS Sales": "SALES",
    "Sales": "SALES",
    "Sales Dept": "SALES",
    "QAS SERVICE": "SERVICE",
    "QAS Service": "SERVICE",
    "Service": "SERVICE",
    "After Sales": "SERVICE",
    "Logistic": "LOGISTICS",
    "Logistics": "LOGISTICS",
    "Delivery": "LOGISTICS",
    "Store": "WAREHOUSE",
    "Warehouse": "WAREHOUSE",
    "WH": "WAREHOUSE",
    "Acc.": "FINANCE",
    "Accounts": "FINANCE",
    "Finance": "FINANCE",
    "Admin": "ADMIN",
    "Administration": "ADMIN",
    "HR": "ADMIN",
    "Tech. Support": "TECHNICAL",
    "Technical": "TECHNICAL",
    "Engineering": "TECHNICAL",
}


def normalize_department(raw: Optional[str], overrides: Optional[Mapping[str, str]] = None) -> str:
    label = (raw or "").strip()
    if not label:
        return UNKNOWN_DEPARTMENT
    if overrides and label in overrides:
        return overrides[label]
    return DEPARTMENT_MAP.get(label, label.upper())
