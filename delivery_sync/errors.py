"""
Exception types raised by the delivery sync job.

Only configuration/spreadsheet problems and failed inserts are fatal; the CLI
turns any ``DeliverySyncError`` into a non-zero exit.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class DeliverySyncError(Exception):
    """Base class for fatal errors of a sync run."""


class ConfigError(DeliverySyncError):
    """Required configuration (env vars, config file) is missing or invalid."""


class SpreadsheetError(DeliverySyncError):
    """The input workbook is missing, empty, or has no recognisable header."""


@dataclass
class InsertError(DeliverySyncError):
    table: str
    status_code: Optional[int]
    response_text: str = ""

    def __str__(self) -> str:
        parts = [f"Insert into '{self.table}' failed"]
        if self.status_code is not None:
            parts.append(f"HTTP {self.status_code}")
        if self.response_text:
            parts.append(self.response_text[:500])
        return "; ".join(parts)


__all__ = ["ConfigError", "DeliverySyncError", "InsertError", "SpreadsheetError"]
