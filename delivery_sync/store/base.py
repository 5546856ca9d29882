"""
Narrow storage interface used by the synchronizer.

Transforms never talk to a backend directly; they hand record sets to
``RecordStore.replace_all`` and the metadata helpers below. The REST backend
has no multi-table transaction, so ``replace_all`` leaves the tables empty if
the process dies between the clear and the inserts.
"""
from __future__ import annotations

import abc
import asyncio
import logging
from typing import Any, Dict, List, Mapping, Sequence

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class RecordStore(abc.ABC):
    @abc.abstractmethod
    async def clear(self, table: str) -> None:
        """Delete every row of ``table``."""

    @abc.abstractmethod
    async def insert(self, table: str, rows: Sequence[Row]) -> int:
        """Bulk insert ``rows``; return the number written. Raises ``InsertError``."""

    @abc.abstractmethod
    async def update_singleton(self, table: str, key: int, payload: Row) -> int:
        """Update the row with id ``key``; return the number of rows affected."""

    @abc.abstractmethod
    async def insert_singleton(self, table: str, key: int, payload: Row) -> None:
        """Insert ``payload`` as the row with id ``key``."""

    async def clear_all(self, tables: Sequence[str]) -> List[str]:
        """
        Clear ``tables`` concurrently and return the names that failed.

        Clear failures are logged, never raised.
        """
        results = await asyncio.gather(*(self.clear(t) for t in tables), return_exceptions=True)
        failed: List[str] = []
        for table, result in zip(tables, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning("Failed to clear table %s: %s", table, result)
                failed.append(table)
            else:
                logger.info("Cleared table %s", table)
        return failed

    async def replace_all(self, tables: Mapping[str, Sequence[Row]]) -> Dict[str, int]:
        """
        Replace the contents of every table in ``tables``.

        All tables are cleared first (concurrently), then filled one after
        another in mapping order. Empty row sets are cleared but not inserted.
        """
        await self.clear_all(list(tables))
        written: Dict[str, int] = {}
        for table, rows in tables.items():
            if not rows:
                written[table] = 0
                continue
            written[table] = await self.insert(table, rows)
        return written

    async def upsert_singleton(self, table: str, key: int, payload: Row) -> None:
        affected = await self.update_singleton(table, key, payload)
        if affected == 0:
            logger.info("No %s row with id=%s; inserting it", table, key)
            await self.insert_singleton(table, key, payload)

    async def aclose(self) -> None:
        return None


__all__ = ["RecordStore", "Row"]
