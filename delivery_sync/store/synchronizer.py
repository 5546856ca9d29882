"""
Push transformed records to the remote store.

Order of operations:
  1. clear analytics + aging tables (concurrently; failures only logged)
  2. insert analytics records, then aging records (failures are fatal)
  3. update the metadata singleton, inserting it when absent (best effort)
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Optional, Sequence

from delivery_sync.models import AgingRecord, AnalyticsRecord, SyncMetadata, SyncResult, to_payload
from delivery_sync.store.base import RecordStore
from delivery_sync.utils.config import SyncSettings
from delivery_sync.utils.dates import localized_timestamp, utc_isoformat

logger = logging.getLogger(__name__)


def build_metadata(settings: SyncSettings, aging_count: int, analytics_count: int,
                   now: Optional[datetime] = None) -> SyncMetadata:
    return SyncMetadata(
        last_update=localized_timestamp(settings.timezone, now),
        updated_by=settings.transform.updated_by,
        total_records=aging_count,
        analytics_records=analytics_count,
        updated_at=utc_isoformat(now),
    )


class DeliverySynchronizer:
    def __init__(self, store: RecordStore, settings: SyncSettings) -> None:
        self.store = store
        self.settings = settings

    async def sync(self, analytics: Sequence[AnalyticsRecord], aging: Sequence[AgingRecord]) -> SyncResult:
        tables = self.settings.tables
        logger.info("Clearing %s and %s", tables.analytics, tables.aging)
        if not analytics:
            logger.info("No records to save; tables will be left empty")
        else:
            logger.info("Saving %d analytics and %d aging record(s)", len(analytics), len(aging))

        written = await self.store.replace_all({
            tables.analytics: to_payload(list(analytics)),
            tables.aging: to_payload(list(aging)),
        })

        metadata_written = await self._write_metadata(len(aging), len(analytics))
        return SyncResult(
            analytics_written=written.get(tables.analytics, 0),
            aging_written=written.get(tables.aging, 0),
            metadata_written=metadata_written,
        )

    async def _write_metadata(self, aging_count: int, analytics_count: int) -> bool:
        meta = build_metadata(self.settings, aging_count, analytics_count)
        try:
            await self.store.upsert_singleton(
                self.settings.tables.metadata, self.settings.metadata_id, meta.model_dump()
            )
        except Exception as exc:
            logger.warning("Metadata update failed (data was saved): %s", exc)
            return False
        logger.info("Metadata updated: %d aging / %d analytics", aging_count, analytics_count)
        return True


async def _sync_and_close(store: RecordStore, settings: SyncSettings,
                          analytics: Sequence[AnalyticsRecord], aging: Sequence[AgingRecord]) -> SyncResult:
    try:
        return await DeliverySynchronizer(store, settings).sync(analytics, aging)
    finally:
        await store.aclose()


def run_sync(store: RecordStore, settings: SyncSettings,
             analytics: Sequence[AnalyticsRecord], aging: Sequence[AgingRecord]) -> SyncResult:
    return asyncio.run(_sync_and_close(store, settings, analytics, aging))


__all__ = ["DeliverySynchronizer", "build_metadata", "run_sync"]
