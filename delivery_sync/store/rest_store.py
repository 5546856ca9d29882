"""
PostgREST (Supabase ``/rest/v1``) implementation of ``RecordStore``.

Usage:
  store = RestDataStore.from_settings(settings)
  try:
      await store.replace_all({"delivery_analytics": rows})
  finally:
      await store.aclose()

Notes:
- Every request carries ``apikey`` + ``Authorization: Bearer`` headers.
- Inserts ask for ``Prefer: return=representation`` so the written rows come back.
- No retries: a failed insert fails the run.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional, Sequence

import httpx

from delivery_sync.errors import InsertError
from delivery_sync.store.base import RecordStore, Row
from delivery_sync.store.http_client import async_client, is_success
from delivery_sync.utils.config import SyncSettings

logger = logging.getLogger(__name__)

RETURN_REPRESENTATION = {"Prefer": "return=representation"}
CLEAR_FILTER = {"id": "gte.0"}


class RestRequestError(Exception):
    def __init__(self, method: str, table: str, response: httpx.Response) -> None:
        self.method = method
        self.table = table
        self.status_code = response.status_code
        self.response_text = response.text
        super().__init__(f"{method} {table} -> HTTP {self.status_code}: {self.response_text[:300]}")


def _rows_in(response: httpx.Response) -> Optional[int]:
    try:
        payload: Any = response.json()
    except (json.JSONDecodeError, ValueError):
        return None
    if isinstance(payload, list):
        return len(payload)
    return None


class RestDataStore(RecordStore):
    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    @classmethod
    def from_settings(
        cls, settings: SyncSettings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "RestDataStore":
        return cls(async_client(settings.rest_url, settings.api_key, transport=transport))

    async def clear(self, table: str) -> None:
        r = await self.client.delete(f"/{table}", params=CLEAR_FILTER)
        if not is_success(r):
            raise RestRequestError("DELETE", table, r)

    async def insert(self, table: str, rows: Sequence[Row]) -> int:
        logger.info("Inserting %d row(s) into %s", len(rows), table)
        try:
            r = await self.client.post(f"/{table}", json=list(rows), headers=RETURN_REPRESENTATION)
        except httpx.HTTPError as exc:
            raise InsertError(table=table, status_code=None, response_text=str(exc)) from exc
        if not is_success(r):
            raise InsertError(table=table, status_code=r.status_code, response_text=r.text)
        returned = _rows_in(r)
        return len(rows) if returned is None else returned

    async def update_singleton(self, table: str, key: int, payload: Row) -> int:
        r = await self.client.patch(
            f"/{table}", params={"id": f"eq.{key}"}, json=payload, headers=RETURN_REPRESENTATION
        )
        if not is_success(r):
            raise RestRequestError("PATCH", table, r)
        affected = _rows_in(r)
        # Without a representation body we cannot tell; assume the row existed.
        return 1 if affected is None else affected

    async def insert_singleton(self, table: str, key: int, payload: Row) -> None:
        r = await self.client.post(f"/{table}", json={"id": key, **payload}, headers=RETURN_REPRESENTATION)
        if not is_success(r):
            raise RestRequestError("POST", table, r)

    async def aclose(self) -> None:
        await self.client.aclose()


__all__ = ["RestDataStore", "RestRequestError"]
