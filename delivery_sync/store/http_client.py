# delivery_sync/store/http_client.py
from __future__ import annotations
import os
import httpx

READ_T = float(os.getenv("HTTP_READ_TIMEOUT", "30"))
CONN_T = float(os.getenv("HTTP_CONNECT_TIMEOUT", "5"))
WRITE_T = float(os.getenv("HTTP_WRITE_TIMEOUT", "30"))
POOL_T = float(os.getenv("HTTP_POOL_TIMEOUT", "5"))

TIMEOUT = httpx.Timeout(connect=CONN_T, read=READ_T, write=WRITE_T, pool=POOL_T)
LIMITS = httpx.Limits(max_connections=10, max_keepalive_connections=5, keepalive_expiry=30)

DEFAULT_HEADERS = {
    "User-Agent": os.getenv("HTTP_USER_AGENT", "delivery-sync/0.1"),
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def api_key_headers(api_key: str) -> dict:
    return {"apikey": api_key, "Authorization": f"Bearer {api_key}"}


def async_client(
    base_url: str,
    api_key: str,
    headers: dict | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    h = {**DEFAULT_HEADERS, **api_key_headers(api_key), **(headers or {})}
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        timeout=TIMEOUT,
        limits=LIMITS,
        headers=h,
        transport=transport,
    )


def is_success(r: httpx.Response) -> bool:
    return 200 <= r.status_code < 300
