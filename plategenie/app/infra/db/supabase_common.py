from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, TypeVar

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from plategenie.app.domain.errors import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_STORE_FAILURES = (APIError, httpx.HTTPError, ConnectionError, TimeoutError)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def parse_datetime(value: str | datetime | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None

    try:
        normalized = value.replace("Z", "+00:00") if value.endswith("Z") else value
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def safe_str(value: object) -> str | None:
    return str(value) if value else None


def create_supabase_client(url: str, key: str) -> Client:
    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY required")
    return create_client(url, key)


def run_query(operation: str, query: Callable[[], T]) -> T:
    """Run a Supabase call and turn transport or PostgREST failures into StoreError."""
    try:
        return query()
    except _STORE_FAILURES as error:
        logger.error("Store error during %s: %s", operation, error)
        raise StoreError(operation, str(error)) from error


def first_row(data: Any) -> dict[str, Any] | None:
    if isinstance(data, list):
        return data[0] if data else None
    if isinstance(data, dict):
        return data
    return None
