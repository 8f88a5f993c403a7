from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from supabase import Client

from plategenie.app.domain.models import PendingRegistration, User
from plategenie.app.infra.db.base import PendingRegistrationRepository, UserRepository
from plategenie.app.infra.db.supabase_common import (
    first_row,
    isoformat,
    now_utc,
    parse_datetime,
    run_query,
    safe_str,
)

logger = logging.getLogger(__name__)

# Domain attribute -> column name, for partial updates
_USER_COLUMNS = {
    "username": "username",
    "email": "email",
    "password_hash": "password_hash",
    "is_verified": "is_verified",
    "google_id": "google_id",
    "profile_picture": "profile_picture",
    "bio": "bio",
    "updated_at": "updated_at",
}


def _row_to_user(row: dict[str, Any]) -> User:
    return User(
        id=str(row["id"]),
        username=str(row.get("username") or ""),
        email=str(row["email"]),
        password_hash=safe_str(row.get("password_hash")),
        is_verified=bool(row.get("is_verified")),
        google_id=safe_str(row.get("google_id")),
        profile_picture=safe_str(row.get("profile_picture")),
        bio=safe_str(row.get("bio")),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )


def _row_to_pending(row: dict[str, Any]) -> PendingRegistration:
    expires_at = parse_datetime(row.get("otp_expires_at"))
    if expires_at is None:
        # An unreadable expiry can never be honoured
        expires_at = datetime.min.replace(tzinfo=timezone.utc)
    return PendingRegistration(
        username=str(row.get("username") or ""),
        email=str(row["email"]),
        password_hash=str(row.get("password_hash") or ""),
        otp=str(row.get("otp") or ""),
        otp_expires_at=expires_at,
        created_at=parse_datetime(row.get("created_at")),
    )


def _serialize_value(value: Any) -> Any:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


class SupabaseUserRepository(UserRepository):
    TABLE_NAME = "users"

    def __init__(self, client: Client):
        self._client = client

    def get_by_email(self, email: str) -> User | None:
        result = run_query(
            "get_user_by_email",
            lambda: self._client.table(self.TABLE_NAME)
            .select("*")
            .eq("email", email)
            .limit(1)
            .execute(),
        )
        row = first_row(result.data)
        return _row_to_user(row) if row else None

    def create(self, user: User) -> User:
        now = now_utc()
        data = {
            "id": user.id or str(uuid4()),
            "username": user.username,
            "email": user.email,
            "password_hash": user.password_hash,
            "is_verified": user.is_verified,
            "google_id": user.google_id,
            "profile_picture": user.profile_picture,
            "bio": user.bio,
            "created_at": isoformat(user.created_at or now),
            "updated_at": isoformat(user.updated_at or now),
        }
        result = run_query(
            "create_user",
            lambda: self._client.table(self.TABLE_NAME).insert(data).execute(),
        )
        row = first_row(result.data)
        created = _row_to_user(row) if row else _row_to_user(data)
        logger.info("Created user: id=%s, email=%s", created.id, created.email)
        return created

    def update_fields(self, user_id: str, fields: dict[str, Any]) -> User | None:
        update_data = {
            _USER_COLUMNS[name]: _serialize_value(value)
            for name, value in fields.items()
            if name in _USER_COLUMNS
        }
        result = run_query(
            "update_user",
            lambda: self._client.table(self.TABLE_NAME)
            .update(update_data)
            .eq("id", user_id)
            .execute(),
        )
        row = first_row(result.data)
        return _row_to_user(row) if row else None


class SupabasePendingRegistrationRepository(PendingRegistrationRepository):
    TABLE_NAME = "pending_registrations"

    def __init__(self, client: Client):
        self._client = client

    def get(self, email: str) -> PendingRegistration | None:
        result = run_query(
            "get_pending_registration",
            lambda: self._client.table(self.TABLE_NAME)
            .select("*")
            .eq("email", email)
            .limit(1)
            .execute(),
        )
        row = first_row(result.data)
        return _row_to_pending(row) if row else None

    def upsert(self, pending: PendingRegistration) -> PendingRegistration:
        data = {
            "email": pending.email,
            "username": pending.username,
            "password_hash": pending.password_hash,
            "otp": pending.otp,
            "otp_expires_at": isoformat(pending.otp_expires_at),
            "created_at": isoformat(pending.created_at or now_utc()),
        }
        run_query(
            "upsert_pending_registration",
            lambda: self._client.table(self.TABLE_NAME)
            .upsert(data, on_conflict="email")
            .execute(),
        )
        return pending

    def promote(self, email: str) -> User | None:
        result = run_query(
            "promote_pending_registration",
            lambda: self._client.rpc(
                "promote_pending_registration",
                {"p_email": email, "p_now": now_utc().isoformat()},
            ).execute(),
        )
        row = first_row(result.data)
        if not row:
            logger.debug("No pending registration to promote for %s", email)
            return None
        return _row_to_user(row)

    def delete(self, email: str) -> None:
        run_query(
            "delete_pending_registration",
            lambda: self._client.table(self.TABLE_NAME)
            .delete()
            .eq("email", email)
            .execute(),
        )
