# plategenie/app/services/registration_service.py
"""
Registration and login.
Handles the pending-registration lifecycle (register, OTP verification),
password login, Google login and profile updates.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from plategenie.app.domain.errors import (
    AuthError,
    ConflictError,
    InvalidCodeError,
    NotFoundError,
    UnverifiedAccountError,
    ValidationError,
)
from plategenie.app.domain.models import PendingRegistration, User, utc_now
from plategenie.app.infra.db.base import PendingRegistrationRepository, UserRepository
from plategenie.app.infra.identity.base import IdentityProvider
from plategenie.app.infra.mail.base import MailSender
from plategenie.services.errors import IdentityProviderError
from plategenie.services.ids import normalize_id
from plategenie.services.otp import OTP_EMAIL_SUBJECT, generate_otp, render_otp_email
from plategenie.services.passwords import PasswordHasher

logger = logging.getLogger(__name__)

DEFAULT_OTP_TTL = timedelta(minutes=5)
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


def _require(**fields: Optional[str]) -> None:
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}.", field=missing[0])


class RegistrationService:
    """
    Per-email state machine: Unregistered -> Pending(code, expiry) -> Verified.

    A new registration replaces any pending one for the same email. Google login
    can create a verified user directly.
    """

    def __init__(
        self,
        users: UserRepository,
        pending: PendingRegistrationRepository,
        hasher: PasswordHasher,
        mailer: MailSender,
        identity: IdentityProvider,
        otp_ttl: timedelta = DEFAULT_OTP_TTL,
    ):
        self._users = users
        self._pending = pending
        self._hasher = hasher
        self._mailer = mailer
        self._identity = identity
        self.otp_ttl = otp_ttl

    def register(
        self,
        username: Optional[str],
        email: Optional[str],
        password: Optional[str],
        now: Optional[datetime] = None,
    ) -> PendingRegistration:
        """
        Start (or restart) a registration and email the one-time code.

        Raises:
            ValidationError: A field is missing
            ConflictError: The email already belongs to a user
            DeliveryError: The code could not be emailed; the pending record stays
        """
        _require(username=username, email=email, password=password)

        if self._users.get_by_email(email) is not None:
            raise ConflictError("User with this email already exists.")

        issued_at = now or utc_now()
        pending = PendingRegistration(
            username=username,
            email=email,
            password_hash=self._hasher.hash(password),
            otp=generate_otp(),
            otp_expires_at=issued_at + self.otp_ttl,
            created_at=issued_at,
        )
        self._pending.upsert(pending)
        logger.info("Pending registration stored: email=%s, expires_at=%s", email, pending.otp_expires_at.isoformat())

        minutes = int(self.otp_ttl.total_seconds() // 60)
        self._mailer.send(email, OTP_EMAIL_SUBJECT, render_otp_email(pending.otp, minutes))
        return pending

    def verify_otp(
        self,
        email: Optional[str],
        code: Optional[str],
        now: Optional[datetime] = None,
    ) -> User:
        """
        Consume a pending registration and create the verified user.

        Raises:
            ValidationError: Email or code missing
            NotFoundError: No pending registration (never registered, or already verified)
            InvalidCodeError: Wrong or expired code
        """
        _require(email=email, otp=code)

        pending = self._pending.get(email)
        if pending is None:
            raise NotFoundError("User not found or already verified.")

        if not pending.matches(str(code).strip(), now):
            logger.info("OTP rejected for %s", email)
            raise InvalidCodeError()

        user = self._pending.promote(email)
        if user is None:
            # Another request consumed the pending record between the read and the promotion
            raise NotFoundError("User not found or already verified.")

        logger.info("User verified: id=%s, email=%s", user.id, user.email)
        return user

    def login(self, email: Optional[str], password: Optional[str]) -> User:
        _require(email=email, password=password)

        user = self._users.get_by_email(email)
        if user is None:
            raise AuthError(INVALID_CREDENTIALS_MESSAGE)
        if not user.is_verified:
            raise UnverifiedAccountError()
        if not user.has_password or not self._hasher.verify(password, user.password_hash):
            raise AuthError(INVALID_CREDENTIALS_MESSAGE)

        logger.info("User logged in: id=%s", user.id)
        return user

    def federated_login(self, code: Optional[str]) -> User:
        """
        Log in with a Google authorization code.

        New emails get a verified user; an existing password user without a
        Google id gets the id and picture linked onto it.

        Raises:
            ValidationError: Code missing
            AuthError: The code exchange or the token verification failed
        """
        if not code:
            raise ValidationError("Authorization code is missing.", field="code")

        try:
            token = self._identity.exchange_code(code)
            identity = self._identity.verify_token(token)
        except IdentityProviderError as error:
            logger.warning("Google login failed: %s", error)
            raise AuthError(f"Authentication failed: {error}") from error

        user = self._users.get_by_email(identity.email)
        if user is None:
            user = self._users.create(
                User(
                    id="",
                    username=identity.name or identity.email.split("@")[0],
                    email=identity.email,
                    is_verified=True,
                    google_id=identity.subject_id,
                    profile_picture=identity.picture,
                )
            )
            self._pending.delete(identity.email)
            logger.info("User created from Google login: id=%s", user.id)
            return user

        if not user.google_id:
            updated = self._users.update_fields(
                user.id,
                {
                    "google_id": identity.subject_id,
                    "profile_picture": identity.picture,
                    "updated_at": utc_now(),
                },
            )
            if updated is not None:
                user = updated
            else:
                user.google_id = identity.subject_id
                user.profile_picture = identity.picture
            logger.info("Linked Google account to user: id=%s", user.id)

        return user

    def update_profile(
        self,
        user_id: Optional[str],
        username: Optional[str] = None,
        profile_picture: Optional[str] = None,
        bio: Optional[str] = None,
    ) -> User:
        if not user_id:
            raise ValidationError("User ID is required.", field="userId")

        changes = {
            name: value
            for name, value in (
                ("username", username),
                ("profile_picture", profile_picture),
                ("bio", bio),
            )
            if value
        }
        if not changes:
            raise ValidationError("No update data provided.")

        normalized_id = normalize_id(user_id)
        if normalized_id is None:
            raise NotFoundError("User not found.")

        changes["updated_at"] = utc_now()
        user = self._users.update_fields(normalized_id, changes)
        if user is None:
            raise NotFoundError("User not found.")

        logger.info("Profile updated: id=%s, fields=%s", user.id, sorted(changes))
        return user
