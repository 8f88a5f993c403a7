# plategenie/app/deps.py (singletons and service wiring exposed as dependencies)

from __future__ import annotations

import logging
from datetime import timedelta

from fastapi import Depends, HTTPException, status
from supabase import Client

from plategenie.app.config import Settings, get_settings
from plategenie.app.domain.errors import (
    AuthError,
    ConflictError,
    InvalidCodeError,
    NotFoundError,
    OwnershipError,
    PlateGenieError,
    UnverifiedAccountError,
    ValidationError,
)
from plategenie.app.infra.db.base import (
    PendingRegistrationRepository,
    RecipeRepository,
    UserRepository,
)
from plategenie.app.infra.db.supabase_common import create_supabase_client
from plategenie.app.infra.db.supabase_recipes_repo import SupabaseRecipeRepository
from plategenie.app.infra.db.supabase_users_repo import (
    SupabasePendingRegistrationRepository,
    SupabaseUserRepository,
)
from plategenie.app.infra.identity.google_provider import GoogleIdentityProvider
from plategenie.app.infra.mail.smtp_sender import SmtpMailSender
from plategenie.app.services.generation_service import GenerationService
from plategenie.app.services.recipe_service import RecipeService
from plategenie.app.services.registration_service import RegistrationService
from plategenie.services.errors import GeminiConfigurationError
from plategenie.services.gemini_client import GeminiClient
from plategenie.services.passwords import PasswordHasher

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error."

_client: Client | None = None


def get_supabase() -> Client:
    global _client
    if _client is None:
        settings = get_settings()
        _client = create_supabase_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    return _client


def get_user_repository(supa: Client = Depends(get_supabase)) -> UserRepository:
    return SupabaseUserRepository(supa)


def get_pending_repository(supa: Client = Depends(get_supabase)) -> PendingRegistrationRepository:
    return SupabasePendingRegistrationRepository(supa)


def get_recipe_repository(supa: Client = Depends(get_supabase)) -> RecipeRepository:
    return SupabaseRecipeRepository(supa)


def get_registration_service(
    users: UserRepository = Depends(get_user_repository),
    pending: PendingRegistrationRepository = Depends(get_pending_repository),
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    mailer = SmtpMailSender(
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        sender=settings.MAIL_FROM,
        username=settings.SMTP_USERNAME or None,
        password=settings.SMTP_PASSWORD.get_secret_value() or None,
        use_tls=settings.SMTP_USE_TLS,
    )
    identity = GoogleIdentityProvider(
        client_id=settings.GOOGLE_CLIENT_ID,
        client_secret=settings.GOOGLE_CLIENT_SECRET.get_secret_value(),
        redirect_uri=settings.GOOGLE_REDIRECT_URI,
    )
    return RegistrationService(
        users=users,
        pending=pending,
        hasher=PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
        mailer=mailer,
        identity=identity,
        otp_ttl=timedelta(minutes=settings.OTP_TTL_MINUTES),
    )


def get_recipe_service(repo: RecipeRepository = Depends(get_recipe_repository)) -> RecipeService:
    return RecipeService(repo)


def get_generation_service(settings: Settings = Depends(get_settings)) -> GenerationService:
    try:
        completer = GeminiClient(
            api_key=settings.GEMINI_API_KEY.get_secret_value(),
            model_name=settings.GEMINI_MODEL,
        )
    except GeminiConfigurationError as exc:
        logger.error("Recipe generation unavailable: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Recipe generation is not configured.",
        )
    return GenerationService(completer, strict=settings.STRICT_CANDIDATE_VALIDATION)


def http_error_from(exc: PlateGenieError) -> HTTPException:
    """Status code for each error kind; server-side kinds keep their details in the log."""
    if isinstance(exc, (ValidationError, InvalidCodeError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, (UnverifiedAccountError, OwnershipError)):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, AuthError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))

    logger.error("%s: %s", type(exc).__name__, exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SERVER_ERROR_MESSAGE)
