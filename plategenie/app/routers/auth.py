# plategenie/app/routers/auth.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from plategenie.app.deps import SERVER_ERROR_MESSAGE, get_registration_service, http_error_from
from plategenie.app.domain.errors import PlateGenieError
from plategenie.app.domain.models import User
from plategenie.app.schemas.auth import (
    AuthResponse,
    GoogleLoginRequest,
    LoginRequest,
    MessageResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    UserPublic,
    VerifyOtpRequest,
)
from plategenie.app.services.registration_service import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


def _user_public(user: User, include_bio: bool = False) -> UserPublic:
    return UserPublic(**user.public_view(include_bio=include_bio))


def _server_error(action: str) -> HTTPException:
    logger.exception("Unexpected error during %s", action)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SERVER_ERROR_MESSAGE)


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse:
    try:
        service.register(payload.username, payload.email, payload.password)
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        raise _server_error("register")
    return MessageResponse(message="Registration successful! Please check your email for the OTP.")


@router.post("/verify-otp", response_model=AuthResponse)
def verify_otp(
    payload: VerifyOtpRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> AuthResponse:
    try:
        user = service.verify_otp(payload.email, payload.otp)
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        raise _server_error("verify-otp")
    return AuthResponse(
        message="OTP verified successfully. You are now logged in.",
        user=_user_public(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> AuthResponse:
    try:
        user = service.login(payload.email, payload.password)
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        raise _server_error("login")
    return AuthResponse(message="Login successful!", user=_user_public(user))


@router.post("/google-login", response_model=AuthResponse)
def google_login(
    payload: GoogleLoginRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> AuthResponse:
    try:
        user = service.federated_login(payload.code)
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        raise _server_error("google-login")
    return AuthResponse(message="Login successful!", user=_user_public(user))


@router.put("/users/profile", response_model=AuthResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> AuthResponse:
    try:
        user = service.update_profile(
            payload.userId,
            username=payload.username,
            profile_picture=payload.profilePicture,
            bio=payload.bio,
        )
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        raise _server_error("update-profile")
    return AuthResponse(
        message="Profile updated successfully!",
        user=_user_public(user, include_bio=True),
    )
