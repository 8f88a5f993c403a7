from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


# Request fields are optional; the services report missing values.
class RegisterRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class VerifyOtpRequest(BaseModel):
    email: Optional[str] = None
    otp: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class GoogleLoginRequest(BaseModel):
    code: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    userId: Optional[str] = None
    username: Optional[str] = None
    profilePicture: Optional[str] = None
    bio: Optional[str] = None


class UserPublic(BaseModel):
    id: str
    username: str
    email: str
    profilePicture: Optional[str] = None
    bio: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class AuthResponse(BaseModel):
    message: str
    user: UserPublic
