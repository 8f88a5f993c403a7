# plategenie/app/domain/models.py
"""
Domain models for users, pending registrations and recipes.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union

ANONYMOUS_USERNAME = "Anonymous User"
DEFAULT_AVATAR_URL = (
    "https://static.vecteezy.com/system/resources/thumbnails/009/292/244/"
    "small_2x/default-avatar-icon-of-social-media-user-vector.jpg"
)
NOT_APPLICABLE = "N/A"

Instructions = Union[str, list[str]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecipeOrigin(str, Enum):
    """Marks whether a recipe was typed in by its owner or saved from generation."""
    CREATED = "created"
    SAVED = "saved"


@dataclass
class PendingRegistration:
    """
    A registration waiting for its one-time code.
    There is at most one per email; registering again replaces it.
    """
    username: str
    email: str
    password_hash: str
    otp: str
    otp_expires_at: datetime
    created_at: Optional[datetime] = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.otp_expires_at < (now or utc_now())

    def matches(self, code: str, now: Optional[datetime] = None) -> bool:
        """True only for the stored code before its expiry."""
        return self.otp == code and not self.is_expired(now)


@dataclass
class User:
    id: str
    username: str
    email: str
    password_hash: Optional[str] = None
    is_verified: bool = False
    google_id: Optional[str] = None
    profile_picture: Optional[str] = None
    bio: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    def public_view(self, include_bio: bool = False) -> dict[str, Any]:
        view: dict[str, Any] = {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "profilePicture": self.profile_picture or None,
        }
        if include_bio:
            view["bio"] = self.bio or None
        return view


@dataclass
class Comment:
    id: str
    user_id: str
    comment_text: str
    username: str = ANONYMOUS_USERNAME
    user_profile_picture: str = DEFAULT_AVATAR_URL
    created_at: Optional[datetime] = None


@dataclass
class Recipe:
    """
    A recipe owned by one user.
    `likes` holds user ids without duplicates; `comments` keeps insertion order.
    """
    id: str
    user_id: str
    title: str
    description: str
    type: RecipeOrigin = RecipeOrigin.CREATED
    image_url: str = ""

    # Present on recipes saved from the generation pipeline
    ingredients: Optional[list[str]] = None
    instructions: Optional[Instructions] = None
    cooking_time: Optional[str] = None
    difficulty: Optional[str] = None

    likes: list[str] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_owned_by(self, user_id: str) -> bool:
        return str(self.user_id) == str(user_id)

    def find_comment(self, comment_id: str) -> Optional[Comment]:
        for comment in self.comments:
            if comment.id == comment_id:
                return comment
        return None


@dataclass
class GeneratedRecipeCandidate:
    """A recipe proposed by the language model, before it is saved."""
    name: str
    ingredients: list[str]
    instructions: Instructions
    cooking_time: Optional[str] = None
    difficulty: Optional[str] = None


@dataclass
class FederatedIdentity:
    """Verified claims taken from an identity provider's ID token."""
    subject_id: str
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None
