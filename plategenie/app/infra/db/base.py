# plategenie/app/infra/db/base.py
"""
Abstract repositories over the document store.
This interface allows swapping the Supabase backend for fakes in tests.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from plategenie.app.domain.models import (
    Comment,
    PendingRegistration,
    Recipe,
    RecipeOrigin,
    User,
)


class UserRepository(ABC):
    """
    Durable, verified identities.

    Implementations:
    - SupabaseUserRepository: `users` table
    """

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def create(self, user: User) -> User:
        """
        Insert a new user.

        Args:
            user: The user to store; `id` may be empty and is then assigned

        Returns:
            The stored user with its id
        """
        pass

    @abstractmethod
    def update_fields(self, user_id: str, fields: dict[str, Any]) -> Optional[User]:
        """
        Set the given fields on one user.

        Returns:
            The updated user, or None if no user matched
        """
        pass


class PendingRegistrationRepository(ABC):
    """
    Registrations waiting for OTP verification, keyed by email.

    Implementations:
    - SupabasePendingRegistrationRepository: `pending_registrations` table
    """

    @abstractmethod
    def get(self, email: str) -> Optional[PendingRegistration]:
        pass

    @abstractmethod
    def upsert(self, pending: PendingRegistration) -> PendingRegistration:
        """Store the pending registration, replacing any earlier one for the email."""
        pass

    @abstractmethod
    def promote(self, email: str) -> Optional[User]:
        """
        Turn the pending registration into a verified user.
        Inserting the user and deleting the pending record happen as one
        store operation.

        Returns:
            The created user, or None if no pending record existed
        """
        pass

    @abstractmethod
    def delete(self, email: str) -> None:
        """Drop the pending registration for the email, if any."""
        pass


class RecipeRepository(ABC):
    """
    Recipe documents with their likes and comments.

    Implementations:
    - SupabaseRecipeRepository: `recipes` table plus Postgres functions for
      the array mutations
    """

    @abstractmethod
    def insert(self, recipe: Recipe) -> Recipe:
        pass

    @abstractmethod
    def list_by_owner(
        self,
        owner_id: str,
        origin: Optional[RecipeOrigin] = None,
    ) -> list[Recipe]:
        pass

    @abstractmethod
    def get(self, recipe_id: str) -> Optional[Recipe]:
        pass

    @abstractmethod
    def update_fields(self, recipe_id: str, fields: dict[str, Any]) -> Optional[Recipe]:
        pass

    @abstractmethod
    def delete(self, recipe_id: str) -> bool:
        """Returns True if a recipe was deleted."""
        pass

    @abstractmethod
    def toggle_like(self, recipe_id: str, user_id: str) -> Optional[Recipe]:
        """
        Remove the user from the likers if present, add them otherwise.

        Returns:
            The updated recipe, or None if the recipe does not exist
        """
        pass

    @abstractmethod
    def push_comment(self, recipe_id: str, comment: Comment) -> Optional[Recipe]:
        pass

    @abstractmethod
    def update_comment(
        self,
        recipe_id: str,
        comment_id: str,
        author_id: str,
        comment_text: str,
    ) -> Optional[Recipe]:
        """
        Replace the text of a comment written by `author_id`.

        Returns:
            The updated recipe, or None if no such comment by that author exists
        """
        pass

    @abstractmethod
    def pull_comment(
        self,
        recipe_id: str,
        comment_id: str,
        author_id: str,
    ) -> Optional[Recipe]:
        """
        Remove a comment written by `author_id`.

        Returns:
            The updated recipe, or None if no such comment by that author exists
        """
        pass
