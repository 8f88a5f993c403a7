from __future__ import annotations

import copy
from typing import Any, Optional
from uuid import uuid4

from plategenie.app.domain.errors import DeliveryError
from plategenie.app.domain.models import (
    Comment,
    FederatedIdentity,
    PendingRegistration,
    Recipe,
    RecipeOrigin,
    User,
    utc_now,
)
from plategenie.app.infra.db.base import (
    PendingRegistrationRepository,
    RecipeRepository,
    UserRepository,
)
from plategenie.app.infra.identity.base import IdentityProvider
from plategenie.app.infra.mail.base import MailSender


class UserRepositoryStub(UserRepository):
    def __init__(self) -> None:
        self.users: dict[str, User] = {}

    def get_by_email(self, email: str) -> Optional[User]:
        for user in self.users.values():
            if user.email == email:
                return copy.deepcopy(user)
        return None

    def create(self, user: User) -> User:
        stored = copy.deepcopy(user)
        stored.id = stored.id or str(uuid4())
        stored.created_at = stored.created_at or utc_now()
        self.users[stored.id] = stored
        return copy.deepcopy(stored)

    def update_fields(self, user_id: str, fields: dict[str, Any]) -> Optional[User]:
        user = self.users.get(user_id)
        if user is None:
            return None
        for name, value in fields.items():
            setattr(user, name, value)
        return copy.deepcopy(user)


class PendingRegistrationRepositoryStub(PendingRegistrationRepository):
    def __init__(self, users: UserRepositoryStub) -> None:
        self.users = users
        self.pending: dict[str, PendingRegistration] = {}
        self.promote_calls: list[str] = []

    def get(self, email: str) -> Optional[PendingRegistration]:
        pending = self.pending.get(email)
        return copy.deepcopy(pending) if pending else None

    def upsert(self, pending: PendingRegistration) -> PendingRegistration:
        self.pending[pending.email] = copy.deepcopy(pending)
        return pending

    def promote(self, email: str) -> Optional[User]:
        self.promote_calls.append(email)
        pending = self.pending.pop(email, None)
        if pending is None:
            return None
        return self.users.create(
            User(
                id="",
                username=pending.username,
                email=pending.email,
                password_hash=pending.password_hash,
                is_verified=True,
            )
        )

    def delete(self, email: str) -> None:
        self.pending.pop(email, None)


class RecipeRepositoryStub(RecipeRepository):
    def __init__(self) -> None:
        self.recipes: dict[str, Recipe] = {}

    def _copy(self, recipe_id: str) -> Optional[Recipe]:
        recipe = self.recipes.get(recipe_id)
        return copy.deepcopy(recipe) if recipe else None

    def insert(self, recipe: Recipe) -> Recipe:
        self.recipes[recipe.id] = copy.deepcopy(recipe)
        return copy.deepcopy(recipe)

    def list_by_owner(
        self,
        owner_id: str,
        origin: Optional[RecipeOrigin] = None,
    ) -> list[Recipe]:
        return [
            copy.deepcopy(recipe)
            for recipe in self.recipes.values()
            if recipe.user_id == owner_id and (origin is None or recipe.type == origin)
        ]

    def get(self, recipe_id: str) -> Optional[Recipe]:
        return self._copy(recipe_id)

    def update_fields(self, recipe_id: str, fields: dict[str, Any]) -> Optional[Recipe]:
        recipe = self.recipes.get(recipe_id)
        if recipe is None:
            return None
        for name, value in fields.items():
            setattr(recipe, name, value)
        return self._copy(recipe_id)

    def delete(self, recipe_id: str) -> bool:
        return self.recipes.pop(recipe_id, None) is not None

    def toggle_like(self, recipe_id: str, user_id: str) -> Optional[Recipe]:
        recipe = self.recipes.get(recipe_id)
        if recipe is None:
            return None
        if user_id in recipe.likes:
            recipe.likes.remove(user_id)
        else:
            recipe.likes.append(user_id)
        return self._copy(recipe_id)

    def push_comment(self, recipe_id: str, comment: Comment) -> Optional[Recipe]:
        recipe = self.recipes.get(recipe_id)
        if recipe is None:
            return None
        recipe.comments.append(copy.deepcopy(comment))
        return self._copy(recipe_id)

    def update_comment(
        self,
        recipe_id: str,
        comment_id: str,
        author_id: str,
        comment_text: str,
    ) -> Optional[Recipe]:
        recipe = self.recipes.get(recipe_id)
        if recipe is None:
            return None
        comment = recipe.find_comment(comment_id)
        if comment is None or comment.user_id != author_id:
            return None
        comment.comment_text = comment_text
        return self._copy(recipe_id)

    def pull_comment(
        self,
        recipe_id: str,
        comment_id: str,
        author_id: str,
    ) -> Optional[Recipe]:
        recipe = self.recipes.get(recipe_id)
        if recipe is None:
            return None
        comment = recipe.find_comment(comment_id)
        if comment is None or comment.user_id != author_id:
            return None
        recipe.comments.remove(comment)
        return self._copy(recipe_id)


class MailSenderStub(MailSender):
    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self.fail = False

    def send(self, to_address: str, subject: str, html_body: str) -> None:
        if self.fail:
            raise DeliveryError(to_address)
        self.sent.append((to_address, subject, html_body))


class IdentityProviderStub(IdentityProvider):
    def __init__(self, identity: Optional[FederatedIdentity] = None) -> None:
        self.identity = identity or FederatedIdentity(
            subject_id="google-sub-1",
            email="cook@example.com",
            name="Home Cook",
            picture="https://example.com/cook.png",
        )
        self.error: Optional[Exception] = None
        self.codes: list[str] = []

    def exchange_code(self, code: str) -> str:
        self.codes.append(code)
        if self.error is not None:
            raise self.error
        return f"id-token-for-{code}"

    def verify_token(self, id_token: str) -> FederatedIdentity:
        return self.identity


class CompleterStub:
    def __init__(self, response: str = "[]") -> None:
        self.response = response
        self.error: Optional[Exception] = None
        self.prompts: list[str] = []

    def generate_content(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response
