# plategenie/app/services/recipe_service.py
"""
Recipe record operations: CRUD, saving generated recipes, likes and comments.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence
from uuid import uuid4

from plategenie.app.domain.errors import NotFoundError, OwnershipError, ValidationError
from plategenie.app.domain.models import (
    ANONYMOUS_USERNAME,
    DEFAULT_AVATAR_URL,
    NOT_APPLICABLE,
    Comment,
    Recipe,
    RecipeOrigin,
    utc_now,
)
from plategenie.app.infra.db.base import RecipeRepository
from plategenie.services.ids import normalize_id

logger = logging.getLogger(__name__)

RECIPE_NOT_FOUND_MESSAGE = "Recipe not found."


def _instructions_text(instructions: Any) -> str:
    if isinstance(instructions, (list, tuple)):
        return "\n".join(str(step) for step in instructions)
    return str(instructions)


class RecipeService:
    def __init__(self, repository: RecipeRepository):
        self._repo = repository

    def _recipe_id(self, recipe_id: Optional[str]) -> str:
        normalized = normalize_id(recipe_id)
        if normalized is None:
            raise NotFoundError(RECIPE_NOT_FOUND_MESSAGE)
        return normalized

    def create_recipe(
        self,
        owner_id: Optional[str],
        title: Optional[str],
        description: Optional[str],
        image_url: Optional[str] = None,
    ) -> Recipe:
        if not owner_id or not title or not description:
            raise ValidationError("Missing required recipe fields: userId, title, description.")

        now = utc_now()
        recipe = self._repo.insert(
            Recipe(
                id=str(uuid4()),
                user_id=str(owner_id),
                title=title,
                description=description,
                type=RecipeOrigin.CREATED,
                image_url=image_url or "",
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Recipe created: id=%s, owner=%s", recipe.id, recipe.user_id)
        return recipe

    def save_generated_recipe(
        self,
        user_id: Optional[str],
        name: Optional[str],
        ingredients: Optional[Sequence[str]],
        instructions: Any,
        cooking_time: Optional[str] = None,
        difficulty: Optional[str] = None,
    ) -> Recipe:
        """Store a generated candidate as a `saved` recipe owned by `user_id`."""
        if not user_id or not name or not ingredients or not instructions:
            raise ValidationError("Missing required recipe fields for saving.")

        now = utc_now()
        recipe = self._repo.insert(
            Recipe(
                id=str(uuid4()),
                user_id=str(user_id),
                title=name,
                description=_instructions_text(instructions),
                type=RecipeOrigin.SAVED,
                ingredients=list(ingredients),
                instructions=instructions,
                cooking_time=cooking_time or NOT_APPLICABLE,
                difficulty=difficulty or NOT_APPLICABLE,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Generated recipe saved: id=%s, owner=%s", recipe.id, recipe.user_id)
        return recipe

    def list_by_owner(
        self,
        owner_id: Optional[str],
        origin: Optional[RecipeOrigin] = None,
    ) -> list[Recipe]:
        if not owner_id:
            raise ValidationError("User ID is required.", field="userId")
        return self._repo.list_by_owner(str(owner_id), origin)

    def get_recipe(self, recipe_id: Optional[str]) -> Recipe:
        recipe = self._repo.get(self._recipe_id(recipe_id))
        if recipe is None:
            raise NotFoundError(RECIPE_NOT_FOUND_MESSAGE)
        return recipe

    def update_recipe(
        self,
        recipe_id: Optional[str],
        caller_id: Optional[str],
        title: Optional[str],
        description: Optional[str],
        image_url: Optional[str] = None,
    ) -> Recipe:
        """
        Overwrite title and description (and the image when a new one is given).
        Only the owner may update; likes and comments are left untouched.
        """
        if not caller_id or not title or not description:
            raise ValidationError("Missing required fields for recipe update (userId, title, description).")

        existing = self.get_recipe(recipe_id)
        if not existing.is_owned_by(caller_id):
            raise OwnershipError("You are not authorized to update this recipe.")

        updated = self._repo.update_fields(
            existing.id,
            {
                "title": title,
                "description": description,
                "image_url": image_url or existing.image_url,
                "updated_at": utc_now(),
            },
        )
        if updated is None:
            raise NotFoundError(RECIPE_NOT_FOUND_MESSAGE)

        logger.info("Recipe updated: id=%s", updated.id)
        return updated

    def delete_recipe(self, recipe_id: Optional[str], caller_id: Optional[str] = None) -> None:
        """
        Delete a recipe. When `caller_id` is given it must be the owner; without
        it the delete is unconditional.
        """
        normalized = self._recipe_id(recipe_id)

        if caller_id:
            existing = self.get_recipe(normalized)
            if not existing.is_owned_by(caller_id):
                raise OwnershipError("You are not authorized to delete this recipe.")

        if not self._repo.delete(normalized):
            raise NotFoundError(RECIPE_NOT_FOUND_MESSAGE)

        logger.info("Recipe deleted: id=%s, by=%s", normalized, caller_id or "-")

    def toggle_like(self, recipe_id: Optional[str], user_id: Optional[str]) -> Recipe:
        if not user_id:
            raise ValidationError("User ID is required to like a recipe.", field="userId")

        recipe = self._repo.toggle_like(self._recipe_id(recipe_id), str(user_id))
        if recipe is None:
            raise NotFoundError(RECIPE_NOT_FOUND_MESSAGE)
        return recipe

    def add_comment(
        self,
        recipe_id: Optional[str],
        author_id: Optional[str],
        text: Optional[str],
        display_name: Optional[str] = None,
        picture: Optional[str] = None,
    ) -> Recipe:
        if not author_id or not text:
            raise ValidationError("User ID and comment text are required.")

        comment = Comment(
            id=str(uuid4()),
            user_id=str(author_id),
            comment_text=text,
            username=display_name or ANONYMOUS_USERNAME,
            user_profile_picture=picture or DEFAULT_AVATAR_URL,
            created_at=utc_now(),
        )
        recipe = self._repo.push_comment(self._recipe_id(recipe_id), comment)
        if recipe is None:
            raise NotFoundError(RECIPE_NOT_FOUND_MESSAGE)

        logger.info("Comment added: recipe=%s, comment=%s", recipe.id, comment.id)
        return recipe

    def edit_comment(
        self,
        recipe_id: Optional[str],
        comment_id: Optional[str],
        caller_id: Optional[str],
        text: Optional[str],
    ) -> Recipe:
        if not caller_id or not text:
            raise ValidationError("User ID and new comment text are required.")

        normalized_recipe = normalize_id(recipe_id)
        if normalized_recipe is None or not comment_id:
            raise OwnershipError("Not authorized to edit this comment.")

        recipe = self._repo.update_comment(normalized_recipe, str(comment_id), str(caller_id), text)
        if recipe is None:
            raise OwnershipError("Not authorized to edit this comment.")
        return recipe

    def delete_comment(
        self,
        recipe_id: Optional[str],
        comment_id: Optional[str],
        caller_id: Optional[str],
    ) -> Recipe:
        if not caller_id:
            raise ValidationError("User ID is required.", field="userId")

        normalized_recipe = normalize_id(recipe_id)
        if normalized_recipe is None or not comment_id:
            raise OwnershipError("Not authorized to delete this comment.")

        recipe = self._repo.pull_comment(normalized_recipe, str(comment_id), str(caller_id))
        if recipe is None:
            raise OwnershipError("Not authorized to delete this comment.")

        logger.info("Comment deleted: recipe=%s, comment=%s", recipe.id, comment_id)
        return recipe
