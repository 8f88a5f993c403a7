from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

from supabase import Client

from plategenie.app.domain.models import (
    ANONYMOUS_USERNAME,
    DEFAULT_AVATAR_URL,
    Comment,
    Recipe,
    RecipeOrigin,
)
from plategenie.app.infra.db.base import RecipeRepository
from plategenie.app.infra.db.supabase_common import (
    first_row,
    isoformat,
    now_utc,
    parse_datetime,
    run_query,
    safe_str,
)

logger = logging.getLogger(__name__)

_RECIPE_COLUMNS = {
    "title": "title",
    "description": "description",
    "image_url": "image_url",
    "ingredients": "ingredients",
    "instructions": "instructions",
    "cooking_time": "cooking_time",
    "difficulty": "difficulty",
    "updated_at": "updated_at",
}


def _row_to_comment(row: dict[str, Any]) -> Comment:
    return Comment(
        id=str(row["id"]),
        user_id=str(row.get("user_id") or ""),
        comment_text=str(row.get("comment_text") or ""),
        username=str(row.get("username") or ANONYMOUS_USERNAME),
        user_profile_picture=str(row.get("user_profile_picture") or DEFAULT_AVATAR_URL),
        created_at=parse_datetime(row.get("created_at")),
    )


def _comment_to_json(comment: Comment) -> dict[str, Any]:
    return {
        "id": comment.id,
        "user_id": comment.user_id,
        "username": comment.username,
        "user_profile_picture": comment.user_profile_picture,
        "comment_text": comment.comment_text,
        "created_at": isoformat(comment.created_at or now_utc()),
    }


def _row_to_recipe(row: dict[str, Any]) -> Recipe:
    comments = row.get("comments") or []
    return Recipe(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        type=RecipeOrigin(str(row.get("type") or RecipeOrigin.CREATED.value)),
        image_url=str(row.get("image_url") or ""),
        ingredients=row.get("ingredients"),
        instructions=row.get("instructions"),
        cooking_time=safe_str(row.get("cooking_time")),
        difficulty=safe_str(row.get("difficulty")),
        likes=[str(user_id) for user_id in (row.get("likes") or [])],
        comments=[_row_to_comment(item) for item in comments if isinstance(item, dict)],
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )


def _recipe_to_row(recipe: Recipe) -> dict[str, Any]:
    now = now_utc()
    return {
        "id": recipe.id or str(uuid4()),
        "user_id": recipe.user_id,
        "title": recipe.title,
        "description": recipe.description,
        "type": recipe.type.value,
        "image_url": recipe.image_url,
        "ingredients": recipe.ingredients,
        "instructions": recipe.instructions,
        "cooking_time": recipe.cooking_time,
        "difficulty": recipe.difficulty,
        "likes": list(recipe.likes),
        "comments": [_comment_to_json(comment) for comment in recipe.comments],
        "created_at": isoformat(recipe.created_at or now),
        "updated_at": isoformat(recipe.updated_at or now),
    }


class SupabaseRecipeRepository(RecipeRepository):
    """
    Recipes live in one table; `likes` is a text[] and `comments` a jsonb array.
    Array mutations go through Postgres functions (see supabase/schema.sql) so
    each one is a single atomic statement.
    """

    TABLE_NAME = "recipes"

    def __init__(self, client: Client):
        self._client = client

    def insert(self, recipe: Recipe) -> Recipe:
        data = _recipe_to_row(recipe)
        result = run_query(
            "insert_recipe",
            lambda: self._client.table(self.TABLE_NAME).insert(data).execute(),
        )
        row = first_row(result.data) or data
        stored = _row_to_recipe(row)
        logger.info("Inserted recipe: id=%s, owner=%s, type=%s", stored.id, stored.user_id, stored.type.value)
        return stored

    def list_by_owner(
        self,
        owner_id: str,
        origin: RecipeOrigin | None = None,
    ) -> list[Recipe]:
        def query():
            builder = self._client.table(self.TABLE_NAME).select("*").eq("user_id", owner_id)
            if origin is not None:
                builder = builder.eq("type", origin.value)
            return builder.execute()

        result = run_query("list_recipes", query)
        return [_row_to_recipe(row) for row in (result.data or [])]

    def get(self, recipe_id: str) -> Recipe | None:
        result = run_query(
            "get_recipe",
            lambda: self._client.table(self.TABLE_NAME)
            .select("*")
            .eq("id", recipe_id)
            .limit(1)
            .execute(),
        )
        row = first_row(result.data)
        return _row_to_recipe(row) if row else None

    def update_fields(self, recipe_id: str, fields: dict[str, Any]) -> Recipe | None:
        update_data = {
            _RECIPE_COLUMNS[name]: value.isoformat() if hasattr(value, "isoformat") else value
            for name, value in fields.items()
            if name in _RECIPE_COLUMNS
        }
        result = run_query(
            "update_recipe",
            lambda: self._client.table(self.TABLE_NAME)
            .update(update_data)
            .eq("id", recipe_id)
            .execute(),
        )
        row = first_row(result.data)
        return _row_to_recipe(row) if row else None

    def delete(self, recipe_id: str) -> bool:
        result = run_query(
            "delete_recipe",
            lambda: self._client.table(self.TABLE_NAME).delete().eq("id", recipe_id).execute(),
        )
        return bool(result.data)

    def toggle_like(self, recipe_id: str, user_id: str) -> Recipe | None:
        return self._call_recipe_function(
            "toggle_recipe_like",
            {"p_recipe_id": recipe_id, "p_user_id": user_id},
        )

    def push_comment(self, recipe_id: str, comment: Comment) -> Recipe | None:
        return self._call_recipe_function(
            "append_recipe_comment",
            {"p_recipe_id": recipe_id, "p_comment": _comment_to_json(comment)},
        )

    def update_comment(
        self,
        recipe_id: str,
        comment_id: str,
        author_id: str,
        comment_text: str,
    ) -> Recipe | None:
        return self._call_recipe_function(
            "update_recipe_comment",
            {
                "p_recipe_id": recipe_id,
                "p_comment_id": comment_id,
                "p_user_id": author_id,
                "p_comment_text": comment_text,
            },
        )

    def pull_comment(
        self,
        recipe_id: str,
        comment_id: str,
        author_id: str,
    ) -> Recipe | None:
        return self._call_recipe_function(
            "remove_recipe_comment",
            {
                "p_recipe_id": recipe_id,
                "p_comment_id": comment_id,
                "p_user_id": author_id,
            },
        )

    def _call_recipe_function(self, name: str, params: dict[str, Any]) -> Recipe | None:
        result = run_query(name, lambda: self._client.rpc(name, params).execute())
        row = first_row(result.data)
        return _row_to_recipe(row) if row else None
