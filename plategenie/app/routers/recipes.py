# plategenie/app/routers/recipes.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from plategenie.app.deps import SERVER_ERROR_MESSAGE, get_recipe_service, http_error_from
from plategenie.app.domain.errors import PlateGenieError
from plategenie.app.domain.models import Recipe, RecipeOrigin
from plategenie.app.schemas.auth import MessageResponse
from plategenie.app.schemas.recipes import (
    CommentCreateRequest,
    CommentDeleteRequest,
    CommentResponse,
    CommentUpdateRequest,
    LikeRequest,
    RecipeCreatedResponse,
    RecipeCreateRequest,
    RecipeResponse,
    RecipeType,
    RecipeUpdatedResponse,
    RecipeUpdateRequest,
)
from plategenie.app.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


def _recipe_response(recipe: Recipe) -> RecipeResponse:
    return RecipeResponse(
        id=recipe.id,
        userId=recipe.user_id,
        title=recipe.title,
        description=recipe.description,
        imageUrl=recipe.image_url,
        type=recipe.type.value,
        ingredients=recipe.ingredients,
        instructions=recipe.instructions,
        cookingTime=recipe.cooking_time,
        difficulty=recipe.difficulty,
        likes=list(recipe.likes),
        comments=[
            CommentResponse(
                id=comment.id,
                userId=comment.user_id,
                username=comment.username,
                userProfilePicture=comment.user_profile_picture,
                commentText=comment.comment_text,
                createdAt=comment.created_at,
            )
            for comment in recipe.comments
        ],
        createdAt=recipe.created_at,
        updatedAt=recipe.updated_at,
    )


def _server_error(action: str) -> HTTPException:
    logger.exception("Unexpected error while %s", action)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SERVER_ERROR_MESSAGE)


@router.post("", response_model=RecipeCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    payload: RecipeCreateRequest,
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeCreatedResponse:
    try:
        recipe = service.create_recipe(payload.userId, payload.title, payload.description, payload.imageUrl)
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        raise _server_error("creating recipe")
    return RecipeCreatedResponse(
        message="Recipe created successfully!",
        recipeId=recipe.id,
        recipe=_recipe_response(recipe),
    )


@router.get("/user/{user_id}", response_model=list[RecipeResponse])
def list_user_recipes(
    user_id: str,
    recipe_type: Optional[RecipeType] = Query(default=None, alias="type"),
    service: RecipeService = Depends(get_recipe_service),
) -> list[RecipeResponse]:
    origin = RecipeOrigin(recipe_type) if recipe_type else None
    try:
        recipes = service.list_by_owner(user_id, origin)
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        raise _server_error("fetching recipes")
    return [_recipe_response(recipe) for recipe in recipes]


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    try:
        recipe = service.get_recipe(recipe_id)
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        raise _server_error("fetching recipe")
    return _recipe_response(recipe)


@router.put("/{recipe_id}", response_model=RecipeUpdatedResponse)
def update_recipe(
    recipe_id: str,
    payload: RecipeUpdateRequest,
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeUpdatedResponse:
    try:
        recipe = service.update_recipe(
            recipe_id,
            payload.userId,
            payload.title,
            payload.description,
            payload.imageUrl,
        )
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        raise _server_error("updating recipe")
    return RecipeUpdatedResponse(message="Recipe updated successfully!", recipe=_recipe_response(recipe))


@router.delete("/{recipe_id}", response_model=MessageResponse)
def delete_recipe(
    recipe_id: str,
    user_id: Optional[str] = Query(default=None, alias="userId"),
    service: RecipeService = Depends(get_recipe_service),
) -> MessageResponse:
    try:
        service.delete_recipe(recipe_id, caller_id=user_id)
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        raise _server_error("deleting recipe")
    return MessageResponse(message="Recipe deleted successfully.")


@router.post("/{recipe_id}/like", response_model=RecipeResponse)
def toggle_like(
    recipe_id: str,
    payload: LikeRequest,
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    try:
        recipe = service.toggle_like(recipe_id, payload.userId)
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        raise _server_error("toggling like status")
    return _recipe_response(recipe)


@router.post("/{recipe_id}/comments", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    recipe_id: str,
    payload: CommentCreateRequest,
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    try:
        recipe = service.add_comment(
            recipe_id,
            payload.userId,
            payload.commentText,
            display_name=payload.username,
            picture=payload.userProfilePicture,
        )
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        raise _server_error("adding comment")
    return _recipe_response(recipe)


@router.put("/{recipe_id}/comments/{comment_id}", response_model=RecipeResponse)
def edit_comment(
    recipe_id: str,
    comment_id: str,
    payload: CommentUpdateRequest,
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    try:
        recipe = service.edit_comment(recipe_id, comment_id, payload.userId, payload.commentText)
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        raise _server_error("editing comment")
    return _recipe_response(recipe)


@router.delete("/{recipe_id}/comments/{comment_id}", response_model=RecipeResponse)
def delete_comment(
    recipe_id: str,
    comment_id: str,
    payload: Optional[CommentDeleteRequest] = None,
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    try:
        recipe = service.delete_comment(recipe_id, comment_id, payload.userId if payload else None)
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        raise _server_error("deleting comment")
    return _recipe_response(recipe)
