# plategenie/app/routers/generation.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from plategenie.app.deps import (
    SERVER_ERROR_MESSAGE,
    get_generation_service,
    get_recipe_service,
    http_error_from,
)
from plategenie.app.domain.errors import PlateGenieError, UpstreamError
from plategenie.app.routers.recipes import _recipe_response
from plategenie.app.schemas.generation import (
    GeneratedRecipe,
    GeneratePlanRequest,
    SavedRecipeResponse,
    SaveGeneratedRequest,
)
from plategenie.app.services.generation_service import GenerationService
from plategenie.app.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["generation"])

GENERATION_FAILED_MESSAGE = "Failed to generate recipes. Please try again with different ingredients."


@router.post("/generate-plan", response_model=list[GeneratedRecipe])
def generate_plan(
    payload: GeneratePlanRequest,
    service: GenerationService = Depends(get_generation_service),
) -> list[GeneratedRecipe]:
    try:
        candidates = service.generate_plan(payload.ingredients)
        return [
            GeneratedRecipe(
                name=candidate.name,
                ingredients=candidate.ingredients,
                instructions=candidate.instructions,
                cookingTime=candidate.cooking_time,
                difficulty=candidate.difficulty,
            )
            for candidate in candidates
        ]
    except UpstreamError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=GENERATION_FAILED_MESSAGE)
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        logger.exception("Unexpected error while generating recipes")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=GENERATION_FAILED_MESSAGE)


@router.post("/save", response_model=SavedRecipeResponse, status_code=status.HTTP_201_CREATED)
def save_generated_recipe(
    payload: SaveGeneratedRequest,
    service: RecipeService = Depends(get_recipe_service),
) -> SavedRecipeResponse:
    try:
        recipe = service.save_generated_recipe(
            payload.userId,
            payload.name,
            payload.ingredients,
            payload.instructions,
            cooking_time=payload.cookingTime,
            difficulty=payload.difficulty,
        )
    except PlateGenieError as exc:
        raise http_error_from(exc) from exc
    except Exception:
        logger.exception("Unexpected error while saving generated recipe")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SERVER_ERROR_MESSAGE)

    return SavedRecipeResponse(
        message="Recipe saved successfully!",
        recipeId=recipe.id,
        savedRecipe=_recipe_response(recipe),
    )
