from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel

from plategenie.app.schemas.recipes import RecipeResponse


class GeneratePlanRequest(BaseModel):
    ingredients: Optional[list[str]] = None


class GeneratedRecipe(BaseModel):
    name: str
    ingredients: list[str]
    instructions: Union[str, list[str]]
    cookingTime: Optional[str] = None
    difficulty: Optional[str] = None


class SaveGeneratedRequest(BaseModel):
    userId: Optional[str] = None
    name: Optional[str] = None
    ingredients: Optional[list[str]] = None
    instructions: Optional[Union[str, list[str]]] = None
    cookingTime: Optional[str] = None
    difficulty: Optional[str] = None


class SavedRecipeResponse(BaseModel):
    message: str
    recipeId: str
    savedRecipe: RecipeResponse
