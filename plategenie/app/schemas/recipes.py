from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

RecipeType = Literal["created", "saved"]


class RecipeCreateRequest(BaseModel):
    userId: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    imageUrl: Optional[str] = None


class RecipeUpdateRequest(BaseModel):
    userId: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    imageUrl: Optional[str] = None


class LikeRequest(BaseModel):
    userId: Optional[str] = None


class CommentCreateRequest(BaseModel):
    userId: Optional[str] = None
    commentText: Optional[str] = None
    username: Optional[str] = None
    userProfilePicture: Optional[str] = None


class CommentUpdateRequest(BaseModel):
    userId: Optional[str] = None
    commentText: Optional[str] = None


class CommentDeleteRequest(BaseModel):
    userId: Optional[str] = None


class CommentResponse(BaseModel):
    id: str
    userId: str
    username: str
    userProfilePicture: str
    commentText: str
    createdAt: Optional[datetime] = None


class RecipeResponse(BaseModel):
    id: str
    userId: str
    title: str
    description: str
    imageUrl: str = ""
    type: RecipeType = "created"
    ingredients: Optional[list[str]] = None
    instructions: Optional[Union[str, list[str]]] = None
    cookingTime: Optional[str] = None
    difficulty: Optional[str] = None
    likes: list[str] = Field(default_factory=list)
    comments: list[CommentResponse] = Field(default_factory=list)
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class RecipeCreatedResponse(BaseModel):
    message: str
    recipeId: str
    recipe: RecipeResponse


class RecipeUpdatedResponse(BaseModel):
    message: str
    recipe: RecipeResponse
