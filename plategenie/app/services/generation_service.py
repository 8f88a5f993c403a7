# plategenie/app/services/generation_service.py
"""
AI recipe generation.
Builds the prompt, calls the model once and keeps only well-formed candidates.
Saving a chosen candidate is a recipe store write (RecipeService.save_generated_recipe).
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from plategenie.app.domain.errors import UpstreamError, UpstreamFormatError, ValidationError
from plategenie.app.domain.models import GeneratedRecipeCandidate
from plategenie.services.prompt import build_recipe_prompt, contains_bengali
from plategenie.services.recipe_parser import parse_candidates

logger = logging.getLogger(__name__)


class TextCompleter(Protocol):
    def generate_content(self, prompt: str) -> str: ...


class GenerationService:
    def __init__(self, completer: TextCompleter, strict: bool = True):
        self._completer = completer
        self.strict = strict

    def generate_plan(self, ingredients: Optional[Sequence[str]]) -> list[GeneratedRecipeCandidate]:
        """
        Ask the model for recipes that use only `ingredients`.

        Args:
            ingredients: Ingredient names as typed by the user

        Returns:
            The candidates that passed validation; may be empty

        Raises:
            ValidationError: No ingredients given
            UpstreamFormatError: The response held no parsable JSON array
            UpstreamError: The model call itself failed
        """
        cleaned = [str(item).strip() for item in (ingredients or []) if item and str(item).strip()]
        if not cleaned:
            raise ValidationError("No ingredients provided", field="ingredients")

        prompt = build_recipe_prompt(cleaned)
        try:
            raw = self._completer.generate_content(prompt)
        except Exception as error:
            logger.exception("Recipe generation call failed")
            raise UpstreamError(f"Failed to generate recipes: {error}") from error

        try:
            candidates = parse_candidates(raw, strict=self.strict)
        except UpstreamFormatError as error:
            logger.warning("Unparsable model response: %s | excerpt=%r", error.reason, error.raw_excerpt)
            raise

        logger.info(
            "Generated recipes: ingredients=%d, bengali=%s, kept=%d",
            len(cleaned),
            contains_bengali(" ".join(cleaned)),
            len(candidates),
        )
        return candidates
