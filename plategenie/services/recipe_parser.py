"""
Turns raw language-model text into recipe candidates.

The model is asked for a bare JSON array but often wraps it in code fences or
prose, so extraction only looks for the outermost brackets. Entries that do not
satisfy the candidate predicate are dropped without error.
"""
from __future__ import annotations

import json
import re
from typing import Any

from plategenie.app.domain.errors import UpstreamFormatError
from plategenie.app.domain.models import GeneratedRecipeCandidate

CODE_FENCE_PATTERN = re.compile(r"```json|```")
_EXCERPT_CHARS = 200


def strip_code_fences(raw: str) -> str:
    return CODE_FENCE_PATTERN.sub("", raw).strip()


def extract_json_array(raw: str) -> list[Any]:
    """
    Slice from the first "[" (or the start, when there is none) to the last "]"
    and parse it.

    Raises:
        UpstreamFormatError: If the slice is not JSON or not an array
    """
    text = strip_code_fences(raw or "")
    start = max(text.find("["), 0)
    end = min(text.rfind("]") + 1, len(text))
    payload = text[start:end]

    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError as error:
        raise UpstreamFormatError(str(error), text[:_EXCERPT_CHARS]) from error

    if not isinstance(parsed, list):
        raise UpstreamFormatError(f"expected an array, got {type(parsed).__name__}", text[:_EXCERPT_CHARS])
    return parsed


def _is_instructions(value: Any) -> bool:
    """Instructions are either one block of text or a list of step strings."""
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, list):
        return bool(value) and all(isinstance(step, str) for step in value)
    return False


def is_valid_candidate(item: Any, strict: bool = True) -> bool:
    if not isinstance(item, dict):
        return False
    ingredients = item.get("ingredients")
    if not item.get("name"):
        return False
    if not isinstance(ingredients, list) or not ingredients:
        return False
    if not _is_instructions(item.get("instructions")):
        return False
    if strict:
        return isinstance(item.get("cookingTime"), str) and isinstance(item.get("difficulty"), str)
    return True


def _to_candidate(item: dict[str, Any]) -> GeneratedRecipeCandidate:
    cooking_time = item.get("cookingTime")
    difficulty = item.get("difficulty")
    return GeneratedRecipeCandidate(
        name=str(item["name"]),
        ingredients=[str(ingredient) for ingredient in item["ingredients"]],
        instructions=item["instructions"],
        cooking_time=cooking_time if isinstance(cooking_time, str) else None,
        difficulty=difficulty if isinstance(difficulty, str) else None,
    )


def parse_candidates(raw: str, strict: bool = True) -> list[GeneratedRecipeCandidate]:
    entries = extract_json_array(raw)
    return [_to_candidate(item) for item in entries if is_valid_candidate(item, strict)]
