from __future__ import annotations

import re
from typing import Iterable

BENGALI_PATTERN = re.compile("[\u0980-\u09FF]")

_BENGALI_EXAMPLE = """
বাংলা ফরম্যাট উদাহরণ:
[
  {
    "name": "রেসিপির নাম",
    "ingredients": ["উপাদান ১", "উপাদান ২"],
    "instructions": "১. প্রথম ধাপ...\\n২. দ্বিতীয় ধাপ...",
    "cookingTime": "X মিনিট",
    "difficulty": "সহজ/মধ্যম/কঠিন"
  }
]"""

_ENGLISH_EXAMPLE = """
English Format Example:
[
  {
    "name": "Recipe Name",
    "ingredients": ["ingredient1", "ingredient2"],
    "instructions": "1. First step...\\n2. Second step...",
    "cookingTime": "X mins",
    "difficulty": "Easy/Medium/Hard"
  }
]"""

_PROMPT_TEMPLATE = """Generate as many creative and practical recipes as possible using ONLY these ingredients: {ingredients}.

IMPORTANT INSTRUCTIONS:
1. Respond in {language} language only
2. For each recipe include:
   - A creative and descriptive name
   - All required ingredients (only from provided list)
   - Detailed step-by-step cooking instructions
   - Cooking time and difficulty level
   - Serving suggestions if applicable

STRICT RULES:
- Generate maximum possible distinct recipes
- Use only the provided ingredients
- Maintain consistent language throughout
- Make instructions practical and precise
- Include estimated cooking time
- Return ONLY a JSON array of objects with the fields name, ingredients, instructions, cookingTime and difficulty, without any additional text
{example}
"""


def contains_bengali(text: str) -> bool:
    return bool(BENGALI_PATTERN.search(text))


def join_ingredients(ingredients: Iterable[str]) -> str:
    return ", ".join(item.strip() for item in ingredients if item and item.strip())


def build_recipe_prompt(ingredients: Iterable[str]) -> str:
    """Prompt asking for a JSON array of recipes, in Bengali when the ingredients are."""
    ingredients_text = join_ingredients(ingredients)
    bengali = contains_bengali(ingredients_text)
    return _PROMPT_TEMPLATE.format(
        ingredients=ingredients_text,
        language="Bangla (Bengali)" if bengali else "English",
        example=_BENGALI_EXAMPLE if bengali else _ENGLISH_EXAMPLE,
    )
