from __future__ import annotations

from plategenie.services.prompt import build_recipe_prompt, contains_bengali, join_ingredients


class TestContainsBengali:
    def test_detects_bengali_script(self) -> None:
        assert contains_bengali("ডিম ও চাল") is True

    def test_latin_text(self) -> None:
        assert contains_bengali("egg and rice") is False


class TestJoinIngredients:
    def test_trims_and_skips_blanks(self) -> None:
        assert join_ingredients([" rice ", "", "egg"]) == "rice, egg"


class TestBuildRecipePrompt:
    def test_english_prompt(self) -> None:
        prompt = build_recipe_prompt(["rice", "egg"])

        assert "ONLY these ingredients: rice, egg." in prompt
        assert "Respond in English language only" in prompt
        assert "English Format Example" in prompt
        assert "JSON array" in prompt

    def test_bengali_prompt(self) -> None:
        prompt = build_recipe_prompt(["ডিম", "চাল"])

        assert "Respond in Bangla (Bengali) language only" in prompt
        assert "বাংলা ফরম্যাট উদাহরণ" in prompt
