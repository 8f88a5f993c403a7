from __future__ import annotations

import google.generativeai as genai

from plategenie.services.errors import CompletionFailedError, GeminiConfigurationError

DEFAULT_MODEL_NAME = "gemini-2.5-flash"


class GeminiClient:
    def __init__(self, api_key: str, model_name: str = DEFAULT_MODEL_NAME) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self._configure_api()

    def _configure_api(self) -> None:
        if not self.api_key:
            raise GeminiConfigurationError("Missing Google API key.")
        genai.configure(api_key=self.api_key)

    def generate_content(self, prompt: str) -> str:
        model = genai.GenerativeModel(model_name=self.model_name)
        response = model.generate_content(prompt)
        try:
            return response.text
        except ValueError as error:
            # Raised by the SDK when the candidate was blocked or empty
            raise CompletionFailedError(f"Model response did not include text content: {error}") from error
