from __future__ import annotations

import pytest

from plategenie.services.errors import (
    CompletionFailedError,
    GeminiConfigurationError,
    IdentityProviderError,
    ServiceError,
)
from plategenie.services.gemini_client import GeminiClient


class TestServiceError:
    def test_base_exception(self) -> None:
        error = ServiceError("Base service error")
        assert str(error) == "Base service error"
        assert isinstance(error, Exception)

    def test_subclasses(self) -> None:
        for kind in (GeminiConfigurationError, CompletionFailedError, IdentityProviderError):
            assert isinstance(kind("x"), ServiceError)


class TestGeminiClient:
    def test_missing_api_key(self) -> None:
        with pytest.raises(GeminiConfigurationError):
            GeminiClient(api_key="")
