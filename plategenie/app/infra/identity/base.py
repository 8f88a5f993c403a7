# plategenie/app/infra/identity/base.py
"""
Abstract base class for federated identity providers.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from plategenie.app.domain.models import FederatedIdentity


class IdentityProvider(ABC):
    """
    Authorization-code login against an external provider.

    Implementations:
    - GoogleIdentityProvider: Google OAuth 2.0 / OpenID Connect
    """

    @abstractmethod
    def exchange_code(self, code: str) -> str:
        """
        Exchange an authorization code for an ID token.

        Raises:
            IdentityProviderError: On network failure or a rejected code
        """
        pass

    @abstractmethod
    def verify_token(self, id_token: str) -> FederatedIdentity:
        """
        Check signature, issuer and audience of an ID token and read its claims.

        Raises:
            IdentityProviderError: If the token is not acceptable
        """
        pass
