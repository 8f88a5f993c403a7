from __future__ import annotations

import logging

import httpx
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token

from plategenie.app.domain.models import FederatedIdentity
from plategenie.app.infra.identity.base import IdentityProvider
from plategenie.services.errors import IdentityProviderError

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")
# Code obtained by the browser popup flow, which has no redirect page
POPUP_REDIRECT_URI = "postmessage"


class GoogleIdentityProvider(IdentityProvider):
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str = POPUP_REDIRECT_URI,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self.transport = transport

    def exchange_code(self, code: str) -> str:
        if not self.client_id or not self.client_secret:
            raise IdentityProviderError("Google OAuth client is not configured")

        form = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
        }
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(GOOGLE_TOKEN_URL, data=form)
                response.raise_for_status()
                tokens = response.json()
        except httpx.TimeoutException as error:
            raise IdentityProviderError(f"Timeout exchanging authorization code: {error}") from error
        except httpx.HTTPStatusError as error:
            raise IdentityProviderError(
                f"Token endpoint rejected the code ({error.response.status_code})"
            ) from error
        except (httpx.HTTPError, ValueError) as error:
            raise IdentityProviderError(f"Token exchange failed: {error}") from error

        token = tokens.get("id_token") if isinstance(tokens, dict) else None
        if not token:
            raise IdentityProviderError("Token response did not include an id_token")
        return token

    def verify_token(self, id_token: str) -> FederatedIdentity:
        try:
            claims = google_id_token.verify_oauth2_token(
                id_token,
                google_requests.Request(),
                audience=self.client_id,
            )
        except ValueError as error:
            raise IdentityProviderError(f"Invalid ID token: {error}") from error

        if claims.get("iss") not in GOOGLE_ISSUERS:
            raise IdentityProviderError(f"Unexpected token issuer: {claims.get('iss')}")

        subject = claims.get("sub")
        email = claims.get("email")
        if not subject or not email:
            raise IdentityProviderError("ID token is missing the subject or email claim")

        logger.debug("Verified Google identity for %s", email)
        return FederatedIdentity(
            subject_id=str(subject),
            email=str(email),
            name=claims.get("name"),
            picture=claims.get("picture"),
        )
