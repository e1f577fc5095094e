"""HTTP Identity Provider — posts credentials to an external credentials endpoint.

Invariants:
    - 401 maps to CredentialsSignin (credential mismatch)
    - Any other 4xx/5xx maps to IdentityProviderError("CallbackRouteError")
    - Timeouts and transport failures map to IdentityProviderError with their own type
    - Anything else (e.g. a malformed success body) propagates unchanged

Design Decisions:
    - httpx.AsyncClient per call unless a transport is injected: tests pass
      httpx.MockTransport, production needs no pooled client for a login form
    - The error taxonomy lives in core/errors.py so the classifier never imports httpx
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from dashboard.core.errors import CredentialsSignin, IdentityProviderError

logger = logging.getLogger(__name__)


class HttpIdentityProvider:
    """Credentials sign-in against a remote identity provider."""

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def sign_in(self, credentials: Mapping[str, str]) -> Mapping[str, Any]:
        """Submit credentials. Returns the provider's session payload on success."""
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds, transport=self._transport,
        ) as client:
            try:
                response = await client.post(self.url, data=dict(credentials))
            except httpx.TimeoutException as e:
                raise IdentityProviderError("ProviderTimeout", str(e))
            except httpx.TransportError as e:
                raise IdentityProviderError("ProviderUnavailable", str(e))

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise CredentialsSignin("credentials rejected by provider")
        if response.is_error:
            raise IdentityProviderError(
                "CallbackRouteError", f"provider returned {response.status_code}",
            )
        logger.debug(f"Identity provider accepted sign-in ({response.status_code})")
        return response.json() if response.content else {}
