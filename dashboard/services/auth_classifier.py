"""Auth Classifier — forwards credentials to the identity provider and classifies failures.

Invariants:
    - CredentialsSignin -> "Invalid credentials."
    - Any other IdentityProviderError -> "Something went wrong!"
    - Exceptions that are not provider failures propagate: they are defects,
      never shown as a form error
    - Success redirects to a relative path only (redirectTo, default /dashboard)
"""

import logging
from collections.abc import Mapping

from dashboard.core.domain_types import DASHBOARD_ROUTE
from dashboard.core.errors import (
    AuthClassificationError, CredentialsSignin, IdentityProviderError,
)
from dashboard.core.outcomes import AuthOutcome
from dashboard.core.repository_protocols import IdentityProvider

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
GENERIC_FAILURE_MESSAGE = "Something went wrong!"


def classify_provider_error(error: IdentityProviderError) -> AuthClassificationError:
    """Map the provider taxonomy onto the single user-facing message."""
    if isinstance(error, CredentialsSignin):
        return AuthClassificationError(INVALID_CREDENTIALS_MESSAGE, error.error_type)
    return AuthClassificationError(GENERIC_FAILURE_MESSAGE, error.error_type)


async def authenticate(
    provider: IdentityProvider, raw: Mapping[str, object],
) -> AuthOutcome:
    credentials = {
        "email": _text(raw.get("email")),
        "password": _text(raw.get("password")),
    }
    try:
        await provider.sign_in(credentials)
    except IdentityProviderError as e:
        error = classify_provider_error(e)
        logger.warning(
            f"Sign-in failed ({e.error_type})",
            extra={"error_code": error.code, "outcome": e.error_type},
        )
        return AuthOutcome(error=error)
    return AuthOutcome(redirect_to=_safe_redirect(raw.get("redirectTo")))


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""


def _safe_redirect(value: object) -> str:
    if isinstance(value, str) and value.startswith("/") and not value.startswith("//"):
        return value
    return DASHBOARD_ROUTE
