"""Auth Routes — credential sign-in through the external identity provider.

Invariants:
    - Classified provider failures answer 401 with one user-facing message
    - Unclassified failures are not caught here (global handler → 500)
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from dashboard.api.dependencies import get_identity_provider, read_form
from dashboard.core.repository_protocols import IdentityProvider
from dashboard.schemas.responses import ActionStateResponse
from dashboard.services.auth_classifier import authenticate

router = APIRouter(tags=["auth"])


@router.post("/login")
async def post_login(
    form: dict[str, str] = Depends(read_form),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    outcome = await authenticate(provider, form)
    if outcome.error:
        body = ActionStateResponse(status="error", message=outcome.message)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=body.model_dump(mode="json"),
        )
    body = ActionStateResponse(status="success", redirect_to=outcome.redirect_to)
    return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump(mode="json"))
