"""Outcome Responses — ActionOutcome to HTTP status + ActionStateResponse body."""

from fastapi import status
from fastapi.responses import JSONResponse

from dashboard.core.outcomes import ActionOutcome, OutcomeKind
from dashboard.schemas.responses import ActionStateResponse

STATUS_BY_KIND = {
    OutcomeKind.SUCCESS: status.HTTP_200_OK,
    OutcomeKind.NO_CHANGE: status.HTTP_200_OK,
    OutcomeKind.INVALID: status.HTTP_422_UNPROCESSABLE_CONTENT,
    OutcomeKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    OutcomeKind.DOMAIN_ERROR: status.HTTP_409_CONFLICT,
    OutcomeKind.STORAGE_FAULT: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def outcome_response(outcome: ActionOutcome) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_KIND[outcome.kind],
        content=ActionStateResponse.from_outcome(outcome).model_dump(mode="json"),
    )
