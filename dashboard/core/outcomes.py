"""Outcomes — the discriminated result every pipeline invocation returns.

Invariants:
    - ActionOutcome.kind is derived from the trail's terminal state
    - Only SUCCESS carries invalidated view keys and a redirect target
    - field_errors is non-empty only for INVALID
    - AuthOutcome carries either an error or a redirect, never both

Design Decisions:
    - Explicit result over redirect-as-exception: the caller decides navigation
"""

from dataclasses import dataclass, field
from enum import Enum

from dashboard.core.action_states import ActionState, ActionTrail
from dashboard.core.domain_types import ViewKey
from dashboard.core.errors import AuthClassificationError

NO_CHANGES_MESSAGE = "No changes detected."


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    INVALID = "invalid"
    NO_CHANGE = "no_change"
    NOT_FOUND = "not_found"
    DOMAIN_ERROR = "domain_error"
    STORAGE_FAULT = "storage_fault"


_KIND_BY_STATE = {
    ActionState.SUCCESS: OutcomeKind.SUCCESS,
    ActionState.INVALID: OutcomeKind.INVALID,
    ActionState.NO_CHANGE: OutcomeKind.NO_CHANGE,
    ActionState.NOT_FOUND: OutcomeKind.NOT_FOUND,
    ActionState.DOMAIN_ERROR: OutcomeKind.DOMAIN_ERROR,
    ActionState.STORAGE_FAULT: OutcomeKind.STORAGE_FAULT,
}


@dataclass(frozen=True)
class ActionOutcome:
    kind: OutcomeKind
    message: str | None = None
    field_errors: dict[str, list[str]] = field(default_factory=dict)
    invalidated: tuple[ViewKey, ...] = ()
    redirect_to: str | None = None
    trail: tuple[ActionState, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def finish(
        cls,
        trail: ActionTrail,
        *,
        message: str | None = None,
        field_errors: dict[str, list[str]] | None = None,
        invalidated: tuple[ViewKey, ...] = (),
        redirect_to: str | None = None,
    ) -> "ActionOutcome":
        """Build the outcome for a trail that has reached a terminal state."""
        if not trail.finished:
            raise ValueError(f"trail not finished: {trail.current.value}")
        return cls(
            kind=_KIND_BY_STATE[trail.current],
            message=message,
            field_errors=field_errors or {},
            invalidated=invalidated,
            redirect_to=redirect_to,
            trail=tuple(trail.states),
        )


@dataclass(frozen=True)
class AuthOutcome:
    error: AuthClassificationError | None = None
    redirect_to: str | None = None

    @property
    def message(self) -> str | None:
        return self.error.message if self.error else None
