"""Action State Machine — the legal path of one form submission through the pipeline.

Invariants:
    - Every submission starts in IDLE and ends in exactly one terminal state
    - Only edges listed in ALLOWED_TRANSITIONS may be taken; anything else is a defect
    - DETECTING_CONFLICT is reachable only from VALID (edit actions)
    - Delete actions skip validation: IDLE -> PROCEED
    - SUCCESS is the only terminal state that leads to view invalidation

Design Decisions:
    - Transition table as data, not as if/else in the orchestrator: the allowed
      graph is readable in one place and testable without IO
    - IllegalTransitionError propagates uncaught: it marks a programming error,
      never a user-correctable condition
"""

from dataclasses import dataclass, field
from enum import Enum

from dashboard.core.errors import IllegalTransitionError


class ActionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    INVALID = "invalid"
    VALID = "valid"
    DETECTING_CONFLICT = "detecting_conflict"
    NO_CHANGE = "no_change"
    NOT_FOUND = "not_found"
    PROCEED = "proceed"
    PERSISTING = "persisting"
    SUCCESS = "success"
    STORAGE_FAULT = "storage_fault"
    DOMAIN_ERROR = "domain_error"


ALLOWED_TRANSITIONS: dict[ActionState, frozenset[ActionState]] = {
    ActionState.IDLE: frozenset({ActionState.VALIDATING, ActionState.PROCEED}),
    ActionState.VALIDATING: frozenset({ActionState.INVALID, ActionState.VALID}),
    ActionState.VALID: frozenset({
        ActionState.DETECTING_CONFLICT, ActionState.PROCEED,
    }),
    ActionState.DETECTING_CONFLICT: frozenset({
        ActionState.NO_CHANGE, ActionState.NOT_FOUND,
        ActionState.PROCEED, ActionState.STORAGE_FAULT,
    }),
    ActionState.PROCEED: frozenset({ActionState.PERSISTING}),
    ActionState.PERSISTING: frozenset({
        ActionState.SUCCESS, ActionState.STORAGE_FAULT,
        ActionState.DOMAIN_ERROR, ActionState.NOT_FOUND,
    }),
}

TERMINAL_STATES = frozenset({
    ActionState.INVALID,
    ActionState.NO_CHANGE,
    ActionState.NOT_FOUND,
    ActionState.SUCCESS,
    ActionState.STORAGE_FAULT,
    ActionState.DOMAIN_ERROR,
})


@dataclass
class ActionTrail:
    """Ordered record of the states one submission has passed through."""

    states: list[ActionState] = field(default_factory=lambda: [ActionState.IDLE])

    @property
    def current(self) -> ActionState:
        return self.states[-1]

    @property
    def finished(self) -> bool:
        return self.current in TERMINAL_STATES

    def advance(self, requested: ActionState) -> None:
        if requested not in ALLOWED_TRANSITIONS.get(self.current, frozenset()):
            raise IllegalTransitionError(self.current.value, requested.value)
        self.states.append(requested)
