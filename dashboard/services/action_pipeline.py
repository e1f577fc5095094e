"""Action Pipeline — drives one submission through the action state machine.

Invariants:
    - Validate -> (edit only) detect conflict -> persist -> invalidate, strictly in order
    - Each store call is awaited to completion before the trail advances
    - View invalidation runs only after SUCCESS, never after INVALID, NO_CHANGE,
      NOT_FOUND, DOMAIN_ERROR or STORAGE_FAULT
    - Caught at this boundary: DomainRuleError, ResourceNotFoundError,
      StorageFaultError. Everything else propagates (defects are not masked)
    - Cancellation propagates: a committed write stays, invalidation is skipped

Design Decisions:
    - One runner for every action: the per-entity modules only declare what to
      validate, how to detect conflicts and which executor method persists
    - ActionTarget bundles the operation name, listing view and route for one action
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from dashboard.core.action_states import ActionState, ActionTrail
from dashboard.core.domain_types import ViewKey
from dashboard.core.errors import (
    DomainRuleError, ResourceNotFoundError, StorageFaultError,
)
from dashboard.core.outcomes import NO_CHANGES_MESSAGE, ActionOutcome
from dashboard.core.validate_forms import FormResult
from dashboard.infrastructure.view_cache import ViewCache
from dashboard.services.conflict_detector import ConflictCheck, ConflictReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionTarget:
    operation: str
    resource: str
    view: ViewKey
    listing_route: str

    @property
    def invalid_message(self) -> str:
        return f"Missing Fields. Failed to {self.operation}."


async def run_action(
    views: ViewCache,
    target: ActionTarget,
    *,
    persist: Callable[[Any], Awaitable[object]],
    target_id: str | None = None,
    raw: Mapping[str, object] | None = None,
    validator: Callable[[Mapping[str, object]], FormResult] | None = None,
    detect: Callable[[Any], Awaitable[ConflictReport]] | None = None,
) -> ActionOutcome:
    """Run one submission and return its terminal outcome."""
    trail = ActionTrail()
    log_extra = {"operation": target.operation, "target_id": target_id}
    value = None

    if validator is not None:
        trail.advance(ActionState.VALIDATING)
        form = validator(raw or {})
        if not form.ok:
            trail.advance(ActionState.INVALID)
            logger.info(
                f"{target.operation} rejected: invalid fields {sorted(form.errors)}",
                extra={**log_extra, "outcome": "invalid"},
            )
            return ActionOutcome.finish(
                trail, message=target.invalid_message, field_errors=form.errors,
            )
        trail.advance(ActionState.VALID)
        value = form.value

        if detect is not None:
            trail.advance(ActionState.DETECTING_CONFLICT)
            try:
                report = await detect(value)
            except StorageFaultError as e:
                trail.advance(ActionState.STORAGE_FAULT)
                return ActionOutcome.finish(trail, message=e.message)
            if report.check is ConflictCheck.NOT_FOUND:
                trail.advance(ActionState.NOT_FOUND)
                return ActionOutcome.finish(
                    trail,
                    message=ResourceNotFoundError(target.resource, str(target_id)).message,
                )
            if report.check is ConflictCheck.NO_CHANGE:
                trail.advance(ActionState.NO_CHANGE)
                logger.info(
                    f"{target.operation}: no changes detected",
                    extra={**log_extra, "outcome": "no_change"},
                )
                return ActionOutcome.finish(trail, message=NO_CHANGES_MESSAGE)

    trail.advance(ActionState.PROCEED)
    trail.advance(ActionState.PERSISTING)
    try:
        await persist(value)
    except DomainRuleError as e:
        trail.advance(ActionState.DOMAIN_ERROR)
        logger.warning(
            f"{target.operation} refused: {e.message}",
            extra={**log_extra, "error_code": e.code, "outcome": "domain_error"},
        )
        return ActionOutcome.finish(trail, message=e.message)
    except ResourceNotFoundError as e:
        trail.advance(ActionState.NOT_FOUND)
        return ActionOutcome.finish(trail, message=e.message)
    except StorageFaultError as e:
        trail.advance(ActionState.STORAGE_FAULT)
        return ActionOutcome.finish(trail, message=e.message)

    trail.advance(ActionState.SUCCESS)
    views.invalidate(target.view)
    return ActionOutcome.finish(
        trail, invalidated=(target.view,), redirect_to=target.listing_route,
    )
