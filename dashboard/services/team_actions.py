"""Team Actions — add members, change their role, remove them.

Invariants:
    - add: validate -> persist (email uniqueness checked before the insert)
    - role change: validate -> conflict check on role_id -> single-field update
    - remove: persist only; a missing id still succeeds
    - Success invalidates the team list and redirects to /dashboard/team
"""

from collections.abc import Mapping

from dashboard.core.domain_types import TEAM_ROUTE, UserId, ViewKey
from dashboard.core.outcomes import ActionOutcome
from dashboard.core.repository_protocols import DashboardStore
from dashboard.core.validate_forms import (
    validate_member_form, validate_role_change_form,
)
from dashboard.infrastructure.view_cache import ViewCache
from dashboard.services.action_pipeline import ActionTarget, run_action
from dashboard.services.conflict_detector import check_role_change
from dashboard.services.mutation_executor import MutationExecutor

ADD_MEMBER = ActionTarget("Add Team Member", "Team member", ViewKey.TEAM, TEAM_ROUTE)
UPDATE_ROLE = ActionTarget("Update Role", "Team member", ViewKey.TEAM, TEAM_ROUTE)
REMOVE_MEMBER = ActionTarget("Remove Team Member", "Team member", ViewKey.TEAM, TEAM_ROUTE)


async def add_team_member(
    store: DashboardStore, views: ViewCache, raw: Mapping[str, object],
) -> ActionOutcome:
    executor = MutationExecutor(store)
    return await run_action(
        views, ADD_MEMBER,
        raw=raw,
        validator=validate_member_form,
        persist=executor.add_member,
    )


async def update_member_role(
    store: DashboardStore,
    views: ViewCache,
    user_id: UserId,
    raw: Mapping[str, object],
) -> ActionOutcome:
    executor = MutationExecutor(store)
    return await run_action(
        views, UPDATE_ROLE,
        target_id=user_id,
        raw=raw,
        validator=validate_role_change_form,
        detect=lambda values: check_role_change(store, user_id, values),
        persist=lambda values: executor.update_member_role(user_id, values),
    )


async def remove_team_member(
    store: DashboardStore, views: ViewCache, user_id: UserId,
) -> ActionOutcome:
    executor = MutationExecutor(store)
    return await run_action(
        views, REMOVE_MEMBER,
        target_id=user_id,
        persist=lambda _: executor.delete_member(user_id),
    )
