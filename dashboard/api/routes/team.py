"""Team Routes — list members, add a member, change a role, remove a member."""

from fastapi import APIRouter, Depends

from dashboard.api.dependencies import get_store, get_view_cache, read_form
from dashboard.api.responses import outcome_response
from dashboard.core.domain_types import UserId
from dashboard.core.repository_protocols import DashboardStore
from dashboard.infrastructure.view_cache import ViewCache
from dashboard.schemas.responses import TeamMemberItem
from dashboard.services.read_views import list_team_members
from dashboard.services.team_actions import (
    add_team_member, remove_team_member, update_member_role,
)

router = APIRouter(prefix="/dashboard/team", tags=["team"])


@router.get("", response_model=list[TeamMemberItem])
async def get_team(
    store: DashboardStore = Depends(get_store),
    views: ViewCache = Depends(get_view_cache),
):
    members = await list_team_members(store, views)
    return [TeamMemberItem.from_row(member) for member in members]


@router.post("")
async def post_add_member(
    form: dict[str, str] = Depends(read_form),
    store: DashboardStore = Depends(get_store),
    views: ViewCache = Depends(get_view_cache),
):
    return outcome_response(await add_team_member(store, views, form))


@router.post("/{user_id}/role")
async def post_update_role(
    user_id: str,
    form: dict[str, str] = Depends(read_form),
    store: DashboardStore = Depends(get_store),
    views: ViewCache = Depends(get_view_cache),
):
    return outcome_response(
        await update_member_role(store, views, UserId(user_id), form),
    )


@router.post("/{user_id}/delete")
async def post_remove_member(
    user_id: str,
    store: DashboardStore = Depends(get_store),
    views: ViewCache = Depends(get_view_cache),
):
    return outcome_response(
        await remove_team_member(store, views, UserId(user_id)),
    )
