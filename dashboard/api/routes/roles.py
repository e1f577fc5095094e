"""Role Routes — read-only role listing."""

from fastapi import APIRouter, Depends

from dashboard.api.dependencies import get_store, get_view_cache
from dashboard.core.repository_protocols import DashboardStore
from dashboard.infrastructure.view_cache import ViewCache
from dashboard.schemas.responses import RoleItem
from dashboard.services.read_views import list_roles

router = APIRouter(prefix="/dashboard/roles", tags=["roles"])


@router.get("", response_model=list[RoleItem])
async def get_roles(
    store: DashboardStore = Depends(get_store),
    views: ViewCache = Depends(get_view_cache),
):
    return [RoleItem.from_record(role) for role in await list_roles(store, views)]
