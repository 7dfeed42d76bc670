"""Cloud plan and usage endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from litestar_sharing.api.client import get

if TYPE_CHECKING:
    from litestar_sharing.api.client import RestApiContext
    from litestar_sharing.api.types import AdminPanelLoginCode, CloudPlanData, InstanceUsage

__all__ = [
    "get_admin_panel_login_code",
    "get_current_plan",
    "get_current_usage",
]


async def get_current_plan(context: RestApiContext) -> CloudPlanData:
    """Fetch the cloud plan of the instance."""
    return await get(context, "/admin/cloud-plan")


async def get_current_usage(context: RestApiContext) -> InstanceUsage:
    """Fetch execution and active workflow counts against the plan limits."""
    return await get(context, "/cloud/limits")


async def get_admin_panel_login_code(context: RestApiContext) -> AdminPanelLoginCode:
    """Fetch a one-time code for signing in to the cloud admin panel."""
    return await get(context, "/admin/auth/login/code")
