"""REST client for the cloud plan endpoints of the instance backend."""

from __future__ import annotations

from litestar_sharing.api.client import RestApiContext, get, request
from litestar_sharing.api.cloud_plans import (
    get_admin_panel_login_code,
    get_current_plan,
    get_current_usage,
)
from litestar_sharing.api.types import AdminPanelLoginCode, CloudPlanData, InstanceUsage, PlanMetadata

__all__ = [
    "AdminPanelLoginCode",
    "CloudPlanData",
    "InstanceUsage",
    "PlanMetadata",
    "RestApiContext",
    "get",
    "get_admin_panel_login_code",
    "get_current_plan",
    "get_current_usage",
    "request",
]
