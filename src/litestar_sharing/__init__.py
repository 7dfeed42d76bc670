"""Litestar Sharing - workflow sharing queries and cloud plan client for Litestar.

This package provides the data-access layer deciding which users can see which
workflows, together with a small REST client for the cloud plan endpoints.

Key Features:
    - Async repository over the shared workflow join table
    - Global role and scope checks for cross-user visibility
    - Typed REST helpers for cloud plan, usage and admin login code
    - Litestar plugin wiring both into dependency injection

Example:
    >>> from litestar_sharing.db import SharedWorkflowRepository
    >>>
    >>> async def can_open(session, workflow_id, user):
    ...     repo = SharedWorkflowRepository(session=session)
    ...     return await repo.has_access(workflow_id, user)
"""

from __future__ import annotations

from litestar_sharing.__metadata__ import __project__, __version__
from litestar_sharing.api import (
    RestApiContext,
    get_admin_panel_login_code,
    get_current_plan,
    get_current_usage,
)
from litestar_sharing.exceptions import SharingError, UnknownFieldError, UnknownRelationError
from litestar_sharing.permissions import GlobalRole, RoleScope, WorkflowRole, has_global_scope
from litestar_sharing.plugin import SharingPlugin, SharingPluginConfig

__all__ = (
    "GlobalRole",
    "RestApiContext",
    "RoleScope",
    "SharingError",
    "SharingPlugin",
    "SharingPluginConfig",
    "UnknownFieldError",
    "UnknownRelationError",
    "WorkflowRole",
    "__project__",
    "__version__",
    "get_admin_panel_login_code",
    "get_current_plan",
    "get_current_usage",
    "has_global_scope",
)
