"""Database layer for workflow sharing.

This module provides SQLAlchemy models for users, roles, workflows and their
sharings, plus the repository that answers visibility queries over them.
"""

from __future__ import annotations

from litestar_sharing.db.models import (
    RoleModel,
    SharedWorkflowModel,
    UserModel,
    WorkflowModel,
)
from litestar_sharing.db.repositories import SharedWorkflowRepository

__all__ = [
    "RoleModel",
    "SharedWorkflowModel",
    "SharedWorkflowRepository",
    "UserModel",
    "WorkflowModel",
]
