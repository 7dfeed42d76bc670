"""SQLAlchemy models for workflow sharing.

This module defines the tables involved in sharing a workflow:
- RoleModel: Named permission level at a given scope (global, workflow, ...)
- UserModel: Account holding a global role
- WorkflowModel: The workflow being shared
- SharedWorkflowModel: Join row granting one user one role on one workflow
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

from advanced_alchemy.base import UUIDAuditBase
from sqlalchemy import JSON, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from litestar_sharing.permissions import GlobalRole, has_global_scope

if TYPE_CHECKING:
    from collections.abc import Iterable

    from litestar_sharing.permissions import Scope, ScopeMode

__all__ = [
    "RoleModel",
    "SharedWorkflowModel",
    "UserModel",
    "WorkflowModel",
]


# Cross-database JSON type: uses JSONB for PostgreSQL, JSON for others (SQLite, MySQL, etc.)
JSONType = JSON().with_variant(JSONB, "postgresql")


class RoleModel(UUIDAuditBase):
    """A named permission level.

    Attributes:
        name: Role name, e.g. ``"owner"`` or ``"editor"``.
        scope: Kind of resource the role applies to, e.g. ``"workflow"``.
    """

    __tablename__ = "role"
    __table_args__ = (UniqueConstraint("scope", "name", name="uq_role_scope_name"),)

    name: Mapped[str] = mapped_column(String(32))
    scope: Mapped[str] = mapped_column(String(255))


class UserModel(UUIDAuditBase):
    """An account that workflows can be shared with.

    Attributes:
        email: Login email, unset until the invitation is accepted.
        first_name: Given name.
        last_name: Family name.
        password: Password hash, ``None`` for invited users.
        disabled: Whether the account is disabled.
        global_role_id: Foreign key to the user's global role.
        global_role: The user's global role, always loaded with the user.
    """

    __tablename__ = "user"

    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(32), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(32), nullable=True)
    password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    disabled: Mapped[bool] = mapped_column(default=False)
    global_role_id: Mapped[UUID] = mapped_column(ForeignKey("role.id"))

    global_role: Mapped[RoleModel] = relationship(lazy="joined")

    @property
    def is_pending(self) -> bool:
        """Whether the user was invited but has not set up an account yet.

        The instance owner is never pending, even before setting a password.
        """
        if self.password is not None:
            return False
        return self.global_role is None or self.global_role.name != GlobalRole.OWNER

    def has_global_scope(self, scope: Scope | Iterable[Scope], mode: ScopeMode = "oneOf") -> bool:
        """Check whether the user's global role grants the given scope(s).

        Args:
            scope: A single scope or an iterable of scopes.
            mode: ``"oneOf"`` or ``"allOf"``.

        Returns:
            True if the global role grants the scope(s).
        """
        role_name = self.global_role.name if self.global_role is not None else None
        return has_global_scope(role_name, scope, mode)


class WorkflowModel(UUIDAuditBase):
    """A stored workflow.

    Attributes:
        name: Display name.
        active: Whether the workflow's triggers are enabled.
        nodes: Serialized node list.
        connections: Serialized connections between nodes.
        settings: Optional workflow settings.
        shared: Sharing rows for this workflow.
    """

    __tablename__ = "workflow_entity"

    name: Mapped[str] = mapped_column(String(128))
    active: Mapped[bool] = mapped_column(default=False)
    nodes: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, default=list)
    connections: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict)
    settings: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)

    # Relationships
    shared: Mapped[list[SharedWorkflowModel]] = relationship(
        back_populates="workflow",
        lazy="noload",
        passive_deletes=True,
    )


class SharedWorkflowModel(UUIDAuditBase):
    """Grant of a role on a workflow to a user.

    Relations are not loaded unless a query asks for them.

    Attributes:
        workflow_id: Foreign key to the shared workflow.
        user_id: Foreign key to the user the workflow is shared with.
        role_id: Foreign key to the workflow-scoped role held by the user.
        workflow: The shared workflow.
        user: The user holding the grant.
        role: The role granted.
    """

    __tablename__ = "shared_workflow"
    __table_args__ = (
        UniqueConstraint("workflow_id", "user_id", name="uq_shared_workflow_workflow_user"),
        Index("ix_shared_workflow_user_id", "user_id"),
        Index("ix_shared_workflow_role_id", "role_id"),
    )

    workflow_id: Mapped[UUID] = mapped_column(
        ForeignKey("workflow_entity.id", ondelete="CASCADE"),
    )
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"),
    )
    role_id: Mapped[UUID] = mapped_column(ForeignKey("role.id"))

    # Relationships
    workflow: Mapped[WorkflowModel] = relationship(back_populates="shared", lazy="noload")
    user: Mapped[UserModel] = relationship(lazy="noload")
    role: Mapped[RoleModel] = relationship(lazy="noload")
