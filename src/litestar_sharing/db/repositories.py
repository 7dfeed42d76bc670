"""Repository for workflow sharing queries.

This module provides the async repository used to answer "who can see which
workflow" questions, built on advanced-alchemy's repository pattern.

Every lookup on behalf of a user applies the same visibility rule: rows are
restricted to the caller's own user id unless the caller's global role grants
a scope (or is a role) that allows seeing other users' sharings.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from advanced_alchemy.repository import SQLAlchemyAsyncRepository
from sqlalchemy import and_, delete, exists, select, update
from sqlalchemy.orm import selectinload

from litestar_sharing.db.models import RoleModel, SharedWorkflowModel
from litestar_sharing.exceptions import UnknownFieldError, UnknownRelationError
from litestar_sharing.permissions import ELEVATED_GLOBAL_ROLES, RoleScope, WorkflowRole

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm.interfaces import ORMOption
    from sqlalchemy.sql.elements import ColumnElement

    from litestar_sharing.db.models import UserModel, WorkflowModel
    from litestar_sharing.permissions import Scope

__all__ = ["SharedWorkflowRepository"]

logger = logging.getLogger(__name__)

_RELATIONS = ("workflow", "user", "role")
_FIELDS = ("id", "workflow_id", "user_id", "role_id", "created_at", "updated_at")


def _load_options(relations: Iterable[str]) -> list[ORMOption]:
    options: list[ORMOption] = []
    for relation in dict.fromkeys(relations):
        if relation not in _RELATIONS:
            raise UnknownRelationError(relation)
        options.append(selectinload(getattr(SharedWorkflowModel, relation)))
    return options


class SharedWorkflowRepository(SQLAlchemyAsyncRepository[SharedWorkflowModel]):
    """Repository for shared workflow queries.

    Methods that take a ``transaction`` run on that session instead of the
    repository's own one, so callers can group them with other writes. No
    method commits; transaction boundaries belong to the caller.
    """

    model_type = SharedWorkflowModel

    async def has_access(self, workflow_id: UUID, user: UserModel) -> bool:
        """Check whether a user can access a workflow.

        Args:
            workflow_id: The workflow ID.
            user: The user asking for access.

        Returns:
            True if a sharing exists for the workflow and either belongs to the
            user or the user holds the global ``workflow:read`` scope.
        """
        conditions: list[ColumnElement[bool]] = [SharedWorkflowModel.workflow_id == workflow_id]

        if not user.has_global_scope("workflow:read"):
            conditions.append(SharedWorkflowModel.user_id == user.id)

        result = await self.session.scalar(select(exists().where(and_(*conditions))))
        return bool(result)

    async def list_shared_workflow_ids(self, workflow_ids: Sequence[UUID]) -> list[UUID]:
        """List the IDs of the given workflows that have at least one sharing.

        Args:
            workflow_ids: Workflow IDs to look up.

        Returns:
            One workflow ID per matching sharing.
        """
        stmt = select(SharedWorkflowModel.workflow_id).where(SharedWorkflowModel.workflow_id.in_(workflow_ids))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_owner_sharings_by_workflow_ids(
        self,
        workflow_ids: Sequence[UUID],
    ) -> Sequence[SharedWorkflowModel]:
        """Find the owner sharing of each given workflow.

        Args:
            workflow_ids: Workflow IDs to look up.

        Returns:
            Sharings holding the workflow ``owner`` role, with ``role`` and
            ``user`` loaded.
        """
        stmt = (
            select(SharedWorkflowModel)
            .join(SharedWorkflowModel.role)
            .where(
                RoleModel.name == WorkflowRole.OWNER,
                RoleModel.scope == RoleScope.WORKFLOW,
                SharedWorkflowModel.workflow_id.in_(workflow_ids),
            )
            .options(*_load_options(["role", "user"]))
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def find_sharing(
        self,
        workflow_id: UUID,
        user: UserModel,
        scope: Scope,
        *,
        roles: Sequence[str] | None = None,
        extra_relations: Sequence[str] | None = None,
    ) -> SharedWorkflowModel | None:
        """Find the sharing through which a user reaches a workflow.

        Args:
            workflow_id: The workflow ID.
            user: The requesting user.
            scope: Global scope that lets the user see other users' sharings.
            roles: Optional workflow role names the sharing must hold.
            extra_relations: Relations to load besides ``workflow`` and ``role``.

        Returns:
            The first matching sharing or None.
        """
        conditions: list[ColumnElement[bool]] = [SharedWorkflowModel.workflow_id == workflow_id]

        if not user.has_global_scope(scope):
            conditions.append(SharedWorkflowModel.user_id == user.id)

        stmt = select(SharedWorkflowModel)

        if roles is not None:
            stmt = stmt.join(SharedWorkflowModel.role)
            conditions.append(RoleModel.name.in_(roles))

        relations = ["workflow", "role", *(extra_relations or [])]
        stmt = stmt.where(and_(*conditions)).options(*_load_options(relations)).limit(1)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def reassign_ownership(self, user: UserModel, role: RoleModel) -> int:
        """Move every sharing holding ``role`` to ``user``.

        Sharings that already belong to the user are left untouched.

        Args:
            user: The new holder of the sharings.
            role: The role whose sharings are reassigned.

        Returns:
            Number of sharings updated.
        """
        stmt = (
            update(SharedWorkflowModel)
            .where(
                SharedWorkflowModel.user_id != user.id,
                SharedWorkflowModel.role_id == role.id,
            )
            .values(user_id=user.id, updated_at=datetime.now(timezone.utc))
        )
        result = await self.session.execute(stmt)
        logger.debug("Reassigned %d '%s' sharings to user %s", result.rowcount, role.name, user.id)
        return result.rowcount

    async def get_sharing(
        self,
        user: UserModel,
        workflow_id: UUID,
        *,
        global_scope: Scope | None = None,
        relations: Sequence[str] = ("workflow",),
    ) -> SharedWorkflowModel | None:
        """Get a user's sharing of a workflow.

        Args:
            user: The requesting user.
            workflow_id: The workflow ID.
            global_scope: When given and held by the user, sharings of other
                users are visible too. When None, only the user's own sharing
                is considered.
            relations: Relations to load.

        Returns:
            The first matching sharing or None.
        """
        conditions: list[ColumnElement[bool]] = [SharedWorkflowModel.workflow_id == workflow_id]

        # A qualifying global scope lifts the ownership filter so the user can
        # reach workflows they were never shared.
        if global_scope is None or not user.has_global_scope(global_scope):
            conditions.append(SharedWorkflowModel.user_id == user.id)

        stmt = select(SharedWorkflowModel).where(and_(*conditions)).options(*_load_options(relations)).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_shared_workflows(
        self,
        user: UserModel,
        *,
        relations: Sequence[str] | None = None,
        workflow_ids: Sequence[UUID] | None = None,
    ) -> Sequence[SharedWorkflowModel]:
        """List the sharings visible to a user.

        Owners and admins see every sharing, everyone else only their own.

        Args:
            user: The requesting user.
            relations: Optional relations to load.
            workflow_ids: Optional workflow IDs to restrict the result to.

        Returns:
            List of sharings.
        """
        conditions: list[ColumnElement[bool]] = []

        if user.global_role is None or user.global_role.name not in ELEVATED_GLOBAL_ROLES:
            conditions.append(SharedWorkflowModel.user_id == user.id)

        if workflow_ids is not None:
            conditions.append(SharedWorkflowModel.workflow_id.in_(workflow_ids))

        stmt = select(SharedWorkflowModel).where(and_(True, *conditions))
        if relations:
            stmt = stmt.options(*_load_options(relations))

        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def share(
        self,
        transaction: AsyncSession,
        workflow: WorkflowModel,
        users: Iterable[UserModel],
        role_id: UUID,
    ) -> list[SharedWorkflowModel]:
        """Share a workflow with several users at once.

        Pending users are skipped.

        Args:
            transaction: Session the new sharings are added to and flushed on.
            workflow: The workflow to share.
            users: Users to share the workflow with.
            role_id: ID of the workflow role to grant.

        Returns:
            The created sharings.
        """
        sharings = [
            self.model_type(workflow_id=workflow.id, user_id=user.id, role_id=role_id)
            for user in users
            if not user.is_pending
        ]

        transaction.add_all(sharings)
        await transaction.flush()
        logger.debug("Shared workflow %s with %d users", workflow.id, len(sharings))
        return sharings

    async def find_with_fields(
        self,
        workflow_ids: Sequence[UUID],
        fields: Sequence[str],
    ) -> list[dict[str, Any]]:
        """Read selected columns of the sharings of the given workflows.

        Args:
            workflow_ids: Workflow IDs to look up.
            fields: Column names to return, e.g. ``["workflow_id", "user_id"]``.
                An empty list selects every column.

        Returns:
            One mapping per sharing, holding only the requested fields.

        Raises:
            UnknownFieldError: If a field is not a column of the sharing table.
        """
        selected = list(dict.fromkeys(fields or _FIELDS))
        for field in selected:
            if field not in _FIELDS:
                raise UnknownFieldError(field)

        columns = [getattr(SharedWorkflowModel, field) for field in selected]
        stmt = select(*columns).where(SharedWorkflowModel.workflow_id.in_(workflow_ids))
        result = await self.session.execute(stmt)
        return [dict(row) for row in result.mappings()]

    async def delete_by_ids(
        self,
        transaction: AsyncSession,
        workflow_ids: Sequence[UUID],
        user: UserModel | None = None,
    ) -> int:
        """Delete the sharings of the given workflows.

        Args:
            transaction: Session the delete runs on.
            workflow_ids: IDs of the workflows to unshare.
            user: If given, only this user's sharings are deleted.

        Returns:
            Number of sharings deleted.
        """
        stmt = delete(SharedWorkflowModel).where(SharedWorkflowModel.workflow_id.in_(workflow_ids))

        if user is not None:
            stmt = stmt.where(SharedWorkflowModel.user_id == user.id)

        result = await transaction.execute(stmt)
        logger.debug("Deleted %d sharings of %d workflows", result.rowcount, len(workflow_ids))
        return result.rowcount

    async def find_workflow_ids_by_user(
        self,
        user: UserModel,
        *,
        roles: Sequence[RoleModel] | None = None,
    ) -> list[UUID]:
        """List the IDs of workflows visible to a user.

        Args:
            user: The requesting user. Without the global ``workflow:read``
                scope only their own sharings count.
            roles: Optional roles the sharings must hold.

        Returns:
            One workflow ID per matching sharing.
        """
        conditions: list[ColumnElement[bool]] = []

        if not user.has_global_scope("workflow:read"):
            conditions.append(SharedWorkflowModel.user_id == user.id)

        if roles is not None:
            conditions.append(SharedWorkflowModel.role_id.in_([role.id for role in roles]))

        stmt = select(SharedWorkflowModel.workflow_id).where(and_(True, *conditions))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
