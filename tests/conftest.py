"""Shared test fixtures for litestar-sharing test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from litestar_sharing.db.models import RoleModel, SharedWorkflowModel, UserModel, WorkflowModel
from litestar_sharing.db.repositories import SharedWorkflowRepository

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def async_engine():
    """Create an async SQLite in-memory engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        future=True,
    )

    # Enable foreign keys for SQLite
    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(SharedWorkflowModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(async_engine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine."""
    return async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def async_session(session_maker) -> AsyncIterator[AsyncSession]:
    """Create an async session for testing."""
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def sharing_repo(async_session: AsyncSession) -> SharedWorkflowRepository:
    """Create a shared workflow repository."""
    return SharedWorkflowRepository(session=async_session)


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
async def roles(async_session: AsyncSession) -> dict[str, RoleModel]:
    """Persist the global and workflow roles, keyed ``"<scope>:<name>"``."""
    models = {
        f"{scope}:{name}": RoleModel(name=name, scope=scope)
        for scope, name in [
            ("global", "owner"),
            ("global", "admin"),
            ("global", "member"),
            ("workflow", "owner"),
            ("workflow", "editor"),
        ]
    }
    async_session.add_all(models.values())
    await async_session.commit()
    return models


@pytest.fixture
def make_user(
    async_session: AsyncSession,
    roles: dict[str, RoleModel],
) -> Callable[..., Awaitable[UserModel]]:
    """Factory persisting a user with the given global role name."""

    async def _make_user(
        email: str | None,
        global_role: str = "member",
        password: str | None = "hashed-password",
    ) -> UserModel:
        user = UserModel(
            email=email,
            password=password,
            global_role=roles[f"global:{global_role}"],
        )
        async_session.add(user)
        await async_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_workflow(async_session: AsyncSession) -> Callable[[str], Awaitable[WorkflowModel]]:
    """Factory persisting an empty workflow."""

    async def _make_workflow(name: str) -> WorkflowModel:
        workflow = WorkflowModel(name=name, nodes=[], connections={})
        async_session.add(workflow)
        await async_session.commit()
        return workflow

    return _make_workflow


@pytest.fixture
async def users(make_user) -> dict[str, UserModel]:
    """Persist one user per global role plus a second member and an invitee."""
    return {
        "owner": await make_user("owner@example.com", "owner"),
        "admin": await make_user("admin@example.com", "admin"),
        "member": await make_user("member@example.com", "member"),
        "other": await make_user("other@example.com", "member"),
        "pending": await make_user(None, "member", password=None),
    }


@pytest.fixture
async def sharing_data(
    async_session: AsyncSession,
    roles: dict[str, RoleModel],
    users: dict[str, UserModel],
    make_workflow,
) -> dict[str, Any]:
    """Persist two workflows, owned by ``member`` and ``other``.

    ``member``'s workflow is also shared with ``other`` as editor.
    """
    member_workflow = await make_workflow("member workflow")
    other_workflow = await make_workflow("other workflow")

    async_session.add_all(
        [
            SharedWorkflowModel(
                workflow_id=member_workflow.id,
                user_id=users["member"].id,
                role_id=roles["workflow:owner"].id,
            ),
            SharedWorkflowModel(
                workflow_id=member_workflow.id,
                user_id=users["other"].id,
                role_id=roles["workflow:editor"].id,
            ),
            SharedWorkflowModel(
                workflow_id=other_workflow.id,
                user_id=users["other"].id,
                role_id=roles["workflow:owner"].id,
            ),
        ]
    )
    await async_session.commit()

    return {
        "member_workflow": member_workflow,
        "other_workflow": other_workflow,
    }
