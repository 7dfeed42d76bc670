"""Tests for the SharingPlugin integration with Litestar.

These tests verify that the plugin provides the repository and REST context
through dependency injection and maps package errors to HTTP responses.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any
from uuid import UUID

import pytest
from litestar import Litestar, get
from litestar.di import Provide
from litestar.status_codes import HTTP_200_OK, HTTP_400_BAD_REQUEST
from litestar.testing import AsyncTestClient
from sqlalchemy.ext.asyncio import AsyncSession

from litestar_sharing import RestApiContext, SharingPlugin, SharingPluginConfig
from litestar_sharing.db import SharedWorkflowRepository

# =============================================================================
# Test Handlers
# =============================================================================


@get("/workflows/{workflow_id:uuid}/owners")
async def list_owners(workflow_id: UUID, shared_workflow_repo: SharedWorkflowRepository) -> list[str]:
    """Return the emails of a workflow's owners."""
    sharings = await shared_workflow_repo.find_owner_sharings_by_workflow_ids([workflow_id])
    return [sharing.user.email for sharing in sharings]


@get("/workflows/{workflow_id:uuid}/fields")
async def read_fields(
    workflow_id: UUID,
    shared_workflow_repo: SharedWorkflowRepository,
    field: str,
) -> list[dict[str, str]]:
    """Return one projected field of every sharing of a workflow."""
    rows = await shared_workflow_repo.find_with_fields([workflow_id], [field])
    return [{key: str(value) for key, value in row.items()} for row in rows]


@get("/api-context")
async def show_api_context(rest_api_context: RestApiContext) -> dict[str, Any]:
    """Return the injected REST context."""
    return {"base_url": rest_api_context.base_url, "timeout": rest_api_context.timeout}


def create_test_app(session_maker, config: SharingPluginConfig | None = None) -> Litestar:
    """Create a Litestar app with the plugin and a test database session."""

    async def provide_session() -> AsyncIterator[AsyncSession]:
        async with session_maker() as session:
            yield session

    route_handlers = [list_owners, read_fields]
    if config is not None and config.api_base_url is not None:
        route_handlers.append(show_api_context)

    return Litestar(
        route_handlers=route_handlers,
        plugins=[SharingPlugin(config=config)],
        dependencies={"db_session": Provide(provide_session)},
    )


# =============================================================================
# Plugin Tests
# =============================================================================


class TestSharingPluginConfig:
    """Tests for SharingPluginConfig defaults."""

    def test_defaults(self) -> None:
        """The default keys match the handler parameter names used above."""
        config = SharingPluginConfig()

        assert config.dependency_key_repository == "shared_workflow_repo"
        assert config.dependency_key_api_context == "rest_api_context"
        assert config.api_base_url is None
        assert config.api_timeout == 30.0


class TestSharingPlugin:
    """Tests for SharingPlugin app initialization."""

    def test_api_context_requires_base_url(self) -> None:
        """Without a base URL no REST context exists."""
        plugin = SharingPlugin()
        Litestar(route_handlers=[], plugins=[plugin])

        with pytest.raises(RuntimeError, match="api_base_url"):
            _ = plugin.api_context

    def test_api_context_after_init(self) -> None:
        """The REST context is built from the config at app init."""
        plugin = SharingPlugin(
            config=SharingPluginConfig(api_base_url="http://localhost:5678/rest", api_push_ref="ref-1"),
        )
        Litestar(route_handlers=[], plugins=[plugin])

        assert plugin.api_context.base_url == "http://localhost:5678/rest"
        assert plugin.api_context.push_ref == "ref-1"

    async def test_repository_injection(self, session_maker, sharing_data: dict[str, Any]) -> None:
        """Handlers receive a repository bound to the request session."""
        app = create_test_app(session_maker)
        workflow_id = sharing_data["member_workflow"].id

        async with AsyncTestClient(app=app) as client:
            response = await client.get(f"/workflows/{workflow_id}/owners")

        assert response.status_code == HTTP_200_OK
        assert response.json() == ["member@example.com"]

    async def test_sharing_error_handler(self, session_maker, sharing_data: dict[str, Any]) -> None:
        """Package errors become 400 responses."""
        app = create_test_app(session_maker)
        workflow_id = sharing_data["member_workflow"].id

        async with AsyncTestClient(app=app) as client:
            ok = await client.get(f"/workflows/{workflow_id}/fields", params={"field": "role_id"})
            bad = await client.get(f"/workflows/{workflow_id}/fields", params={"field": "password"})

        assert ok.status_code == HTTP_200_OK
        assert len(ok.json()) == 2
        assert bad.status_code == HTTP_400_BAD_REQUEST
        assert bad.json() == {
            "error": "UnknownFieldError",
            "message": "Shared workflow has no field 'password'",
        }

    async def test_api_context_injection(self, session_maker) -> None:
        """Handlers receive the configured REST context."""
        app = create_test_app(
            session_maker,
            SharingPluginConfig(api_base_url="http://localhost:5678/rest", api_timeout=5.0),
        )

        async with AsyncTestClient(app=app) as client:
            response = await client.get("/api-context")

        assert response.status_code == HTTP_200_OK
        assert response.json() == {"base_url": "http://localhost:5678/rest", "timeout": 5.0}
