"""Litestar plugin for workflow sharing.

This module provides the SharingPlugin, which exposes the shared workflow
repository and the REST API context to route handlers through dependency
injection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from litestar import Response
from litestar.di import Provide
from litestar.plugins import InitPluginProtocol
from litestar.status_codes import HTTP_400_BAD_REQUEST
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from litestar_sharing.api.client import RestApiContext
from litestar_sharing.db.repositories import SharedWorkflowRepository
from litestar_sharing.exceptions import SharingError

if TYPE_CHECKING:
    from litestar import Request
    from litestar.config.app import AppConfig

__all__ = [
    "SharingPlugin",
    "SharingPluginConfig",
    "provide_shared_workflow_repository",
    "sharing_error_handler",
]


@dataclass
class SharingPluginConfig:
    """Configuration for the SharingPlugin.

    Attributes:
        dependency_key_repository: The key used for dependency injection of
            the SharedWorkflowRepository. Defaults to "shared_workflow_repo".
        dependency_key_api_context: The key used for dependency injection of
            the RestApiContext. Defaults to "rest_api_context".
        api_base_url: Root URL of the instance REST API. The REST context is
            only provided when this is set.
        api_timeout: Timeout in seconds for REST calls.
        api_push_ref: Optional push reference sent with every REST call.

    Note:
        The repository provider depends on a ``db_session`` dependency, which
        advanced-alchemy's SQLAlchemy plugin registers by default.
    """

    dependency_key_repository: str = "shared_workflow_repo"
    dependency_key_api_context: str = "rest_api_context"
    api_base_url: str | None = None
    api_timeout: float = 30.0
    api_push_ref: str | None = None


async def provide_shared_workflow_repository(db_session: AsyncSession) -> SharedWorkflowRepository:
    """Build a repository bound to the request's database session."""
    return SharedWorkflowRepository(session=db_session)


def sharing_error_handler(_request: Request, exc: SharingError) -> Response:
    """Exception handler for SharingError.

    Args:
        _request: The Litestar request object.
        exc: The SharingError exception.

    Returns:
        A 400 JSON response naming the error.
    """
    return Response(
        content={
            "error": type(exc).__name__,
            "message": str(exc),
        },
        status_code=HTTP_400_BAD_REQUEST,
        media_type="application/json",
    )


class SharingPlugin(InitPluginProtocol):
    """Litestar plugin for workflow sharing.

    Example:
        Combined with advanced-alchemy's SQLAlchemy plugin::

            from advanced_alchemy.extensions.litestar import SQLAlchemyAsyncConfig, SQLAlchemyPlugin
            from litestar import Litestar, get

            from litestar_sharing import SharingPlugin, SharingPluginConfig
            from litestar_sharing.db import SharedWorkflowRepository


            @get("/workflows/{workflow_id:uuid}/access")
            async def check_access(
                workflow_id: UUID,
                shared_workflow_repo: SharedWorkflowRepository,
                current_user: UserModel,
            ) -> dict:
                return {"access": await shared_workflow_repo.has_access(workflow_id, current_user)}


            app = Litestar(
                route_handlers=[check_access],
                plugins=[
                    SQLAlchemyPlugin(config=SQLAlchemyAsyncConfig(connection_string="sqlite+aiosqlite:///db.sqlite")),
                    SharingPlugin(config=SharingPluginConfig(api_base_url="http://localhost:5678/rest")),
                ],
            )
    """

    __slots__ = ("_api_context", "_config")

    def __init__(self, config: SharingPluginConfig | None = None) -> None:
        """Initialize the plugin.

        Args:
            config: Optional configuration for the plugin.
        """
        self._config = config or SharingPluginConfig()
        self._api_context: RestApiContext | None = None

    @property
    def api_context(self) -> RestApiContext:
        """Get the REST API context.

        Returns:
            The RestApiContext instance.

        Raises:
            RuntimeError: If accessed before plugin initialization or without
                an ``api_base_url``.
        """
        if self._api_context is None:
            msg = "SharingPlugin has no REST API context. Set api_base_url and access it after app startup."
            raise RuntimeError(msg)
        return self._api_context

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Register dependencies and the exception handler.

        Args:
            app_config: The Litestar application configuration.

        Returns:
            The modified application configuration.
        """
        app_config.dependencies[self._config.dependency_key_repository] = Provide(
            provide_shared_workflow_repository,
        )

        if self._config.api_base_url is not None:
            self._api_context = RestApiContext(
                base_url=self._config.api_base_url,
                push_ref=self._config.api_push_ref,
                timeout=self._config.api_timeout,
            )

            def provide_api_context() -> RestApiContext:
                return self._api_context  # type: ignore[return-value]

            app_config.dependencies[self._config.dependency_key_api_context] = Provide(
                provide_api_context,
                sync_to_thread=False,
            )

        app_config.exception_handlers[SharingError] = sharing_error_handler  # type: ignore[assignment]
        return app_config
