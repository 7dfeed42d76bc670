"""Generic REST helpers for talking to the instance backend.

Each call opens a short-lived :class:`httpx.AsyncClient` rooted at the
context's base URL. Responses are returned as parsed JSON, exactly as sent by
the server. Transport errors and non-2xx statuses propagate as httpx
exceptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = ["RestApiContext", "get", "request"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestApiContext:
    """Connection context for REST calls.

    Attributes:
        base_url: Root URL of the REST API, e.g. ``"https://example.com/rest"``.
        push_ref: Optional push connection reference sent as the ``push-ref``
            header so the server can route push messages back to this client.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport, mainly for tests.

    Example:
        >>> context = RestApiContext(base_url="http://localhost:5678/rest")
        >>> plan = await get_current_plan(context)
    """

    base_url: str
    push_ref: str | None = None
    timeout: float = 30.0
    transport: httpx.AsyncBaseTransport | None = None


async def request(
    context: RestApiContext,
    method: str,
    endpoint: str,
    *,
    params: Mapping[str, Any] | None = None,
    data: Any = None,
    headers: Mapping[str, str] | None = None,
) -> Any:
    """Send a request and return the decoded response body.

    Args:
        context: Connection context.
        method: HTTP method.
        endpoint: Path relative to the context's base URL.
        params: Optional query parameters.
        data: Optional JSON body.
        headers: Optional extra headers.

    Returns:
        The parsed JSON body, or None if the body is empty.

    Raises:
        httpx.HTTPStatusError: If the server answers with a non-2xx status.
        httpx.TransportError: If the request could not be sent.
    """
    request_headers = dict(headers or {})
    if context.push_ref:
        request_headers["push-ref"] = context.push_ref

    logger.debug("%s %s%s", method, context.base_url, endpoint)
    async with httpx.AsyncClient(
        base_url=context.base_url,
        timeout=context.timeout,
        transport=context.transport,
    ) as client:
        response = await client.request(
            method,
            endpoint,
            params=params,
            json=data,
            headers=request_headers,
        )

    response.raise_for_status()
    if not response.content:
        return None
    return response.json()


async def get(
    context: RestApiContext,
    endpoint: str,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
) -> Any:
    """Send a GET request and return the decoded response body."""
    return await request(context, "GET", endpoint, params=params, headers=headers)
