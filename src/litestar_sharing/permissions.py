"""Roles and scopes used to decide cross-user visibility.

A scope is a ``"<resource>:<operation>"`` string such as ``"workflow:read"``.
Every user carries one global role; the scopes attached to that role apply to
all resources regardless of who they were shared with.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from enum import Enum
from typing import Literal, TypeAlias

if sys.version_info >= (3, 11):
    from enum import StrEnum
else:

    class StrEnum(str, Enum):
        """String enumeration compatibility for Python < 3.11."""

        def __str__(self) -> str:
            return str(self.value)


__all__ = [
    "GLOBAL_ROLE_SCOPES",
    "ELEVATED_GLOBAL_ROLES",
    "GlobalRole",
    "RoleScope",
    "Scope",
    "ScopeMode",
    "WorkflowRole",
    "has_global_scope",
]

Scope: TypeAlias = str
ScopeMode: TypeAlias = Literal["oneOf", "allOf"]


class RoleScope(StrEnum):
    """The kind of resource a role applies to.

    Attributes:
        GLOBAL: Roles assigned to users for the whole instance.
        WORKFLOW: Roles held on a single shared workflow.
        CREDENTIAL: Roles held on a single shared credential.
    """

    GLOBAL = "global"
    WORKFLOW = "workflow"
    CREDENTIAL = "credential"


class GlobalRole(StrEnum):
    """Names of the instance-wide roles."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"


class WorkflowRole(StrEnum):
    """Names of the roles a user can hold on a shared workflow."""

    OWNER = "owner"
    EDITOR = "editor"
    USER = "user"


ELEVATED_GLOBAL_ROLES: frozenset[str] = frozenset({GlobalRole.OWNER, GlobalRole.ADMIN})
"""Global roles that see every user's sharings."""


def _crud(resource: str, *extra: str) -> frozenset[Scope]:
    operations = ("create", "read", "update", "delete", "list", *extra)
    return frozenset(f"{resource}:{operation}" for operation in operations)


_MEMBER_SCOPES: frozenset[Scope] = frozenset(
    {
        "eventBusEvent:list",
        "eventBusEvent:read",
        "tag:create",
        "tag:read",
        "tag:update",
        "tag:list",
        "user:list",
    }
)

_ELEVATED_SCOPES: frozenset[Scope] = (
    _MEMBER_SCOPES
    | _crud("workflow", "share", "execute")
    | _crud("credential", "share")
    | _crud("user", "resetPassword", "changeRole")
    | _crud("tag")
    | _crud("variable")
    | _crud("eventBusDestination", "test")
    | frozenset({"auditLogs:manage", "ldap:manage", "ldap:sync", "license:manage", "saml:manage"})
)

GLOBAL_ROLE_SCOPES: dict[str, frozenset[Scope]] = {
    GlobalRole.OWNER: _ELEVATED_SCOPES,
    GlobalRole.ADMIN: _ELEVATED_SCOPES,
    GlobalRole.MEMBER: _MEMBER_SCOPES,
}
"""Scopes granted by each global role."""


def has_global_scope(
    role_name: str | None,
    scope: Scope | Iterable[Scope],
    mode: ScopeMode = "oneOf",
) -> bool:
    """Check whether a global role grants one or more scopes.

    Args:
        role_name: Name of the global role, or ``None`` when the user has none.
        scope: A single scope or an iterable of scopes.
        mode: ``"oneOf"`` is satisfied by any of the scopes, ``"allOf"``
            requires every one of them.

    Returns:
        True if the role grants the requested scopes. Unknown roles grant nothing.

    Example:
        >>> has_global_scope("owner", "workflow:read")
        True
        >>> has_global_scope("member", ["workflow:read", "tag:read"], mode="allOf")
        False
    """
    granted = GLOBAL_ROLE_SCOPES.get(role_name or "", frozenset())
    scopes = [scope] if isinstance(scope, str) else list(scope)

    if mode == "allOf":
        return all(s in granted for s in scopes)
    return any(s in granted for s in scopes)
