"""Exception hierarchy for litestar-sharing.

Only argument errors detected before a query is built live here. Errors raised
by the database driver or the HTTP transport are never wrapped and reach the
caller unchanged.
"""

from __future__ import annotations

__all__ = (
    "SharingError",
    "UnknownFieldError",
    "UnknownRelationError",
)


class SharingError(Exception):
    """Base exception for all litestar-sharing errors.

    Catch this to handle every error raised by the package itself, without
    swallowing database or transport failures.
    """


class UnknownFieldError(SharingError):
    """Raised when a projection names a field the sharing entity does not have.

    Attributes:
        field: The field name that was requested.
    """

    def __init__(self, field: str) -> None:
        """Initialize the exception with the offending field.

        Args:
            field: The field name that was requested.
        """
        self.field = field
        super().__init__(f"Shared workflow has no field '{field}'")


class UnknownRelationError(SharingError):
    """Raised when a caller asks to load a relation that does not exist.

    Attributes:
        relation: The relation name that was requested.
    """

    def __init__(self, relation: str) -> None:
        """Initialize the exception with the offending relation.

        Args:
            relation: The relation name that was requested.
        """
        self.relation = relation
        super().__init__(f"Shared workflow has no relation '{relation}'")
