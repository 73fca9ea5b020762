"""Protocol definitions for collaborators outside the ledger core."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class OrganizationResolver(Protocol):
    async def resolve_organization(self) -> str:
        """Return the caller's organization id, or raise AuthError."""
        ...


class AuthError(Exception):
    """The caller's session carries no organization."""
