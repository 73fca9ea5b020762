"""FastAPI dependency injection."""

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ledger.config import settings
from ledger.data.base import AuthError, OrganizationResolver
from ledger.data.session import build_engine, build_session_factory

engine = build_engine()
async_session = build_session_factory(engine)


class HeaderOrganizationResolver:
    """Reads the caller's organization from a request header."""

    def __init__(self, request: Request, header: str | None = None):
        self.request = request
        self.header = header or settings.organization_header

    async def resolve_organization(self) -> str:
        value = (self.request.headers.get(self.header) or "").strip()
        if not value:
            raise AuthError(f"Missing {self.header} header")
        return value


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_session


def get_organization_resolver(request: Request) -> OrganizationResolver:
    return HeaderOrganizationResolver(request)


async def get_organization_id(
    resolver: OrganizationResolver = Depends(get_organization_resolver),
) -> str:
    try:
        return await resolver.resolve_organization()
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e
