from collections.abc import AsyncGenerator

from fastapi import Depends
from fastapi.requests import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


def _get_db_pool(request: Request) -> async_sessionmaker:
    return request.app.state.pool


async def _get_connection_from_pool(
    pool: async_sessionmaker = Depends(_get_db_pool),
) -> AsyncGenerator[AsyncSession, None]:
    async with pool() as session:
        yield session


async def get_session(session: AsyncSession = Depends(_get_connection_from_pool)) -> AsyncSession:
    return session
