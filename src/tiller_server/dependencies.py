from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from tiller_server.database import get_session


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with get_session(request.app.state.db_session_maker) as session:
        yield session


async def get_readonly_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with get_session(request.app.state.db_session_maker, read_only=True) as session:
        yield session
