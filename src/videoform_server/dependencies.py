"""FastAPI dependencies — DB sessions, the step registry, and client metadata.

``get_db()`` is the single transaction boundary: the repository only
flushes, this dependency commits on success and rolls back on error.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from videoform_db.engine import get_session_factory
from videoform_db.repository import SubmissionRepository
from videoform_steps.registry import StepRegistry


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session; commit on success, rollback on error."""
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_repository(request: Request) -> SubmissionRepository:
    """Return the repository singleton from ``app.state``."""
    return request.app.state.repository


def get_registry(request: Request) -> StepRegistry:
    """Return the loaded step registry from ``app.state``."""
    return request.app.state.registry


def get_remote_address(request: Request) -> str:
    """Client address as seen through the proxy chain.

    ``X-Forwarded-For`` first, then ``X-Real-IP``; ``"unknown"`` otherwise.
    """
    return (
        request.headers.get("x-forwarded-for")
        or request.headers.get("x-real-ip")
        or "unknown"
    )


def get_user_agent(request: Request) -> str:
    return request.headers.get("user-agent") or "unknown"
