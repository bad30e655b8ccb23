"""Route Dependencies: injected collaborators and request-body helpers.

Invariants:
    - Metrics and settings come from app.state (one instance per application)
    - read_limited_body never buffers more than limit + one chunk
    - Oversized bodies raise PayloadTooLargeError before any decoding

Design Decisions:
    - Content-Length checked first: a declared oversize body is rejected without
      reading it at all
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.config import Settings
from users_api.core.errors import PayloadTooLargeError
from users_api.core.metrics import MetricsCollector
from users_api.core.repository_protocols import UserRepository
from users_api.infrastructure.database import get_db
from users_api.infrastructure.user_repository import SqlUserRepository


def get_metrics(request: Request) -> MetricsCollector:
    return request.app.state.metrics


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    return SqlUserRepository(db)


async def read_limited_body(request: Request, limit: int) -> bytes:
    """Read the request body, failing once it grows past limit bytes."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError(limit)

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise PayloadTooLargeError(limit)
    return bytes(body)
