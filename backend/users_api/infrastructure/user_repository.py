"""User Repository: the four user statements over an AsyncSession.

Invariants:
    - One statement per call, committed on its own (autocommit semantics)
    - Reads ordered by id ascending
    - Missing row on fetch raises UserNotFoundError; missing row on delete returns False
    - SQLAlchemy/driver failures raised as DatabaseError tagged with the operation

Design Decisions:
    - Repository receives the request-scoped session from get_db (FastAPI Depends),
      so tests swap the session factory without touching this class
    - add/commit/refresh over INSERT ... RETURNING: the refreshed row carries the
      store-assigned id and created_at on every backend
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.core.domain_types import StoreOperation, UserId
from users_api.core.errors import UserNotFoundError
from users_api.core.repository_protocols import NewUser
from users_api.infrastructure.database import map_store_error
from users_api.models.user import User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """UserRepository backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _store_call(
        self, operation: StoreOperation,
    ) -> AsyncGenerator[None, None]:
        try:
            yield
        except (SQLAlchemyError, OSError) as e:
            await self._db.rollback()
            raise map_store_error(e, operation) from e

    async def get_user_by_id(self, user_id: UserId) -> User:
        async with self._store_call(StoreOperation.FETCH_ONE):
            result = await self._db.execute(
                select(User).where(User.id == user_id),
            )
            user = result.scalar_one_or_none()
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def get_all_users(self) -> list[User]:
        async with self._store_call(StoreOperation.FETCH_ALL):
            result = await self._db.execute(select(User).order_by(User.id))
            return list(result.scalars().all())

    async def create_user(self, new_user: NewUser) -> User:
        user = User(name=new_user.name, email=new_user.email)
        async with self._store_call(StoreOperation.CREATE):
            self._db.add(user)
            await self._db.commit()
            await self._db.refresh(user)
        return user

    async def delete_user(self, user_id: UserId) -> bool:
        async with self._store_call(StoreOperation.DELETE):
            result = await self._db.execute(
                delete(User).where(User.id == user_id),
            )
            await self._db.commit()
        return result.rowcount > 0
