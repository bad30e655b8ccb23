"""Boundary Protocols: contracts between the route layer and the store.

Invariants:
    - Routes depend on UserRepository, never on SQLAlchemy directly
    - Implementations raise UserNotFoundError / DatabaseError only

Design Decisions:
    - Protocol over ABC: structural subtyping lets tests pass a plain fake class
"""

from typing import Protocol, Sequence

from users_api.core.domain_types import UserId


class UserRecord(Protocol):
    """Structural contract for a stored user row."""
    id: int
    name: str
    email: str


class NewUser(Protocol):
    """Structural contract for a create payload."""
    name: str
    email: str


class UserRepository(Protocol):
    """Contract for user persistence: implemented by infrastructure."""
    async def get_user_by_id(self, user_id: UserId) -> UserRecord: ...
    async def get_all_users(self) -> Sequence[UserRecord]: ...
    async def create_user(self, new_user: NewUser) -> UserRecord: ...
    async def delete_user(self, user_id: UserId) -> bool: ...
