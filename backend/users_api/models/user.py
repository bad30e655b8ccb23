"""User ORM: the only persisted entity.

Invariants:
    - id is an auto-increment integer primary key (store-assigned)
    - email is unique (enforced by the store, not the service)
    - created_at is set by the store at insert time; rows are never updated

Design Decisions:
    - server_default=func.now() over a Python default: the stored timestamp is
      the one returned to clients, read back with refresh() after commit
"""

from datetime import datetime

from sqlalchemy import Integer, String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from users_api.db.base import Base


class User(Base):
    """A user row."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, server_default=func.now(),
    )
