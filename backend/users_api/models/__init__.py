"""ORM Models: SQLAlchemy declarative models for stored entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Importing this package registers every table on Base.metadata

Design Decisions:
    - Models imported here so create_all() at startup sees every table
"""

from users_api.models.user import User  # noqa: F401
