"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId is a signed 32-bit integer (matches the SERIAL column)
    - Every store call is tagged with exactly one StoreOperation

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - str Enums: serialize into log records without custom encoders
"""

from enum import Enum
from typing import NewType


UserId = NewType("UserId", int)

USER_ID_MIN = -(2 ** 31)
USER_ID_MAX = 2 ** 31 - 1


class StoreOperation(str, Enum):
    """Store statements issued by the service: one per request."""
    FETCH_ONE = "fetch_one"
    FETCH_ALL = "fetch_all"
    CREATE = "create"
    DELETE = "delete"
    HEALTH = "health"
    SCHEMA = "schema"
