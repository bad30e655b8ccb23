"""User Id Parsing: strict signed 32-bit parse of the /users/{id} segment.

Invariants:
    - Accepts an optional +/- sign followed by ASCII digits, nothing else
    - Result lies in [USER_ID_MIN, USER_ID_MAX]
    - Any other input raises InvalidUserIdError (never ValueError)

Design Decisions:
    - Regex gate before int(): int() alone accepts whitespace, underscores and
      non-ASCII digits, none of which are valid ids
"""

import re

from users_api.core.domain_types import UserId, USER_ID_MIN, USER_ID_MAX
from users_api.core.errors import InvalidUserIdError

_USER_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_user_id(raw: str) -> UserId:
    """Parse a path segment into a UserId. Pure, no IO."""
    if not _USER_ID_PATTERN.fullmatch(raw):
        raise InvalidUserIdError(raw)
    value = int(raw)
    if not USER_ID_MIN <= value <= USER_ID_MAX:
        raise InvalidUserIdError(raw)
    return UserId(value)
