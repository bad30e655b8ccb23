"""User Id Parsing: strict signed 32-bit parsing of path segments."""

import pytest

from users_api.core.domain_types import USER_ID_MAX, USER_ID_MIN
from users_api.core.errors import InvalidUserIdError
from users_api.core.parse_user_id import parse_user_id


@pytest.mark.parametrize("raw, expected", [
    ("1", 1),
    ("42", 42),
    ("0", 0),
    ("-7", -7),
    ("+7", 7),
    ("007", 7),
    ("2147483647", USER_ID_MAX),
    ("-2147483648", USER_ID_MIN),
])
def test_parses_valid_ids(raw, expected):
    assert parse_user_id(raw) == expected


@pytest.mark.parametrize("raw", [
    "",
    "abc",
    "12abc",
    "1.5",
    " 1",
    "1 ",
    "1_000",
    "+",
    "-",
    "1/2",
    "٣",  # Arabic-Indic digit: int() accepts it, ids do not
    "2147483648",
    "-2147483649",
    "99999999999999999999",
])
def test_rejects_invalid_ids(raw):
    with pytest.raises(InvalidUserIdError) as exc_info:
        parse_user_id(raw)
    assert exc_info.value.raw_value == raw
    assert exc_info.value.to_response() == {"error": "Invalid user ID"}
