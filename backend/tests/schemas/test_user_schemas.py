"""User Schemas: create payload decoding and response shaping.

Invariants:
    - CreateUser requires string name and email; nothing else is checked
    - Extra keys are ignored
    - UserResponse reads attributes from ORM-like objects
"""

from dataclasses import dataclass
from datetime import datetime

import pytest
from pydantic import ValidationError

from users_api.schemas.user import CreateUser, MetricsResponse, UserResponse


def test_create_user_decodes_json():
    user = CreateUser.model_validate_json(b'{"name":"Alice","email":"a@example.com"}')
    assert user.name == "Alice"
    assert user.email == "a@example.com"


def test_create_user_accepts_any_strings():
    user = CreateUser.model_validate_json(b'{"name":"","email":"not-an-email"}')
    assert user.name == ""
    assert user.email == "not-an-email"


def test_create_user_ignores_extra_keys():
    user = CreateUser.model_validate_json(
        b'{"name":"A","email":"a@x","role":"admin"}',
    )
    assert not hasattr(user, "role")


@pytest.mark.parametrize("body", [
    b"",
    b"not json",
    b'{"name":"A"}',
    b'{"email":"a@x"}',
    b'{"name":1,"email":"a@x"}',
    b'["A","a@x"]',
    b'{"name":"A","email":null}',
])
def test_create_user_rejects_malformed_payloads(body):
    with pytest.raises(ValidationError):
        CreateUser.model_validate_json(body)


@dataclass
class _Row:
    id: int
    name: str
    email: str
    created_at: datetime | None


def test_user_response_from_attributes():
    row = _Row(3, "Bob", "b@example.com", datetime(2026, 1, 2, 3, 4, 5))
    body = UserResponse.model_validate(row).model_dump(mode="json")
    assert body == {
        "id": 3,
        "name": "Bob",
        "email": "b@example.com",
        "created_at": "2026-01-02T03:04:05",
    }


def test_user_response_allows_missing_timestamp():
    row = _Row(3, "Bob", "b@example.com", None)
    assert UserResponse.model_validate(row).created_at is None


def test_metrics_response_rejects_negative_counts():
    with pytest.raises(ValidationError):
        MetricsResponse(requests=-1, error=0)
