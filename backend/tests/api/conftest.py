"""API test fixtures: fresh application per test over an in-memory store.

Invariants:
    - Every test gets its own app from create_app() (fresh MetricsCollector)
    - get_db dependency overridden to use the test session factory
    - db_manager patched so /health runs SELECT 1 against the test engine
    - fake_repo swaps the repository for an in-memory fake that can be told to fail

Design Decisions:
    - ASGITransport does not run lifespan: schema comes from the test_engine
      fixture instead of create_schema()
    - Fake repository keeps store failures deterministic (no broken engine needed)
"""

from dataclasses import dataclass, field
from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient

import users_api.infrastructure.database as db_module
from users_api.api.dependencies import get_user_repository
from users_api.config import Settings
from users_api.core.domain_types import StoreOperation
from users_api.core.errors import DatabaseError, UserNotFoundError
from users_api.infrastructure.database import DatabaseSessionManager, get_db
from users_api.main import create_app


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:", _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def metrics(app):
    return app.state.metrics


@pytest.fixture
async def client(app, test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@dataclass
class FakeUser:
    id: int
    name: str
    email: str
    created_at: datetime | None = field(
        default_factory=lambda: datetime(2026, 1, 1, 12, 0, 0),
    )


class FakeUserRepository:
    """In-memory UserRepository; set failing=True to raise DatabaseError."""

    def __init__(self):
        self.users: dict[int, FakeUser] = {}
        self.calls: list[str] = []
        self.failing = False
        self._next_id = 1

    def _check(self, operation: StoreOperation) -> None:
        self.calls.append(operation.value)
        if self.failing:
            raise DatabaseError("Connection or operational error", operation)

    async def get_user_by_id(self, user_id):
        self._check(StoreOperation.FETCH_ONE)
        if user_id not in self.users:
            raise UserNotFoundError(user_id)
        return self.users[user_id]

    async def get_all_users(self):
        self._check(StoreOperation.FETCH_ALL)
        return [self.users[k] for k in sorted(self.users)]

    async def create_user(self, new_user):
        self._check(StoreOperation.CREATE)
        user = FakeUser(self._next_id, new_user.name, new_user.email)
        self.users[user.id] = user
        self._next_id += 1
        return user

    async def delete_user(self, user_id):
        self._check(StoreOperation.DELETE)
        return self.users.pop(user_id, None) is not None


@pytest.fixture
def fake_repo(app):
    repo = FakeUserRepository()
    app.dependency_overrides[get_user_repository] = lambda: repo
    yield repo
    app.dependency_overrides.pop(get_user_repository, None)


@pytest.fixture
async def fake_client(app, fake_repo):
    """Client whose routes talk to FakeUserRepository."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
