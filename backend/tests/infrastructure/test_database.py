"""Database Session Manager: error mapping, schema bootstrap and health check.

Invariants:
    - Each SQLAlchemy exception family maps to a fixed DatabaseError detail
    - create_schema() can run repeatedly without error
    - health_check() is True on a live store and False (never raises) otherwise,
      including for driver exceptions outside the SQLAlchemy hierarchy
    - map_store_error() only translates: logging happens in the error handler
"""

import logging

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)

from users_api.core.domain_types import StoreOperation
from users_api.core.errors import DatabaseError
from users_api.infrastructure.database import (
    DatabaseSessionManager, map_store_error,
)


def _manager_for(engine, session_factory) -> DatabaseSessionManager:
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = engine
    manager._session_factory = session_factory
    return manager


@pytest.mark.parametrize("exc, detail", [
    (IntegrityError("INSERT", {}, Exception("dup")), "Integrity constraint violated"),
    (OperationalError("SELECT", {}, Exception("down")), "Connection or operational error"),
    (ConnectionRefusedError("refused"), "Connection or operational error"),
    (DBAPIError("SELECT", {}, Exception("driver")), "Database driver error"),
    (SQLAlchemyError("other"), "Database operation failed"),
])
def test_map_store_error_details(exc, detail):
    error = map_store_error(exc, StoreOperation.FETCH_ONE)
    assert isinstance(error, DatabaseError)
    assert error.detail == detail
    assert error.operation == StoreOperation.FETCH_ONE


async def test_create_schema_is_idempotent(test_engine, test_session_factory):
    manager = _manager_for(test_engine, test_session_factory)
    await manager.create_schema()
    await manager.create_schema()

    async with test_engine.connect() as conn:
        tables = await conn.run_sync(
            lambda sync_conn: inspect(sync_conn).get_table_names(),
        )
    assert "users" in tables


async def test_health_check_true_on_live_store(test_engine, test_session_factory):
    manager = _manager_for(test_engine, test_session_factory)
    assert await manager.health_check() is True


async def test_health_check_false_when_query_fails(
    test_engine, test_session_factory, monkeypatch,
):
    manager = _manager_for(test_engine, test_session_factory)

    class _BrokenSession:
        async def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("down"))

        async def rollback(self):
            pass

        async def close(self):
            pass

    manager._session_factory = _BrokenSession
    assert await manager.health_check() is False


async def test_session_maps_errors_for_operation(test_engine, test_session_factory):
    manager = _manager_for(test_engine, test_session_factory)
    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session(StoreOperation.DELETE):
            raise OperationalError("DELETE", {}, Exception("down"))
    assert exc_info.value.to_response() == {"error": "Failed to delete user"}


def test_map_store_error_does_not_log(caplog):
    with caplog.at_level(logging.DEBUG, logger="users_api"):
        map_store_error(SQLAlchemyError("other"), StoreOperation.CREATE)
    assert caplog.records == []


async def test_health_check_false_on_unmapped_driver_error(
    test_engine, test_session_factory,
):
    manager = _manager_for(test_engine, test_session_factory)

    class _ExplodingSession:
        async def execute(self, *args, **kwargs):
            raise RuntimeError("driver state corrupted")

        async def close(self):
            pass

    manager._session_factory = _ExplodingSession
    assert await manager.health_check() is False
