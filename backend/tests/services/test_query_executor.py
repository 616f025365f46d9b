"""Query Executor — positional binding, engine selection, rows vs. row counts.

Tests cover:
    - `?` placeholders become :p0, :p1 ... in order
    - placeholder/parameter count mismatch is rejected
    - SQLite URLs skip pool sizing; in-memory SQLite uses StaticPool
    - SELECT returns row dicts, INSERT returns the affected-row count
    - SQL errors surface as PersistenceError, integrity errors as ConstraintViolationError
    - health_check reports a working database
"""

import pytest
from sqlalchemy.pool import StaticPool

from budget_api.core.errors import ConstraintViolationError, PersistenceError
from budget_api.infrastructure.database import bind_positional, engine_options


def test_bind_positional_numbers_placeholders_in_order():
    statement, binds = bind_positional("SELECT * FROM t WHERE a = ? AND b = ?", ["x", 2])
    assert str(statement) == "SELECT * FROM t WHERE a = :p0 AND b = :p1"
    assert binds == {"p0": "x", "p1": 2}


def test_bind_positional_rejects_count_mismatch():
    with pytest.raises(ValueError):
        bind_positional("SELECT ? , ?", [1])


def test_engine_options_in_memory_sqlite_uses_static_pool():
    assert engine_options("sqlite+aiosqlite:///:memory:") == {"poolclass": StaticPool}


def test_engine_options_file_sqlite_has_no_pool_sizing():
    assert engine_options("sqlite+aiosqlite:///./budget.db") == {}


def test_engine_options_postgres_sets_pool():
    options = engine_options(
        "postgresql+asyncpg://u:p@db:5432/budget", pool_size=5, max_overflow=2,
    )
    assert options["pool_size"] == 5
    assert options["max_overflow"] == 2
    assert options["pool_pre_ping"] is True


async def test_select_returns_rows_and_insert_returns_count(executor):
    await executor.execute("CREATE TABLE kv (k TEXT PRIMARY KEY, v INTEGER)")

    assert await executor.execute("INSERT INTO kv VALUES (?, ?)", ["a", 1]) == 1
    rows = await executor.execute("SELECT k, v FROM kv WHERE k = ?", ["a"])

    assert rows == [{"k": "a", "v": 1}]


async def test_integrity_violation_is_constraint_error(executor):
    await executor.execute("CREATE TABLE uniq (k TEXT PRIMARY KEY)")
    await executor.execute("INSERT INTO uniq VALUES (?)", ["a"])

    with pytest.raises(ConstraintViolationError):
        await executor.execute("INSERT INTO uniq VALUES (?)", ["a"])


async def test_bad_sql_is_persistence_error(executor):
    with pytest.raises(PersistenceError):
        await executor.execute("SELECT * FROM no_such_table")


async def test_health_check_succeeds(db_manager):
    assert await db_manager.health_check() is True
