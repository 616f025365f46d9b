"""Database Access — async session manager and the positional-parameter query executor.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions mapped to PersistenceError (core/errors.py);
      integrity violations to its ConstraintViolationError subclass
    - Write statements are committed inside the same session that ran them
    - `?` placeholders are bound positionally, in order; count must match params

Design Decisions:
    - Storage adapter picked from the URL scheme: sqlite+aiosqlite for dev/tests,
      postgresql+asyncpg for production. Pool sizing only applies to server engines
    - In-memory SQLite uses StaticPool so every session shares one connection
      (otherwise each connection would see an empty database)
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import itertools
import logging
import re
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Sequence

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql.elements import TextClause

from budget_api.core.errors import ConstraintViolationError, PersistenceError
from budget_api.core.repository_protocols import Row
from budget_api.db.base import Base
import budget_api.models.project  # noqa: F401  (registers the project table)

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\?")


def engine_options(
    database_url: str, pool_size: int = 20, max_overflow: int = 10,
) -> dict[str, Any]:
    """Engine keyword arguments for the storage engine named by `database_url`."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            return {"poolclass": StaticPool}
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


def bind_positional(
    query: str, params: Sequence[Any],
) -> tuple[TextClause, dict[str, Any]]:
    """Rewrite `?` placeholders to named binds (:p0, :p1, ...)."""
    counter = itertools.count()
    sql = _PLACEHOLDER.sub(lambda _: f":p{next(counter)}", query)
    placeholders = next(counter)
    if placeholders != len(params):
        raise ValueError(
            f"Query has {placeholders} placeholder(s) but {len(params)} parameter(s)",
        )
    return text(sql), {f"p{i}": value for i, value in enumerate(params)}


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            **engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise ConstraintViolationError("Integrity constraint violated") from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise PersistenceError("Connection or operational error", "execute") from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise PersistenceError("Database driver error", "query") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise PersistenceError("Database operation failed", "unknown") from e
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create missing tables from ORM metadata (dev/test — production uses alembic)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (backs GET /health/ready)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


class SqlQueryExecutor:
    """QueryExecutor backed by a DatabaseSessionManager — one session per statement."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def execute(
        self, query: str, params: Sequence[Any] = (),
    ) -> list[Row] | int:
        statement, binds = bind_positional(query, params)
        async with self._db.session() as session:
            result = await session.execute(statement, binds)
            if result.returns_rows:
                return [dict(row) for row in result.mappings().all()]
            await session.commit()
            return result.rowcount
