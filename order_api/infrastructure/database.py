"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - storage_errors maps SQLAlchemy exceptions to typed errors (core/errors.py);
      driver messages never reach the client

Design Decisions:
    - Manager built in the FastAPI lifespan and kept on app.state, injected via get_db
      (no module-level singleton; tests override get_db)
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import logging
import re
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from order_api.core.errors import (
    DatabaseError, RecordNotFoundError, UniqueConstraintError,
)

logger = logging.getLogger(__name__)

# sqlite: "UNIQUE constraint failed: customers.email"
# postgres: 'duplicate key value ... DETAIL:  Key (email)=(a@x.com) already exists.'
_UNIQUE_FIELD_PATTERNS = (
    re.compile(r"UNIQUE constraint failed: \w+\.(\w+)"),
    re.compile(r"Key \((\w+)\)="),
    re.compile(r'unique constraint "\w+?_(\w+)_key"'),
)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
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
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def is_unique_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig if exc.orig is not None else exc).lower()
    return "unique" in message or "duplicate key" in message


def unique_violation_field(exc: IntegrityError) -> str | None:
    """Best-effort name of the column behind a unique violation."""
    message = str(exc.orig if exc.orig is not None else exc)
    for pattern in _UNIQUE_FIELD_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group(1)
    return None


@asynccontextmanager
async def storage_errors(
    db: AsyncSession, operation: str,
) -> AsyncGenerator[None, None]:
    """Classify storage failures raised inside the block.

    Unique violations become UniqueConstraintError, missing rows become
    RecordNotFoundError, everything else becomes a generic DatabaseError
    naming `operation` (e.g. "creating customer").
    """
    try:
        yield
    except IntegrityError as e:
        await db.rollback()
        logger.error(f"DB integrity error while {operation}: {e}")
        if is_unique_violation(e):
            raise UniqueConstraintError(unique_violation_field(e)) from e
        raise DatabaseError(operation) from e
    except NoResultFound as e:
        raise RecordNotFoundError() from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"DB error while {operation}: {e}")
        raise DatabaseError(operation) from e


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    db_manager: DatabaseSessionManager | None = getattr(
        request.app.state, "db_manager", None,
    )
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
