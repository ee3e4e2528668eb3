"""
Inkwell Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, FastAPI dependency, and the
       retry wrapper every persistence round trip goes through.
How:   Creates an async engine with connection pooling, provides a session
       dependency that auto-commits on success and auto-rolls-back on error.
Who:   Used by route handlers via FastAPI's dependency injection system and
       by the entity services.
When:  Engine is created at module import; sessions are created per-request.

Transaction Model:
    One request = one AsyncSession = one transaction. Service calls inside a
    request run sequentially; nothing is committed until the route handler
    returns without raising. Any exception rolls the whole request back.

Connection Pooling Strategy:
    pool_size=20:     Persistent connections for normal load
    max_overflow=10:  Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:    Validates connections before use
    pool_recycle=3600: Recycles connections every hour
    SQLite URLs (local development, tests) skip the pool arguments.
"""

import logging
from typing import Any, AsyncGenerator, Awaitable, Callable, Dict, TypeVar

from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from app.config import settings
from app.exceptions import ConflictError, DatabaseError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Generated ids live in INTEGER (int4) columns
MAX_ID = 2**31 - 1


def is_storable_id(value: int) -> bool:
    """True when `value` fits an id column; anything else cannot match a row."""
    return 1 <= value <= MAX_ID


def _engine_options() -> Dict[str, Any]:
    """Engine keyword arguments for the configured database backend."""
    options: Dict[str, Any] = {
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, outside the
# session context
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to register with the shared metadata
    used by Alembic and by the test suite's `create_all`.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (the handler performs queries)
        3. On success: commits the transaction
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    Exceptions raised by the route (including authorization failures that
    happen after a write) land in the `except` branch, so a rejected request
    never leaves partial writes behind.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise  # Re-raise so the global error handler can respond appropriately
        finally:
            await session.close()


# ── Retry Wrapper ─────────────────────────────────────────────────────────
def is_transient_error(exc: BaseException) -> bool:
    """
    True for failures worth retrying: lost connections, failovers, locks.

    Constraint violations and programming errors are never transient.
    """
    if isinstance(exc, IntegrityError):
        return False
    if isinstance(exc, OperationalError):
        return True
    return isinstance(exc, DBAPIError) and bool(exc.connection_invalidated)


async def run_with_retry(
    session: AsyncSession,
    operation: Callable[[], Awaitable[T]],
    description: str,
) -> T:
    """
    Run one persistence round trip with tenacity retry on transient failures.

    What:    Executes `operation()`; on a transient DB error rolls the session
             back and retries with exponential backoff + jitter.
    Who:     Called by EntityService for every statement it issues.

    Error translation:
        IntegrityError          → ConflictError (409)
        Other DB errors         → DatabaseError (500) once retries are exhausted

    Note:
        The rollback discards anything the current request flushed before the
        failing statement. Entity operations issue their single write last, so
        nothing earlier in the request is lost in practice.
    """

    async def attempt_operation() -> T:
        try:
            return await operation()
        except DBAPIError as exc:
            if is_transient_error(exc):
                await session.rollback()
            raise

    retrying = AsyncRetrying(
        stop=stop_after_attempt(settings.retry_max_attempts),
        wait=wait_exponential_jitter(
            multiplier=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception(is_transient_error),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )

    try:
        async for attempt in retrying:
            with attempt:
                result = await attempt_operation()
        return result
    except IntegrityError as exc:
        logger.warning("Integrity error during %s: %s", description, exc.orig)
        raise ConflictError(
            message="The request conflicts with existing data.",
            context={"operation": description, "original_error": type(exc.orig).__name__},
        ) from exc
    except DBAPIError as exc:
        logger.error("Database error during %s: %s", description, str(exc), exc_info=True)
        raise DatabaseError(
            context={"operation": description, "error_type": type(exc).__name__},
        ) from exc


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
