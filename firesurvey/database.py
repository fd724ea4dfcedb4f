"""
Fire Survey Backend: Database Session Management
================================================

What:  Async SQLAlchemy engine, session factory, schema bootstrap and FastAPI dependency.
How:   One pooled async engine over the SQLite database file; each request gets
       its own session that commits on success and rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system and by
       the application lifespan (init_database / dispose_engine).
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling:
    aiosqlite file databases use SQLAlchemy's AsyncAdaptedQueuePool, so the
    pool settings below apply. In-memory URLs get a StaticPool, which takes
    no sizing arguments.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from firesurvey.config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if settings.database_file is not None:
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
# expire_on_commit=False: attributes stay readable after commit without a
# new query (the session may already be closed by then).
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata)."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits anything the handler left pending
        4. On error: rolls back and re-raises for the global error handler
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/fire-alert")
        async def fire_alert(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_database() -> None:
    """
    Open the database, verify it answers, and create missing tables.

    When:   Called once from the application lifespan before serving requests.
    Raises: Any driver error unchanged; the lifespan treats it as fatal.
    """
    # Registers SurveyResult on Base.metadata
    from firesurvey.models import survey  # noqa: F401

    db_file = settings.database_file
    if db_file is not None:
        db_file.parent.mkdir(parents=True, exist_ok=True)

    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database ready: %s", db_file or settings.database_url)


async def ping_database() -> bool:
    """Lightweight reachability probe used by the health check."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning("Database ping failed: %s", str(e))
        return False


async def dispose_engine() -> None:
    """Closes all pooled connections (application shutdown)."""
    await engine.dispose()
