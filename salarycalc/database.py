"""Optional PostgreSQL persistence.

Routers receive their session through the :func:`get_db` dependency.  When
the database could not be reached at startup the dependency yields ``None``
and callers fall back to their non-persistent behaviour: calculations use
the static city-tax table, history endpoints return empty lists and
city-tax mutations are refused.
"""

from __future__ import annotations
import logging
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from salarycalc.config import settings
from salarycalc.models.db_models import Base

logger = logging.getLogger(__name__)

# Set by init_db() only once the schema has been created.
_engine: Optional[AsyncEngine] = None
_sessions: Optional[async_sessionmaker[AsyncSession]] = None


async def init_db(url: str = settings.DATABASE_URL) -> bool:
    """Connect, create missing tables and enable :func:`get_db` sessions.

    Returns ``False`` (and leaves persistence disabled) when the database
    cannot be reached.
    """
    global _engine, _sessions

    engine = create_async_engine(url, pool_size=5, max_overflow=10, pool_pre_ping=True)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception as exc:
        await engine.dispose()
        logger.warning("Database unavailable, salary history will not be stored: %s", exc)
        return False

    _engine = engine
    _sessions = async_sessionmaker(bind=engine, expire_on_commit=False)
    logger.info("Connected to database; tables ready.")
    return True


async def close_db() -> None:
    global _engine, _sessions
    if _engine is None:
        return
    _sessions = None
    await _engine.dispose()
    _engine = None
    logger.info("Database connection pool closed.")


async def get_db() -> AsyncGenerator[Optional[AsyncSession], None]:
    """FastAPI dependency: one transaction per request, or ``None`` without a database."""
    if _sessions is None:
        yield None
        return

    async with _sessions() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
