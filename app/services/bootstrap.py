import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.models import Base

logger = logging.getLogger(__name__)


async def bootstrap_schema(engine: AsyncEngine) -> bool:
    """Create the sample tables if they do not exist yet.

    Failures are logged and reported through the return value only.
    """
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception as exc:
        logger.error("Failed to bootstrap database: %s", exc)
        return False
    logger.info('Database table "notes" ready')
    return True
