# app/db/init_db.py
import asyncio
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql import text
from tenacity import retry, stop_after_attempt, wait_exponential

from . import models  # noqa: F401  registers the tables on Base.metadata
from .session import Base, engine as default_engine

logger = logging.getLogger(__name__)


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=4, max=10),
    reraise=True
)
async def verify_db_connection(engine: AsyncEngine = default_engine) -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        raise


async def init_db(engine: AsyncEngine = default_engine, reset: bool = False) -> None:
    """Create the chats and messages tables, optionally dropping them first."""
    try:
        async with engine.begin() as conn:
            if reset:
                logger.warning("Dropping existing tables before creating them")
                await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

    logger.info("Database tables created successfully")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_db())
