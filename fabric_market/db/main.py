import logging
from sqlalchemy.orm import sessionmaker
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession

from fabric_market.config import Config

logger = logging.getLogger(__name__)

async_engine = create_async_engine(
    Config.DATABASE_URL,
    echo=False,
    future=True,
    pool_size=Config.DATABASE_POOL_SIZE,
    max_overflow=Config.DATABASE_MAX_OVERFLOW,
    pool_timeout=60
)


async def get_session() -> AsyncSession: # type: ignore
    Session = sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with Session() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Session error: {e}")
            raise
