from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from campaign_health.config import settings
from campaign_health.db.engine import get_async_engine_options

engine = create_async_engine(
    settings.database_url,
    **get_async_engine_options(settings.database_url, echo=settings.db_echo),
)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
