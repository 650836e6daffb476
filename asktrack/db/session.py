from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from asktrack.core.config import settings

# Базы разные, поэтому и метаданные раздельные
RemkBase = declarative_base()
GpsBase = declarative_base()


def _connect_args(url: str) -> dict:
    if "sqlite" in url:
        return {"check_same_thread": False}
    return {}


remk_engine = create_async_engine(
    settings.REMK_DATABASE_URL,
    connect_args=_connect_args(settings.REMK_DATABASE_URL),
    echo=settings.DB_ECHO
)
gps_engine = create_async_engine(
    settings.GPS_DATABASE_URL,
    connect_args=_connect_args(settings.GPS_DATABASE_URL),
    echo=settings.DB_ECHO
)

remk_session = sessionmaker(remk_engine, expire_on_commit=False, class_=AsyncSession)
gps_session = sessionmaker(gps_engine, expire_on_commit=False, class_=AsyncSession)

async def get_remk_db():
    async with remk_session() as session:
        yield session

async def get_gps_db():
    async with gps_session() as session:
        yield session
