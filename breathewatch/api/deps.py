"""FastAPI dependency injection."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from breathewatch.config import settings
from breathewatch.data.air_quality import SQLAirQualityStore
from breathewatch.data.directory import LocationDirectory
from breathewatch.data.pollution_sources import SQLPollutionSourceStore
from breathewatch.data.reports import SQLReportStore
from breathewatch.data.users import SQLUserStore
from breathewatch.engine.comparison import NeighborhoodComparer
from breathewatch.models.db import Base

engine = create_async_engine(settings.database_url, echo=settings.debug)
async_session = async_sessionmaker(engine, expire_on_commit=False)


def get_directory(request: Request) -> LocationDirectory:
    """The directory loaded by the application lifespan."""
    return request.app.state.directory


def get_air_quality_store() -> SQLAirQualityStore:
    return SQLAirQualityStore(async_session)


def get_report_store() -> SQLReportStore:
    return SQLReportStore(async_session)


def get_pollution_source_store() -> SQLPollutionSourceStore:
    return SQLPollutionSourceStore(async_session)


def get_user_store() -> SQLUserStore:
    return SQLUserStore(async_session)


def get_comparer(
    directory: LocationDirectory = Depends(get_directory),
    store: SQLAirQualityStore = Depends(get_air_quality_store),
) -> NeighborhoodComparer:
    return NeighborhoodComparer(directory, store)


async def init_models() -> None:
    """Create missing tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
