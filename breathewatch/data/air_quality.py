"""SQL-backed air quality record store."""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from breathewatch.data.base import STORE_ERRORS
from breathewatch.data.cache import cached, invalidate
from breathewatch.engine.scoring import classify_pollution
from breathewatch.engine.validation import check_number, check_string
from breathewatch.errors import InvalidArgument, UpstreamUnavailable
from breathewatch.models.air_quality import AirQualityRecord, PollutantReading, PollutionScore
from breathewatch.models.db import AirQualityRow

logger = logging.getLogger(__name__)

MAP_CACHE_PREFIX = "air_quality:map"


def _to_record(row: AirQualityRow) -> AirQualityRecord:
    return AirQualityRecord(
        borough=row.borough,
        neighborhood=row.neighborhood,
        year=row.year,
        reading=PollutantReading(pm25=row.pm25, no2=row.no2, ozone=row.ozone),
        pollution_score=PollutionScore(row.pollution_score),
        data_source=row.data_source,
        last_updated=row.last_updated,
    )


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLAirQualityStore:
    """Air quality records in the `air_quality` table.

    Each call opens its own session so concurrent reads from the comparison
    engine never share one.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def find_reading(
        self, borough: str, neighborhood: str, year: int
    ) -> PollutantReading | None:
        stmt = select(AirQualityRow).where(
            AirQualityRow.borough == borough,
            AirQualityRow.neighborhood == neighborhood,
            AirQualityRow.year == year,
        )
        row = await self._first(stmt)
        if row is None:
            logger.warning("No air-quality data for %s, %s in %d", neighborhood, borough, year)
            return None
        return PollutantReading(pm25=row.pm25, no2=row.no2, ozone=row.ozone)

    async def find_reading_partial(
        self, borough: str, neighborhood: str, year: int
    ) -> AirQualityRecord | None:
        borough = check_string(borough, "Borough")
        neighborhood = check_string(neighborhood, "Neighborhood")
        stmt = (
            select(AirQualityRow)
            .where(
                func.lower(AirQualityRow.borough) == borough.lower(),
                AirQualityRow.neighborhood.ilike(f"%{_escape_like(neighborhood)}%", escape="\\"),
                AirQualityRow.year == year,
            )
            .order_by(AirQualityRow.neighborhood)
        )
        row = await self._first(stmt)
        if row is None:
            logger.warning("No air-quality data matching %s, %s in %d", neighborhood, borough, year)
            return None
        return _to_record(row)

    async def get_history(self, borough: str, neighborhood: str) -> list[AirQualityRecord]:
        stmt = (
            select(AirQualityRow)
            .where(
                AirQualityRow.borough == borough,
                AirQualityRow.neighborhood == neighborhood,
            )
            .order_by(AirQualityRow.year)
        )
        try:
            async with self.session_factory() as session:
                rows = (await session.scalars(stmt)).all()
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"Air quality store unavailable: {e}") from e
        return [_to_record(r) for r in rows]

    @cached(MAP_CACHE_PREFIX)
    async def list_for_year(self, year: int) -> list[dict]:
        stmt = (
            select(AirQualityRow)
            .where(AirQualityRow.year == year)
            .order_by(AirQualityRow.borough, AirQualityRow.neighborhood)
        )
        try:
            async with self.session_factory() as session:
                rows = (await session.scalars(stmt)).all()
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"Air quality store unavailable: {e}") from e
        return [
            {
                "borough": r.borough,
                "neighborhood": r.neighborhood,
                "pm25": r.pm25,
                "no2": r.no2,
                "ozone": r.ozone,
                "pollution_score": r.pollution_score,
            }
            for r in rows
        ]

    async def upsert_record(
        self,
        borough: str,
        neighborhood: str,
        year: int,
        pm25: float,
        no2: float,
        ozone: float | None = None,
        data_source: str = "NYC Open Data - Air Quality",
    ) -> AirQualityRecord:
        borough = check_string(borough, "Borough")
        neighborhood = check_string(neighborhood, "Neighborhood")
        if isinstance(year, bool) or not isinstance(year, int):
            raise InvalidArgument("Year must be an integer.")
        pm25 = check_number(pm25, "PM2.5")
        no2 = check_number(no2, "NO2")
        if ozone is not None:
            ozone = check_number(ozone, "Ozone")
        score = classify_pollution(pm25, no2)
        now = datetime.now(timezone.utc).replace(tzinfo=None)

        stmt = select(AirQualityRow).where(
            AirQualityRow.borough == borough,
            AirQualityRow.neighborhood == neighborhood,
            AirQualityRow.year == year,
        )
        try:
            async with self.session_factory() as session:
                row = (await session.scalars(stmt)).first()
                if row is None:
                    row = AirQualityRow(borough=borough, neighborhood=neighborhood, year=year)
                    session.add(row)
                row.pm25 = pm25
                row.no2 = no2
                row.ozone = ozone
                row.pollution_score = score.value
                row.data_source = data_source
                row.last_updated = now
                await session.commit()
                await session.refresh(row)
                record = _to_record(row)
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"Air quality store unavailable: {e}") from e

        await invalidate(MAP_CACHE_PREFIX)
        return record

    async def _first(self, stmt) -> AirQualityRow | None:
        try:
            async with self.session_factory() as session:
                return (await session.scalars(stmt)).first()
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"Air quality store unavailable: {e}") from e
