"""SQL-backed store for crowdsourced pollution sources (factories, traffic, construction)."""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from breathewatch.data.base import STORE_ERRORS
from breathewatch.engine.validation import validate_location
from breathewatch.errors import NotFound, UpstreamUnavailable
from breathewatch.models.db import PollutionSourceRow
from breathewatch.models.report import PollutionSource, SourceType

logger = logging.getLogger(__name__)


def _to_source(row: PollutionSourceRow) -> PollutionSource:
    return PollutionSource(
        id=row.id,
        name=row.name,
        source_type=SourceType(row.source_type),
        neighborhood=row.neighborhood,
        borough=row.borough,
        estimated_contribution=row.estimated_contribution,
        latitude=row.latitude,
        longitude=row.longitude,
        description=row.description,
    )


class SQLPollutionSourceStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def list_sources(
        self,
        source_type: SourceType | None = None,
        borough: str | None = None,
        min_contribution: float | None = None,
        limit: int | None = None,
    ) -> list[PollutionSource]:
        stmt = select(PollutionSourceRow)
        if source_type is not None:
            stmt = stmt.where(PollutionSourceRow.source_type == source_type.value)
        if borough:
            borough = validate_location(borough, "Borough")
            stmt = stmt.where(func.lower(PollutionSourceRow.borough) == borough.lower())
        if min_contribution is not None:
            stmt = stmt.where(PollutionSourceRow.estimated_contribution >= min_contribution)
        stmt = stmt.order_by(PollutionSourceRow.estimated_contribution.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._all(stmt)

    async def get_source(self, source_id: UUID) -> PollutionSource:
        try:
            async with self.session_factory() as session:
                row = await session.get(PollutionSourceRow, source_id)
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"Pollution source store unavailable: {e}") from e
        if row is None:
            raise NotFound("Pollution source not found.")
        return _to_source(row)

    async def list_by_neighborhood(self, neighborhood: str, borough: str) -> list[PollutionSource]:
        neighborhood = validate_location(neighborhood, "Neighborhood")
        borough = validate_location(borough, "Borough")
        stmt = (
            select(PollutionSourceRow)
            .where(
                PollutionSourceRow.neighborhood == neighborhood,
                PollutionSourceRow.borough == borough,
            )
            .order_by(PollutionSourceRow.estimated_contribution.desc())
        )
        return await self._all(stmt)

    async def _all(self, stmt) -> list[PollutionSource]:
        try:
            async with self.session_factory() as session:
                rows = (await session.scalars(stmt)).all()
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"Pollution source store unavailable: {e}") from e
        return [_to_source(r) for r in rows]
