"""SQL-backed store for user-submitted pollution incident reports."""

import logging
import math
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from breathewatch.data.base import STORE_ERRORS
from breathewatch.engine.validation import (
    check_string,
    validate_description,
    validate_location,
)
from breathewatch.errors import InvalidArgument, NotFound, UpstreamUnavailable
from breathewatch.models.db import ReportRow
from breathewatch.models.report import (
    Report,
    ReportPage,
    ReportStatus,
    ReportType,
    Severity,
)

logger = logging.getLogger(__name__)


def _to_report(row: ReportRow) -> Report:
    return Report(
        id=row.id,
        user_id=row.user_id,
        neighborhood=row.neighborhood,
        borough=row.borough,
        description=row.description,
        report_type=ReportType(row.report_type),
        severity=Severity(row.severity),
        status=ReportStatus(row.status),
        created_at=row.created_at,
    )


class SQLReportStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def create_report(
        self,
        user_id: str,
        neighborhood: str,
        borough: str,
        description: str,
        report_type: ReportType,
        severity: Severity,
    ) -> Report:
        user_id = check_string(user_id, "User ID")
        neighborhood = validate_location(neighborhood, "Neighborhood")
        borough = validate_location(borough, "Borough")
        description = validate_description(description)

        row = ReportRow(
            user_id=user_id,
            neighborhood=neighborhood,
            borough=borough,
            description=description,
            report_type=report_type.value,
            severity=severity.value,
            status=ReportStatus.OPEN.value,
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
        )
        try:
            async with self.session_factory() as session:
                session.add(row)
                await session.commit()
                await session.refresh(row)
                report = _to_report(row)
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"Report store unavailable: {e}") from e

        logger.info("Report %s filed for %s, %s", report.id, neighborhood, borough)
        return report

    async def get_report(self, report_id: UUID) -> Report:
        try:
            async with self.session_factory() as session:
                row = await session.get(ReportRow, report_id)
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"Report store unavailable: {e}") from e
        if row is None:
            raise NotFound("Report not found.")
        return _to_report(row)

    async def list_by_neighborhood(self, neighborhood: str, borough: str) -> list[Report]:
        neighborhood = validate_location(neighborhood, "Neighborhood")
        borough = validate_location(borough, "Borough")
        stmt = (
            select(ReportRow)
            .where(ReportRow.neighborhood == neighborhood, ReportRow.borough == borough)
            .order_by(ReportRow.created_at.desc())
        )
        return await self._all(stmt)

    async def list_by_user(self, user_id: str) -> list[Report]:
        user_id = check_string(user_id, "User ID")
        stmt = (
            select(ReportRow)
            .where(ReportRow.user_id == user_id)
            .order_by(ReportRow.created_at.desc())
        )
        return await self._all(stmt)

    async def update_status(self, report_id: UUID, status: ReportStatus) -> Report:
        try:
            async with self.session_factory() as session:
                row = await session.get(ReportRow, report_id)
                if row is None:
                    raise NotFound("Report not found.")
                row.status = status.value
                await session.commit()
                await session.refresh(row)
                return _to_report(row)
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"Report store unavailable: {e}") from e

    async def list_reports(self, page: int = 1, limit: int = 20) -> ReportPage:
        if page < 1:
            raise InvalidArgument("Page must be a positive integer.")
        if limit < 1:
            raise InvalidArgument("Limit must be a positive integer.")
        stmt = (
            select(ReportRow)
            .order_by(ReportRow.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        try:
            async with self.session_factory() as session:
                rows = (await session.scalars(stmt)).all()
                total = await session.scalar(select(func.count()).select_from(ReportRow))
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"Report store unavailable: {e}") from e

        total = total or 0
        return ReportPage(
            reports=[_to_report(r) for r in rows],
            page=page,
            total_pages=math.ceil(total / limit),
            total_reports=total,
        )

    async def _all(self, stmt) -> list[Report]:
        try:
            async with self.session_factory() as session:
                rows = (await session.scalars(stmt)).all()
        except STORE_ERRORS as e:
            raise UpstreamUnavailable(f"Report store unavailable: {e}") from e
        return [_to_report(r) for r in rows]
