"""Protocol definitions for record stores.

Each protocol defines the interface that the concrete SQL stores (and the
in-memory fakes used in tests) must satisfy.
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from breathewatch.models.air_quality import AirQualityRecord, PollutantReading
from breathewatch.models.report import (
    PollutionSource,
    Report,
    ReportPage,
    ReportStatus,
    ReportType,
    Severity,
    SourceType,
)
from breathewatch.models.user import User

# asyncpg raises plain OSErrors (connection refused or reset) that SQLAlchemy does not wrap.
STORE_ERRORS = (SQLAlchemyError, OSError)


@runtime_checkable
class AirQualityStore(Protocol):
    async def find_reading(
        self, borough: str, neighborhood: str, year: int
    ) -> PollutantReading | None:
        """Exact (borough, neighborhood, year) lookup."""
        ...

    async def find_reading_partial(
        self, borough: str, neighborhood: str, year: int
    ) -> AirQualityRecord | None:
        """Case-insensitive partial neighborhood match within a borough."""
        ...

    async def get_history(self, borough: str, neighborhood: str) -> list[AirQualityRecord]:
        """All yearly records for a neighborhood, oldest first."""
        ...

    async def list_for_year(self, year: int) -> list[dict]:
        """Map payload for every neighborhood with data in a year."""
        ...

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
        """Insert or replace the record for (borough, neighborhood, year)."""
        ...


@runtime_checkable
class ReportStore(Protocol):
    async def create_report(
        self,
        user_id: str,
        neighborhood: str,
        borough: str,
        description: str,
        report_type: ReportType,
        severity: Severity,
    ) -> Report:
        ...

    async def get_report(self, report_id: UUID) -> Report:
        ...

    async def list_by_neighborhood(self, neighborhood: str, borough: str) -> list[Report]:
        ...

    async def list_by_user(self, user_id: str) -> list[Report]:
        ...

    async def update_status(self, report_id: UUID, status: ReportStatus) -> Report:
        ...

    async def list_reports(self, page: int = 1, limit: int = 20) -> ReportPage:
        ...


@runtime_checkable
class PollutionSourceStore(Protocol):
    async def list_sources(
        self,
        source_type: SourceType | None = None,
        borough: str | None = None,
        min_contribution: float | None = None,
        limit: int | None = None,
    ) -> list[PollutionSource]:
        """Filtered sources, highest contribution first."""
        ...

    async def get_source(self, source_id: UUID) -> PollutionSource:
        ...

    async def list_by_neighborhood(self, neighborhood: str, borough: str) -> list[PollutionSource]:
        ...


@runtime_checkable
class UserStore(Protocol):
    async def create_user(
        self, first_name: str, last_name: str, username: str, password: str
    ) -> User:
        """Register a user; usernames are unique and case-insensitive."""
        ...

    async def check_user(self, username: str, password: str) -> User:
        """Verify credentials."""
        ...

    async def get_user(self, user_id: UUID) -> User:
        ...

    async def update_profile(
        self,
        user_id: UUID,
        borough: str,
        neighborhood: str,
        age: int,
        profile_description: str | None = "",
    ) -> User:
        ...
