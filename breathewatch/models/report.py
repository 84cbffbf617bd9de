"""Incident report and pollution source types."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class ReportType(Enum):
    SMOKE = "Smoke"
    ODOR = "Odor"
    DUST = "Dust"
    OTHER = "Other"


class Severity(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ReportStatus(Enum):
    OPEN = "Open"
    REVIEWED = "Reviewed"
    RESOLVED = "Resolved"


class SourceType(Enum):
    TRAFFIC = "Traffic"
    INDUSTRIAL = "Industrial"
    CONSTRUCTION = "Construction"
    RESIDENTIAL = "Residential"
    OTHER = "Other"


@dataclass(frozen=True)
class Report:
    id: UUID
    user_id: str
    neighborhood: str
    borough: str
    description: str
    report_type: ReportType
    severity: Severity
    status: ReportStatus
    created_at: datetime


@dataclass(frozen=True)
class ReportPage:
    reports: list[Report]
    page: int
    total_pages: int
    total_reports: int


@dataclass(frozen=True)
class PollutionSource:
    id: UUID
    name: str
    source_type: SourceType
    neighborhood: str
    borough: str
    estimated_contribution: float  # percent, 0-100
    latitude: float | None = None
    longitude: float | None = None
    description: str | None = None


@dataclass(frozen=True)
class SourceTypeBreakdown:
    count: int
    total_contribution: float


@dataclass(frozen=True)
class NeighborhoodPollutionSummary:
    neighborhood: str
    borough: str
    total_sources: int
    primary_source: PollutionSource | None
    source_breakdown: dict[SourceType, SourceTypeBreakdown] = field(default_factory=dict)
    total_contribution: float = 0.0
    sources: list[PollutionSource] = field(default_factory=list)
