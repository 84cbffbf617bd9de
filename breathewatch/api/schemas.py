"""Pydantic schemas for API request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---- Request schemas ----

class ComparisonRequest(BaseModel):
    neighborhoods: list[str] = Field(..., min_length=2, description="Two or more neighborhood names")


class ClassifyRequest(BaseModel):
    pm25: float = Field(..., ge=0, description="PM2.5 annual average, ug/m3")
    no2: float = Field(..., ge=0, description="NO2 annual average, ppb")


class AirQualityUpsertRequest(BaseModel):
    borough: str | None = Field(None, description="Checked against the neighborhood's borough if given")
    neighborhood: str
    year: int
    pm25: float
    no2: float
    ozone: float | None = None
    data_source: str = "NYC Open Data - Air Quality"


class ReportCreate(BaseModel):
    user_id: UUID
    neighborhood: str
    borough: str | None = Field(None, description="Checked against the neighborhood's borough if given")
    description: str
    report_type: str = Field(..., description="Smoke, Odor, Dust or Other")
    severity: str = Field(..., description="Low, Medium or High")


class ReportStatusUpdate(BaseModel):
    status: str = Field(..., description="Open, Reviewed or Resolved")


class UserCreate(BaseModel):
    first_name: str
    last_name: str
    username: str
    password: str
    confirm_password: str


class LoginRequest(BaseModel):
    username: str
    password: str


class ProfileUpdate(BaseModel):
    borough: str | None = Field(None, description="Checked against the neighborhood's borough if given")
    neighborhood: str
    age: int = Field(..., description="18 to 120")
    profile_description: str = ""


# ---- Response schemas ----

class LocationResponse(BaseModel):
    neighborhood: str
    borough: str


class ClassifyResponse(BaseModel):
    pm25: float
    no2: float
    pollution_score: str


class NeighborhoodScoreResponse(BaseModel):
    neighborhood: str
    borough: str
    year: int
    pm25: str
    no2: str
    ozone: float | None = None
    overall_risk: str


class ComparisonResultResponse(BaseModel):
    """One entry per requested name, serialized in camelCase for the compare view."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    input_name: str
    success: bool
    neighborhood: str | None = None
    borough: str | None = None
    pm25: str | None = Field(None, alias="pm25Value")
    no2: str | None = Field(None, alias="no2Value")
    overall_risk: str | None = None
    error: str | None = None
    error_kind: str | None = None


class ComparisonResponse(BaseModel):
    results: list[ComparisonResultResponse]
    succeeded: int
    failed: int


class AirQualityRecordResponse(BaseModel):
    borough: str
    neighborhood: str
    year: int
    pm25: float
    no2: float
    ozone: float | None = None
    pollution_score: str
    data_source: str
    last_updated: datetime | None = None


class TrendsResponse(BaseModel):
    neighborhood: str
    borough: str
    history: list[AirQualityRecordResponse]


class MapEntryResponse(BaseModel):
    borough: str
    neighborhood: str
    pm25: float
    no2: float
    ozone: float | None = None
    pollution_score: str


class ReportResponse(BaseModel):
    id: UUID
    user_id: str
    neighborhood: str
    borough: str
    description: str
    report_type: str
    severity: str
    status: str
    created_at: datetime


class ReportPageResponse(BaseModel):
    reports: list[ReportResponse]
    page: int
    total_pages: int
    total_reports: int


class PollutionSourceResponse(BaseModel):
    id: UUID
    name: str
    source_type: str
    neighborhood: str
    borough: str
    estimated_contribution: float
    latitude: float | None = None
    longitude: float | None = None
    description: str | None = None


class SourceTypeBreakdownResponse(BaseModel):
    count: int
    total_contribution: float


class PollutionSummaryResponse(BaseModel):
    neighborhood: str
    borough: str
    total_sources: int
    primary_source: PollutionSourceResponse | None = None
    source_breakdown: dict[str, SourceTypeBreakdownResponse] = {}
    total_contribution: float = 0.0
    sources: list[PollutionSourceResponse] = []


class UserResponse(BaseModel):
    id: UUID
    username: str
    first_name: str
    last_name: str
    borough: str | None = None
    neighborhood: str | None = None
    age: int | None = None
    profile_description: str = ""
    is_profile_configured: bool
    created_at: datetime | None = None


class DashboardResponse(BaseModel):
    user: UserResponse
    reports: list[ReportResponse]
    current_risk: NeighborhoodScoreResponse | None = None
    risk_unavailable_reason: str | None = None
