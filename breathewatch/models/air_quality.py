"""Air quality data types."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from breathewatch.errors import ErrorKind


class PollutionScore(Enum):
    SAFE = "Safe"
    MODERATE = "Moderate"
    HIGH = "High"


@dataclass(frozen=True)
class PollutantReading:
    pm25: float  # ug/m3
    no2: float  # ppb
    ozone: float | None = None


@dataclass(frozen=True)
class AirQualityRecord:
    borough: str
    neighborhood: str
    year: int
    reading: PollutantReading
    pollution_score: PollutionScore
    data_source: str = "NYC Open Data - Air Quality"
    last_updated: datetime | None = None


@dataclass(frozen=True)
class NeighborhoodScore:
    neighborhood: str
    borough: str
    year: int
    reading: PollutantReading
    score: PollutionScore


@dataclass(frozen=True)
class ComparisonResult:
    input_name: str
    success: bool
    neighborhood: str | None = None
    borough: str | None = None
    pm25: str | None = None  # two decimals, e.g. "7.00"
    no2: str | None = None
    overall_risk: PollutionScore | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None
