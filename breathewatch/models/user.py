"""User accounts, their home-neighborhood profile and the dashboard view."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from breathewatch.models.air_quality import NeighborhoodScore
from breathewatch.models.report import Report


@dataclass(frozen=True)
class User:
    """A registered user. The password hash never leaves the store."""
    id: UUID
    username: str
    first_name: str
    last_name: str
    borough: str | None = None
    neighborhood: str | None = None
    age: int | None = None
    profile_description: str = ""
    is_profile_configured: bool = False
    created_at: datetime | None = None


@dataclass(frozen=True)
class Dashboard:
    user: User
    reports: list[Report] = field(default_factory=list)
    current_score: NeighborhoodScore | None = None
    risk_unavailable_reason: str | None = None
