"""SQLAlchemy ORM models for persistence."""

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class AirQualityRow(Base):
    __tablename__ = "air_quality"
    __table_args__ = (UniqueConstraint("borough", "neighborhood", "year"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    borough: Mapped[str] = mapped_column(String(50), index=True)
    neighborhood: Mapped[str] = mapped_column(String(150), index=True)
    year: Mapped[int] = mapped_column(Integer, index=True)

    # Annual averages: PM2.5 in ug/m3, NO2 and ozone in ppb
    pm25: Mapped[float] = mapped_column(Float)
    no2: Mapped[float] = mapped_column(Float)
    ozone: Mapped[float | None] = mapped_column(Float, nullable=True)

    pollution_score: Mapped[str] = mapped_column(String(20))
    data_source: Mapped[str] = mapped_column(String(100), default="NYC Open Data - Air Quality")
    last_updated: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


class ReportRow(Base):
    __tablename__ = "reports"
    __table_args__ = (Index("ix_reports_location", "neighborhood", "borough"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), index=True)

    user_id: Mapped[str] = mapped_column(String(64), index=True)
    neighborhood: Mapped[str] = mapped_column(String(150))
    borough: Mapped[str] = mapped_column(String(50))
    description: Mapped[str] = mapped_column(Text)
    report_type: Mapped[str] = mapped_column(String(20))  # Smoke / Odor / Dust / Other
    severity: Mapped[str] = mapped_column(String(10))  # Low / Medium / High
    status: Mapped[str] = mapped_column(String(20), default="Open")


class PollutionSourceRow(Base):
    __tablename__ = "pollution_sources"
    __table_args__ = (Index("ix_pollution_sources_location", "neighborhood", "borough"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200))
    source_type: Mapped[str] = mapped_column(String(20), index=True)
    neighborhood: Mapped[str] = mapped_column(String(150))
    borough: Mapped[str] = mapped_column(String(50), index=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    estimated_contribution: Mapped[float] = mapped_column(Float)  # percent
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class UserRow(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    username: Mapped[str] = mapped_column(String(64), unique=True, index=True)  # stored lower-cased
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    password_hash: Mapped[str] = mapped_column(String(255))

    # Home neighborhood profile, filled in after signup
    borough: Mapped[str | None] = mapped_column(String(50), nullable=True)
    neighborhood: Mapped[str | None] = mapped_column(String(150), nullable=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    profile_description: Mapped[str] = mapped_column(Text, default="")
    is_profile_configured: Mapped[bool] = mapped_column(Boolean, default=False)
