"""Shared fixtures: a small NYC directory, an in-memory air quality store and a SQLite database.

Readings (2023): Harlem 7.0 / 20.0 (Safe), Astoria 9.5 / 28.25 (Moderate),
Mott Haven 13.1 / 40.0 (High). Park Slope is in the directory with no reading.
"""

import asyncio
import json

import pytest
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from breathewatch.data.directory import LocationDirectory
from breathewatch.data.users import SQLUserStore
from breathewatch.engine.scoring import classify_reading
from breathewatch.errors import UpstreamUnavailable
from breathewatch.models.air_quality import AirQualityRecord, PollutantReading
from breathewatch.models.db import Base

SAMPLE_FEATURES = [
    {"type": "Feature", "properties": {"ntaname": "Harlem", "boroname": "Manhattan"}, "geometry": None},
    {"type": "Feature", "properties": {"ntaname": "Astoria", "boroname": "Queens"}, "geometry": None},
    {"type": "Feature", "properties": {"nta_name": "Park Slope", "boro_name": "Brooklyn"}, "geometry": None},
    {"type": "Feature", "properties": {"neighborhood": "Mott Haven", "borough": "Bronx"}, "geometry": None},
    {"type": "Feature", "properties": {"ntaname": "Upper West Side", "boroname": "Manhattan"}, "geometry": None},
]


class FakeAirQualityStore:
    """In-memory AirQualityStore with controllable latency and failures."""

    def __init__(self, readings: dict[tuple[str, str, int], PollutantReading] | None = None):
        self.readings = dict(readings or {})
        self.delays: dict[str, float] = {}
        self.failures: dict[str, int] = {}  # neighborhood -> remaining UpstreamUnavailable raises
        self.errors: dict[str, Exception] = {}  # neighborhood -> raised on every call
        self.calls: list[tuple[str, str, int]] = []

    async def find_reading(self, borough: str, neighborhood: str, year: int) -> PollutantReading | None:
        self.calls.append((borough, neighborhood, year))
        if self.failures.get(neighborhood, 0) > 0:
            self.failures[neighborhood] -= 1
            raise UpstreamUnavailable("Air quality store unavailable: connection reset")
        if neighborhood in self.errors:
            raise self.errors[neighborhood]
        delay = self.delays.get(neighborhood)
        if delay:
            await asyncio.sleep(delay)
        return self.readings.get((borough, neighborhood, year))

    async def find_reading_partial(self, borough: str, neighborhood: str, year: int) -> AirQualityRecord | None:
        for (b, n, y), reading in self.readings.items():
            if b.lower() == borough.lower() and neighborhood.lower() in n.lower() and y == year:
                return AirQualityRecord(b, n, y, reading, classify_reading(reading))
        return None

    async def get_history(self, borough: str, neighborhood: str) -> list[AirQualityRecord]:
        return [
            AirQualityRecord(b, n, y, reading, classify_reading(reading))
            for (b, n, y), reading in sorted(self.readings.items(), key=lambda kv: kv[0][2])
            if b == borough and n == neighborhood
        ]

    async def list_for_year(self, year: int) -> list[dict]:
        return [
            {
                "borough": b,
                "neighborhood": n,
                "pm25": r.pm25,
                "no2": r.no2,
                "ozone": r.ozone,
                "pollution_score": classify_reading(r).value,
            }
            for (b, n, y), r in self.readings.items()
            if y == year
        ]

    async def upsert_record(self, borough, neighborhood, year, pm25, no2, ozone=None, data_source="test"):
        reading = PollutantReading(pm25=pm25, no2=no2, ozone=ozone)
        self.readings[(borough, neighborhood, year)] = reading
        return AirQualityRecord(borough, neighborhood, year, reading, classify_reading(reading), data_source)


@pytest.fixture
def sample_features() -> list[dict]:
    return [dict(f) for f in SAMPLE_FEATURES]


@pytest.fixture
def directory(sample_features) -> LocationDirectory:
    return LocationDirectory.from_features(sample_features)


@pytest.fixture
def geojson_file(tmp_path, sample_features):
    path = tmp_path / "neighborhoods.geojson"
    path.write_text(json.dumps({"type": "FeatureCollection", "features": sample_features}))
    return path


@pytest.fixture
def air_store() -> FakeAirQualityStore:
    return FakeAirQualityStore({
        ("Manhattan", "Harlem", 2023): PollutantReading(pm25=7.0, no2=20.0),
        ("Manhattan", "Harlem", 2022): PollutantReading(pm25=7.8, no2=21.5),
        ("Queens", "Astoria", 2023): PollutantReading(pm25=9.5, no2=28.25),
        ("Bronx", "Mott Haven", 2023): PollutantReading(pm25=13.1, no2=40.0, ozone=29.4),
    })


@pytest.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'breathewatch.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def user_store(session_factory) -> SQLUserStore:
    # Minimum bcrypt cost keeps hashing fast in tests
    return SQLUserStore(session_factory, CryptContext(schemes=["bcrypt"], bcrypt__rounds=4))
