"""Air quality score, trend and map routes."""

from fastapi import APIRouter, Depends, Query

from breathewatch.api.deps import get_air_quality_store, get_comparer, get_directory
from breathewatch.api.schemas import (
    AirQualityRecordResponse,
    AirQualityUpsertRequest,
    ClassifyRequest,
    ClassifyResponse,
    MapEntryResponse,
    NeighborhoodScoreResponse,
    TrendsResponse,
)
from breathewatch.config import settings
from breathewatch.data.air_quality import SQLAirQualityStore
from breathewatch.data.directory import LocationDirectory
from breathewatch.engine.comparison import NeighborhoodComparer
from breathewatch.engine.scoring import classify_pollution
from breathewatch.engine.validation import validate_year
from breathewatch.errors import NotFound
from breathewatch.models.air_quality import AirQualityRecord, NeighborhoodScore

router = APIRouter(prefix="/api/v1/air-quality", tags=["air-quality"])


def score_response(result: NeighborhoodScore) -> NeighborhoodScoreResponse:
    return NeighborhoodScoreResponse(
        neighborhood=result.neighborhood,
        borough=result.borough,
        year=result.year,
        pm25=f"{result.reading.pm25:.2f}",
        no2=f"{result.reading.no2:.2f}",
        ozone=result.reading.ozone,
        overall_risk=result.score.value,
    )


def _record_response(record: AirQualityRecord) -> AirQualityRecordResponse:
    return AirQualityRecordResponse(
        borough=record.borough,
        neighborhood=record.neighborhood,
        year=record.year,
        pm25=record.reading.pm25,
        no2=record.reading.no2,
        ozone=record.reading.ozone,
        pollution_score=record.pollution_score.value,
        data_source=record.data_source,
        last_updated=record.last_updated,
    )


@router.get("/score", response_model=NeighborhoodScoreResponse)
async def get_score(
    neighborhood: str = Query(..., description="Neighborhood name"),
    comparer: NeighborhoodComparer = Depends(get_comparer),
):
    """Pollution score for one neighborhood in the current data year."""
    return score_response(await comparer.score(neighborhood))


@router.post("/classify", response_model=ClassifyResponse)
async def classify(req: ClassifyRequest):
    """Classify raw PM2.5 / NO2 readings."""
    score = classify_pollution(req.pm25, req.no2)
    return ClassifyResponse(pm25=req.pm25, no2=req.no2, pollution_score=score.value)


@router.get("/trends", response_model=TrendsResponse)
async def get_trends(
    neighborhood: str = Query(..., description="Neighborhood name"),
    directory: LocationDirectory = Depends(get_directory),
    store: SQLAirQualityStore = Depends(get_air_quality_store),
):
    """Year-by-year readings for a neighborhood."""
    location = directory.resolve(neighborhood)
    history = await store.get_history(location.borough, location.neighborhood)
    if not history:
        raise NotFound(f"No historical data found for {location.neighborhood}.")
    return TrendsResponse(
        neighborhood=location.neighborhood,
        borough=location.borough,
        history=[_record_response(r) for r in history],
    )


@router.get("/lookup", response_model=AirQualityRecordResponse)
async def lookup(
    borough: str,
    neighborhood: str,
    year: int | None = None,
    store: SQLAirQualityStore = Depends(get_air_quality_store),
):
    """Partial-name lookup straight against stored records, bypassing the directory."""
    year = validate_year(year) if year is not None else settings.air_quality_year
    record = await store.find_reading_partial(borough, neighborhood, year)
    if record is None:
        raise NotFound(f"Air quality data not available for {neighborhood}, {borough} in {year}.")
    return _record_response(record)


@router.get("/map", response_model=list[MapEntryResponse])
async def get_map_data(
    year: int | None = None,
    store: SQLAirQualityStore = Depends(get_air_quality_store),
):
    """Every neighborhood with data for a year, for the choropleth map."""
    year = validate_year(year) if year is not None else settings.air_quality_year
    return await store.list_for_year(year)


@router.put("/records", response_model=AirQualityRecordResponse)
async def upsert_record(
    req: AirQualityUpsertRequest,
    directory: LocationDirectory = Depends(get_directory),
    store: SQLAirQualityStore = Depends(get_air_quality_store),
):
    """Insert or replace the yearly record for a neighborhood.

    The borough is optional; if given it must match the directory.
    """
    location = directory.resolve_within(req.neighborhood, req.borough)
    record = await store.upsert_record(
        borough=location.borough,
        neighborhood=location.neighborhood,
        year=validate_year(req.year),
        pm25=req.pm25,
        no2=req.no2,
        ozone=req.ozone,
        data_source=req.data_source,
    )
    return _record_response(record)
