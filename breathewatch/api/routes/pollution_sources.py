"""Pollution source routes."""

from uuid import UUID

from fastapi import APIRouter, Depends

from breathewatch.api.deps import get_directory, get_pollution_source_store
from breathewatch.api.schemas import (
    PollutionSourceResponse,
    PollutionSummaryResponse,
    SourceTypeBreakdownResponse,
)
from breathewatch.data.directory import LocationDirectory
from breathewatch.data.pollution_sources import SQLPollutionSourceStore
from breathewatch.engine import sources as source_engine
from breathewatch.engine.validation import validate_contribution, validate_source_type
from breathewatch.models.report import PollutionSource

router = APIRouter(prefix="/api/v1/pollution-sources", tags=["pollution-sources"])


def _source_response(source: PollutionSource) -> PollutionSourceResponse:
    return PollutionSourceResponse(
        id=source.id,
        name=source.name,
        source_type=source.source_type.value,
        neighborhood=source.neighborhood,
        borough=source.borough,
        estimated_contribution=source.estimated_contribution,
        latitude=source.latitude,
        longitude=source.longitude,
        description=source.description,
    )


@router.get("", response_model=list[PollutionSourceResponse])
async def list_sources(
    source_type: str | None = None,
    borough: str | None = None,
    min_contribution: str | None = None,
    store: SQLPollutionSourceStore = Depends(get_pollution_source_store),
):
    """All sources, filtered by type, borough and minimum contribution (%)."""
    sources = await store.list_sources(
        source_type=validate_source_type(source_type) if source_type else None,
        borough=borough,
        min_contribution=validate_contribution(min_contribution) if min_contribution else None,
    )
    return [_source_response(s) for s in sources]


@router.get("/neighborhood", response_model=PollutionSummaryResponse)
async def neighborhood_summary(
    neighborhood: str,
    directory: LocationDirectory = Depends(get_directory),
    store: SQLPollutionSourceStore = Depends(get_pollution_source_store),
):
    """Source breakdown for one neighborhood."""
    location = directory.resolve(neighborhood)
    summary = await source_engine.neighborhood_summary(store, location.neighborhood, location.borough)
    return PollutionSummaryResponse(
        neighborhood=summary.neighborhood,
        borough=summary.borough,
        total_sources=summary.total_sources,
        primary_source=_source_response(summary.primary_source) if summary.primary_source else None,
        source_breakdown={
            t.value: SourceTypeBreakdownResponse(count=b.count, total_contribution=b.total_contribution)
            for t, b in summary.source_breakdown.items()
        },
        total_contribution=summary.total_contribution,
        sources=[_source_response(s) for s in summary.sources],
    )


@router.get("/top", response_model=list[PollutionSourceResponse])
async def top_sources(
    borough: str,
    limit: int = source_engine.DEFAULT_TOP_LIMIT,
    store: SQLPollutionSourceStore = Depends(get_pollution_source_store),
):
    sources = await source_engine.top_by_borough(store, borough, limit)
    return [_source_response(s) for s in sources]


@router.get("/type/{source_type}", response_model=list[PollutionSourceResponse])
async def sources_by_type(
    source_type: str,
    store: SQLPollutionSourceStore = Depends(get_pollution_source_store),
):
    sources = await source_engine.list_by_type(store, validate_source_type(source_type))
    return [_source_response(s) for s in sources]


@router.get("/{source_id}", response_model=PollutionSourceResponse)
async def get_source(
    source_id: UUID,
    store: SQLPollutionSourceStore = Depends(get_pollution_source_store),
):
    return _source_response(await store.get_source(source_id))
