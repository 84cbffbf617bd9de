"""Neighborhood directory routes."""

from fastapi import APIRouter, Depends, Query

from breathewatch.api.deps import get_directory
from breathewatch.api.schemas import LocationResponse
from breathewatch.data.directory import LocationDirectory

router = APIRouter(prefix="/api/v1/locations", tags=["locations"])


@router.get("", response_model=list[LocationResponse])
async def list_neighborhoods(
    borough: str | None = None,
    directory: LocationDirectory = Depends(get_directory),
):
    """All known neighborhoods, optionally within one borough."""
    return [
        LocationResponse(neighborhood=r.neighborhood, borough=r.borough)
        for r in directory.neighborhoods(borough)
    ]


@router.get("/boroughs", response_model=list[str])
async def list_boroughs(directory: LocationDirectory = Depends(get_directory)):
    return directory.boroughs()


@router.get("/resolve", response_model=LocationResponse)
async def resolve_location(
    name: str = Query(..., description="Neighborhood name, any case"),
    directory: LocationDirectory = Depends(get_directory),
):
    """Resolve a neighborhood name to its canonical name and borough."""
    record = directory.resolve(name)
    return LocationResponse(neighborhood=record.neighborhood, borough=record.borough)


@router.get("/search", response_model=list[LocationResponse])
async def search_locations(
    q: str = Query(..., description="Part of a neighborhood name"),
    borough: str | None = None,
    limit: int = Query(10, ge=1, le=100),
    directory: LocationDirectory = Depends(get_directory),
):
    """Partial-match neighborhood search for autocomplete."""
    return [
        LocationResponse(neighborhood=r.neighborhood, borough=r.borough)
        for r in directory.search(q, borough=borough, limit=limit)
    ]
