"""Neighborhood comparison routes."""

from fastapi import APIRouter, Depends

from breathewatch.api.deps import get_comparer
from breathewatch.api.schemas import (
    ComparisonRequest,
    ComparisonResponse,
    ComparisonResultResponse,
)
from breathewatch.engine.comparison import NeighborhoodComparer

router = APIRouter(prefix="/api/v1/comparison", tags=["comparison"])


@router.post("", response_model=ComparisonResponse)
async def compare_neighborhoods(
    req: ComparisonRequest,
    comparer: NeighborhoodComparer = Depends(get_comparer),
):
    """Compare air quality across two or more neighborhoods.

    Names that cannot be resolved or scored come back with success=false
    instead of failing the request.
    """
    results = await comparer.compare(req.neighborhoods)
    body = [
        ComparisonResultResponse(
            input_name=r.input_name,
            success=r.success,
            neighborhood=r.neighborhood,
            borough=r.borough,
            pm25=r.pm25,
            no2=r.no2,
            overall_risk=r.overall_risk.value if r.overall_risk else None,
            error=r.error,
            error_kind=r.error_kind.value if r.error_kind else None,
        )
        for r in results
    ]
    succeeded = sum(1 for r in results if r.success)
    return ComparisonResponse(results=body, succeeded=succeeded, failed=len(results) - succeeded)
