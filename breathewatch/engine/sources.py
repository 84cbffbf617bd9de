"""Pollution source rankings and per-neighborhood summaries."""

from breathewatch.data.base import PollutionSourceStore
from breathewatch.engine.validation import validate_location
from breathewatch.models.report import (
    NeighborhoodPollutionSummary,
    PollutionSource,
    SourceType,
    SourceTypeBreakdown,
)

DEFAULT_TOP_LIMIT = 5
MAX_TOP_LIMIT = 20


def summarize_sources(
    neighborhood: str, borough: str, sources: list[PollutionSource]
) -> NeighborhoodPollutionSummary:
    """Break down a neighborhood's sources by type.

    The primary source is the one with the highest estimated contribution;
    ties keep the earliest in the list.
    """
    if not sources:
        return NeighborhoodPollutionSummary(
            neighborhood=neighborhood,
            borough=borough,
            total_sources=0,
            primary_source=None,
        )

    counts: dict[SourceType, int] = {}
    totals: dict[SourceType, float] = {}
    primary = sources[0]
    for source in sources:
        counts[source.source_type] = counts.get(source.source_type, 0) + 1
        totals[source.source_type] = totals.get(source.source_type, 0.0) + source.estimated_contribution
        if source.estimated_contribution > primary.estimated_contribution:
            primary = source

    breakdown = {
        t: SourceTypeBreakdown(count=counts[t], total_contribution=round(totals[t], 2))
        for t in counts
    }

    return NeighborhoodPollutionSummary(
        neighborhood=neighborhood,
        borough=borough,
        total_sources=len(sources),
        primary_source=primary,
        source_breakdown=breakdown,
        total_contribution=round(sum(totals.values()), 2),
        sources=list(sources),
    )


async def neighborhood_summary(
    store: PollutionSourceStore, neighborhood: str, borough: str
) -> NeighborhoodPollutionSummary:
    neighborhood = validate_location(neighborhood, "Neighborhood")
    borough = validate_location(borough, "Borough")
    sources = await store.list_by_neighborhood(neighborhood, borough)
    return summarize_sources(neighborhood, borough, sources)


async def top_by_borough(
    store: PollutionSourceStore, borough: str, limit: int = DEFAULT_TOP_LIMIT
) -> list[PollutionSource]:
    """Highest-contribution sources in a borough. Out-of-range limits fall back to 5."""
    borough = validate_location(borough, "Borough")
    if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_TOP_LIMIT:
        limit = DEFAULT_TOP_LIMIT
    return await store.list_sources(borough=borough, limit=limit)


async def list_by_type(store: PollutionSourceStore, source_type: SourceType) -> list[PollutionSource]:
    return await store.list_sources(source_type=source_type)
