"""Tests for pollution source summaries and rankings."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from breathewatch.engine.sources import (
    list_by_type,
    neighborhood_summary,
    summarize_sources,
    top_by_borough,
)
from breathewatch.errors import InvalidArgument
from breathewatch.models.report import PollutionSource, SourceType


def _source(name: str, source_type: SourceType, contribution: float) -> PollutionSource:
    return PollutionSource(
        id=uuid4(),
        name=name,
        source_type=source_type,
        neighborhood="Mott Haven",
        borough="Bronx",
        estimated_contribution=contribution,
    )


@pytest.fixture
def bronx_sources() -> list[PollutionSource]:
    return [
        _source("Major Deegan Expressway", SourceType.TRAFFIC, 22.5),
        _source("Harlem River Yard", SourceType.INDUSTRIAL, 31.0),
        _source("Bruckner Blvd", SourceType.TRAFFIC, 12.25),
        _source("Residential boilers", SourceType.RESIDENTIAL, 8.0),
    ]


class TestSummarize:
    def test_breakdown(self, bronx_sources):
        summary = summarize_sources("Mott Haven", "Bronx", bronx_sources)
        assert summary.total_sources == 4
        assert summary.primary_source.name == "Harlem River Yard"
        assert summary.total_contribution == 73.75
        traffic = summary.source_breakdown[SourceType.TRAFFIC]
        assert traffic.count == 2
        assert traffic.total_contribution == 34.75
        assert SourceType.CONSTRUCTION not in summary.source_breakdown

    def test_empty(self):
        summary = summarize_sources("Astoria", "Queens", [])
        assert summary.total_sources == 0
        assert summary.primary_source is None
        assert summary.source_breakdown == {}
        assert summary.total_contribution == 0.0

    def test_tie_keeps_first(self):
        a = _source("A", SourceType.OTHER, 10.0)
        b = _source("B", SourceType.OTHER, 10.0)
        assert summarize_sources("Mott Haven", "Bronx", [a, b]).primary_source is a


class TestStoreBacked:
    async def test_neighborhood_summary(self, bronx_sources):
        store = AsyncMock()
        store.list_by_neighborhood.return_value = bronx_sources
        summary = await neighborhood_summary(store, " Mott Haven ", "Bronx")
        store.list_by_neighborhood.assert_awaited_once_with("Mott Haven", "Bronx")
        assert summary.total_sources == 4

    async def test_neighborhood_summary_validates(self):
        with pytest.raises(InvalidArgument):
            await neighborhood_summary(AsyncMock(), "", "Bronx")

    @pytest.mark.parametrize("limit, expected", [(3, 3), (20, 20), (0, 5), (21, 5), (True, 5)])
    async def test_top_limit_clamped(self, limit, expected):
        store = AsyncMock()
        store.list_sources.return_value = []
        await top_by_borough(store, "Bronx", limit)
        store.list_sources.assert_awaited_once_with(borough="Bronx", limit=expected)

    async def test_list_by_type(self):
        store = AsyncMock()
        store.list_sources.return_value = []
        await list_by_type(store, SourceType.CONSTRUCTION)
        store.list_sources.assert_awaited_once_with(source_type=SourceType.CONSTRUCTION)
