"""Tests for neighborhood scoring and comparison."""

import pytest

from breathewatch.engine.comparison import NeighborhoodComparer
from breathewatch.errors import ErrorKind, InvalidArgument, NotFound, UpstreamUnavailable
from breathewatch.models.air_quality import PollutantReading, PollutionScore


@pytest.fixture
def comparer(directory, air_store):
    return NeighborhoodComparer(directory, air_store, year=2023, timeout_seconds=0.5, retries=1)


class TestScore:
    async def test_score_canonicalizes_name(self, comparer, air_store):
        result = await comparer.score("  harlem ")
        assert result.neighborhood == "Harlem"
        assert result.borough == "Manhattan"
        assert result.year == 2023
        assert result.score == PollutionScore.SAFE
        assert air_store.calls == [("Manhattan", "Harlem", 2023)]

    async def test_unknown_name(self, comparer, air_store):
        with pytest.raises(NotFound):
            await comparer.score("Atlantis")
        assert air_store.calls == []

    async def test_missing_reading(self, comparer):
        with pytest.raises(NotFound, match="not available for Park Slope, Brooklyn"):
            await comparer.score("Park Slope")

    async def test_other_year(self, directory, air_store):
        comparer = NeighborhoodComparer(directory, air_store, year=2022)
        result = await comparer.score("Harlem")
        assert result.score == PollutionScore.MODERATE


class TestCompare:
    async def test_safe_reading_formatted(self, comparer):
        [result] = await comparer.compare(["Harlem"])
        assert result.success is True
        assert result.overall_risk == PollutionScore.SAFE
        assert result.pm25 == "7.00"
        assert result.no2 == "20.00"

    async def test_partial_failure(self, comparer):
        results = await comparer.compare(["Harlem", "Atlantis"])
        assert len(results) == 2
        assert results[0].success is True
        assert results[0].overall_risk in PollutionScore
        assert results[1].success is False
        assert results[1].input_name == "Atlantis"
        assert "not recognized" in results[1].error
        assert results[1].error_kind == ErrorKind.NOT_FOUND
        assert results[1].overall_risk is None

    async def test_duplicates_not_merged(self, comparer, air_store):
        results = await comparer.compare(["Harlem", "harlem"])
        assert [r.success for r in results] == [True, True]
        assert [r.input_name for r in results] == ["Harlem", "harlem"]
        assert len(air_store.calls) == 2

    async def test_order_preserved_regardless_of_completion(self, comparer, air_store):
        air_store.delays = {"Harlem": 0.05, "Astoria": 0.01}
        results = await comparer.compare(["Harlem", "Astoria", "Mott Haven"])
        assert [r.neighborhood for r in results] == ["Harlem", "Astoria", "Mott Haven"]
        assert [r.overall_risk for r in results] == [
            PollutionScore.SAFE,
            PollutionScore.MODERATE,
            PollutionScore.HIGH,
        ]
        assert results[1].no2 == "28.25"

    async def test_invalid_names_reported_per_item(self, comparer):
        results = await comparer.compare(["", None, "Astoria"])
        assert [r.success for r in results] == [False, False, True]
        assert results[0].error_kind == ErrorKind.INVALID_ARGUMENT
        assert results[1].input_name == "None"

    async def test_missing_reading_reported(self, comparer):
        [result] = await comparer.compare(["Park Slope"])
        assert result.success is False
        assert result.neighborhood is None
        assert result.error_kind == ErrorKind.NOT_FOUND

    async def test_malformed_reading_reported(self, comparer, air_store):
        air_store.readings[("Brooklyn", "Park Slope", 2023)] = PollutantReading(pm25=-1.0, no2=10.0)
        [result] = await comparer.compare(["Park Slope"])
        assert result.success is False
        assert result.error_kind == ErrorKind.INVALID_ARGUMENT

    async def test_empty_input_rejected(self, comparer):
        with pytest.raises(InvalidArgument):
            await comparer.compare([])


class TestUpstreamFailures:
    async def test_transient_failure_retried(self, comparer, air_store):
        air_store.failures = {"Astoria": 1}
        [result] = await comparer.compare(["Astoria"])
        assert result.success is True
        assert len(air_store.calls) == 2

    async def test_persistent_failure_is_per_item(self, comparer, air_store):
        air_store.failures = {"Astoria": 5}
        results = await comparer.compare(["Astoria", "Harlem"])
        assert results[0].success is False
        assert results[0].error_kind == ErrorKind.UPSTREAM_UNAVAILABLE
        assert results[1].success is True

    async def test_not_found_never_retried(self, comparer, air_store):
        await comparer.compare(["Park Slope"])
        assert air_store.calls == [("Brooklyn", "Park Slope", 2023)]

    async def test_timeout_is_per_item(self, directory, air_store):
        comparer = NeighborhoodComparer(directory, air_store, year=2023, timeout_seconds=0.01, retries=0)
        air_store.delays = {"Astoria": 0.5}
        results = await comparer.compare(["Astoria", "Harlem"])
        assert results[0].success is False
        assert results[0].error_kind == ErrorKind.UPSTREAM_UNAVAILABLE
        assert "timed out" in results[0].error
        assert results[1].success is True

    async def test_score_raises_upstream(self, directory, air_store):
        comparer = NeighborhoodComparer(directory, air_store, year=2023, retries=0)
        air_store.failures = {"Harlem": 1}
        with pytest.raises(UpstreamUnavailable):
            await comparer.score("Harlem")

    async def test_driver_error_is_per_item(self, comparer, air_store):
        air_store.errors = {"Astoria": ConnectionResetError("Connection reset by peer")}
        results = await comparer.compare(["Astoria", "Atlantis", "Harlem"])
        assert [r.success for r in results] == [False, False, True]
        assert results[0].error_kind == ErrorKind.UPSTREAM_UNAVAILABLE
        assert "ConnectionResetError" in results[0].error
        assert results[1].error_kind == ErrorKind.NOT_FOUND

    async def test_driver_error_uses_retry_budget(self, comparer, air_store):
        air_store.errors = {"Astoria": ConnectionRefusedError(111, "Connect call failed")}
        await comparer.compare(["Astoria"])
        assert air_store.calls == [("Queens", "Astoria", 2023)] * 2

    async def test_score_wraps_driver_error(self, directory, air_store):
        comparer = NeighborhoodComparer(directory, air_store, year=2023, retries=0)
        air_store.errors = {"Harlem": RuntimeError("event loop is closed")}
        with pytest.raises(UpstreamUnavailable) as exc_info:
            await comparer.score("Harlem")
        assert isinstance(exc_info.value.__cause__, RuntimeError)
