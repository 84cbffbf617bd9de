"""Neighborhood scoring and multi-neighborhood comparison.

Flow per name: directory lookup -> record store read -> classification.
A comparison fans the names out concurrently and joins them in input order;
one failing name never fails the batch.
"""

import asyncio
import logging

from breathewatch.config import settings
from breathewatch.data.base import AirQualityStore
from breathewatch.data.directory import LocationDirectory
from breathewatch.engine.scoring import classify_reading
from breathewatch.errors import (
    BreatheWatchError,
    InvalidArgument,
    NotFound,
    UpstreamUnavailable,
)
from breathewatch.models.air_quality import (
    ComparisonResult,
    NeighborhoodScore,
    PollutantReading,
)
from breathewatch.models.location import LocationRecord

logger = logging.getLogger(__name__)


def _format(value: float) -> str:
    return f"{value:.2f}"


class NeighborhoodComparer:
    def __init__(
        self,
        directory: LocationDirectory,
        store: AirQualityStore,
        year: int | None = None,
        timeout_seconds: float | None = None,
        retries: int | None = None,
    ):
        self.directory = directory
        self.store = store
        self.year = year if year is not None else settings.air_quality_year
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.record_store_timeout_seconds
        )
        self.retries = retries if retries is not None else settings.record_store_retries

    async def _fetch_reading(self, location: LocationRecord) -> PollutantReading:
        """Read the stored reading with a timeout.

        Timeouts and store failures are retried and end as UpstreamUnavailable;
        a missing reading is final.
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                reading = await asyncio.wait_for(
                    self.store.find_reading(location.borough, location.neighborhood, self.year),
                    timeout=self.timeout_seconds,
                )
                break
            except asyncio.TimeoutError as e:
                cause, message = e, f"Air quality lookup for {location.neighborhood} timed out."
            except UpstreamUnavailable as e:
                cause, message = e, e.message
            except BreatheWatchError:
                raise
            except Exception as e:
                # Stores that leak driver errors still count as an unavailable upstream.
                cause, message = e, f"Air quality store unavailable: {e!r}"

            if attempt > self.retries:
                raise UpstreamUnavailable(message) from cause
            logger.warning(
                "Air quality lookup for %s failed (attempt %d/%d): %s",
                location.neighborhood, attempt, self.retries + 1, message,
            )

        if reading is None:
            raise NotFound(
                f"Air quality data not available for {location.neighborhood}, {location.borough}."
            )
        return reading

    async def score(self, raw_name: object) -> NeighborhoodScore:
        """Score a single neighborhood. Raises InvalidArgument, NotFound or UpstreamUnavailable."""
        location = self.directory.resolve(raw_name)
        reading = await self._fetch_reading(location)
        return NeighborhoodScore(
            neighborhood=location.neighborhood,
            borough=location.borough,
            year=self.year,
            reading=reading,
            score=classify_reading(reading),
        )

    async def _compare_one(self, raw_name: object) -> ComparisonResult:
        input_name = raw_name if isinstance(raw_name, str) else str(raw_name)
        try:
            result = await self.score(raw_name)
        except BreatheWatchError as e:
            logger.info("Comparison entry %r failed: %s", input_name, e.message)
            return ComparisonResult(
                input_name=input_name,
                success=False,
                error=e.message,
                error_kind=e.kind,
            )

        return ComparisonResult(
            input_name=input_name,
            success=True,
            neighborhood=result.neighborhood,
            borough=result.borough,
            pm25=_format(result.reading.pm25),
            no2=_format(result.reading.no2),
            overall_risk=result.score,
        )

    async def compare(self, raw_names: list) -> list[ComparisonResult]:
        """Compare neighborhoods. Output has the same length and order as the input."""
        if not isinstance(raw_names, (list, tuple)) or not raw_names:
            raise InvalidArgument("At least one neighborhood name is required.")
        return list(await asyncio.gather(*(self._compare_one(name) for name in raw_names)))
