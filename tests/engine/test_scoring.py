"""Tests for the pollution score classifier."""

import math

import pytest

from breathewatch.engine.scoring import classify_pollution, classify_reading
from breathewatch.errors import InvalidArgument
from breathewatch.models.air_quality import PollutantReading, PollutionScore


class TestThresholds:
    def test_clean_air_is_safe(self):
        assert classify_pollution(4.2, 12.0) == PollutionScore.SAFE

    def test_safe_boundary_is_inclusive(self):
        assert classify_pollution(7, 20) == PollutionScore.SAFE

    def test_just_over_safe_pm25_is_moderate(self):
        assert classify_pollution(7.01, 20) == PollutionScore.MODERATE

    def test_just_over_safe_no2_is_moderate(self):
        assert classify_pollution(7, 20.01) == PollutionScore.MODERATE

    def test_moderate_boundary_is_inclusive(self):
        assert classify_pollution(12, 35) == PollutionScore.MODERATE

    def test_just_over_moderate_pm25_is_high(self):
        assert classify_pollution(12.01, 35) == PollutionScore.HIGH

    def test_just_over_moderate_no2_is_high(self):
        assert classify_pollution(12, 35.01) == PollutionScore.HIGH

    def test_one_bad_pollutant_drives_category(self):
        """Low PM2.5 does not rescue high NO2."""
        assert classify_pollution(2.0, 50.0) == PollutionScore.HIGH

    def test_zero_readings_are_safe(self):
        assert classify_pollution(0, 0) == PollutionScore.SAFE

    def test_deterministic(self):
        results = {classify_pollution(9.3, 27.1) for _ in range(10)}
        assert results == {PollutionScore.MODERATE}

    def test_classify_reading(self):
        assert classify_reading(PollutantReading(pm25=13.1, no2=40.0)) == PollutionScore.HIGH

    def test_score_values(self):
        assert [s.value for s in PollutionScore] == ["Safe", "Moderate", "High"]


class TestInvalidInput:
    @pytest.mark.parametrize("pm25, no2", [
        (-0.1, 10),
        (5, -1),
        (math.nan, 10),
        (5, math.inf),
        ("7", 20),
        (None, 20),
        (True, 20),
    ])
    def test_rejects_bad_values(self, pm25, no2):
        with pytest.raises(InvalidArgument):
            classify_pollution(pm25, no2)

    def test_error_names_the_pollutant(self):
        with pytest.raises(InvalidArgument, match="NO2"):
            classify_pollution(5, -3)
