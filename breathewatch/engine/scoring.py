"""Pollution score classifier.

Combined-threshold rule, evaluated in order, first match wins:
  Safe:      PM2.5 <= 7 ug/m3  and NO2 <= 20 ppb
  Moderate:  PM2.5 <= 12 ug/m3 and NO2 <= 35 ppb
  High:      everything else

Boundaries are inclusive.
"""

from breathewatch.engine.validation import check_number
from breathewatch.models.air_quality import PollutantReading, PollutionScore

SAFE_PM25 = 7.0
SAFE_NO2 = 20.0
MODERATE_PM25 = 12.0
MODERATE_NO2 = 35.0


def classify_pollution(pm25: float, no2: float) -> PollutionScore:
    """Classify a (PM2.5, NO2) pair.

    Raises InvalidArgument if either value is not a finite, non-negative number.
    """
    pm25 = check_number(pm25, "PM2.5")
    no2 = check_number(no2, "NO2")

    if pm25 <= SAFE_PM25 and no2 <= SAFE_NO2:
        return PollutionScore.SAFE
    if pm25 <= MODERATE_PM25 and no2 <= MODERATE_NO2:
        return PollutionScore.MODERATE
    return PollutionScore.HIGH


def classify_reading(reading: PollutantReading) -> PollutionScore:
    return classify_pollution(reading.pm25, reading.no2)
