"""Tests for the per-user dashboard."""

from uuid import uuid4

import pytest

from breathewatch.data.reports import SQLReportStore
from breathewatch.engine.comparison import NeighborhoodComparer
from breathewatch.engine.dashboard import NO_HOME_NEIGHBORHOOD, build_dashboard
from breathewatch.errors import NotFound
from breathewatch.models.air_quality import PollutionScore
from breathewatch.models.report import ReportType, Severity


@pytest.fixture
def comparer(directory, air_store):
    return NeighborhoodComparer(directory, air_store, year=2023, timeout_seconds=0.5, retries=0)


@pytest.fixture
def reports(session_factory):
    return SQLReportStore(session_factory)


@pytest.fixture
async def user(user_store):
    return await user_store.create_user("Dev", "Patel", "devpatel", "Astoria#2023")


async def _file(reports, user):
    return await reports.create_report(
        str(user.id), "Astoria", "Queens",
        "Diesel fumes idling outside the school", ReportType.ODOR, Severity.MEDIUM,
    )


async def test_dashboard_with_home_neighborhood(user, user_store, reports, comparer):
    await user_store.update_profile(user.id, "Queens", "Astoria", 29)
    report = await _file(reports, user)

    dashboard = await build_dashboard(user.id, user_store, reports, comparer)
    assert dashboard.user.neighborhood == "Astoria"
    assert [r.id for r in dashboard.reports] == [report.id]
    assert dashboard.current_score.score == PollutionScore.MODERATE
    assert dashboard.risk_unavailable_reason is None


async def test_dashboard_without_profile(user, user_store, reports, comparer, air_store):
    dashboard = await build_dashboard(user.id, user_store, reports, comparer)
    assert dashboard.reports == []
    assert dashboard.current_score is None
    assert dashboard.risk_unavailable_reason == NO_HOME_NEIGHBORHOOD
    assert air_store.calls == []


async def test_dashboard_when_home_has_no_data(user, user_store, reports, comparer):
    await user_store.update_profile(user.id, "Brooklyn", "Park Slope", 40)
    dashboard = await build_dashboard(user.id, user_store, reports, comparer)
    assert dashboard.current_score is None
    assert "not available for Park Slope" in dashboard.risk_unavailable_reason


async def test_dashboard_when_store_is_down(user, user_store, reports, comparer, air_store):
    await user_store.update_profile(user.id, "Queens", "Astoria", 29)
    air_store.errors = {"Astoria": ConnectionResetError("Connection reset by peer")}
    dashboard = await build_dashboard(user.id, user_store, reports, comparer)
    assert dashboard.current_score is None
    assert "unavailable" in dashboard.risk_unavailable_reason


async def test_dashboard_unknown_user(user_store, reports, comparer):
    with pytest.raises(NotFound):
        await build_dashboard(uuid4(), user_store, reports, comparer)
