"""Per-user dashboard: the user's reports plus the current risk at home."""

import logging
from uuid import UUID

from breathewatch.data.base import ReportStore, UserStore
from breathewatch.engine.comparison import NeighborhoodComparer
from breathewatch.errors import NotFound, UpstreamUnavailable
from breathewatch.models.user import Dashboard

logger = logging.getLogger(__name__)

NO_HOME_NEIGHBORHOOD = "Home neighborhood not set."


async def build_dashboard(
    user_id: UUID,
    users: UserStore,
    reports: ReportStore,
    comparer: NeighborhoodComparer,
) -> Dashboard:
    """Assemble the dashboard. A missing or unreadable home score does not fail it."""
    user = await users.get_user(user_id)
    user_reports = await reports.list_by_user(str(user.id))

    if not user.neighborhood:
        return Dashboard(user=user, reports=user_reports, risk_unavailable_reason=NO_HOME_NEIGHBORHOOD)

    try:
        score = await comparer.score(user.neighborhood)
    except (NotFound, UpstreamUnavailable) as e:
        logger.warning("No current risk for %s's home %s: %s", user.username, user.neighborhood, e.message)
        return Dashboard(user=user, reports=user_reports, risk_unavailable_reason=e.message)

    return Dashboard(user=user, reports=user_reports, current_score=score)
