"""User account, profile and dashboard routes.

Login only verifies credentials; issuing sessions or tokens is left to the
deployment in front of the API.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from breathewatch.api.deps import get_comparer, get_directory, get_report_store, get_user_store
from breathewatch.api.routes.air_quality import score_response
from breathewatch.api.routes.reports import report_response
from breathewatch.api.schemas import (
    DashboardResponse,
    LoginRequest,
    ProfileUpdate,
    UserCreate,
    UserResponse,
)
from breathewatch.data.directory import LocationDirectory
from breathewatch.data.reports import SQLReportStore
from breathewatch.data.users import SQLUserStore
from breathewatch.engine.comparison import NeighborhoodComparer
from breathewatch.engine.dashboard import build_dashboard
from breathewatch.errors import InvalidArgument
from breathewatch.models.user import User

router = APIRouter(prefix="/api/v1/users", tags=["users"])


def user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        borough=user.borough,
        neighborhood=user.neighborhood,
        age=user.age,
        profile_description=user.profile_description,
        is_profile_configured=user.is_profile_configured,
        created_at=user.created_at,
    )


@router.post("", response_model=UserResponse, status_code=201)
async def sign_up(req: UserCreate, users: SQLUserStore = Depends(get_user_store)):
    if req.password != req.confirm_password:
        raise InvalidArgument("Passwords do not match.")
    user = await users.create_user(req.first_name, req.last_name, req.username, req.password)
    return user_response(user)


@router.post("/login", response_model=UserResponse)
async def log_in(req: LoginRequest, users: SQLUserStore = Depends(get_user_store)):
    return user_response(await users.check_user(req.username, req.password))


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: UUID, users: SQLUserStore = Depends(get_user_store)):
    return user_response(await users.get_user(user_id))


@router.put("/{user_id}/profile", response_model=UserResponse)
async def update_profile(
    user_id: UUID,
    req: ProfileUpdate,
    directory: LocationDirectory = Depends(get_directory),
    users: SQLUserStore = Depends(get_user_store),
):
    """Set the home neighborhood, stored under its canonical name and borough."""
    location = directory.resolve_within(req.neighborhood, req.borough)
    user = await users.update_profile(
        user_id,
        borough=location.borough,
        neighborhood=location.neighborhood,
        age=req.age,
        profile_description=req.profile_description,
    )
    return user_response(user)


@router.get("/{user_id}/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    user_id: UUID,
    users: SQLUserStore = Depends(get_user_store),
    reports: SQLReportStore = Depends(get_report_store),
    comparer: NeighborhoodComparer = Depends(get_comparer),
):
    """The user's reports, newest first, and the current risk for their home neighborhood."""
    dashboard = await build_dashboard(user_id, users, reports, comparer)
    return DashboardResponse(
        user=user_response(dashboard.user),
        reports=[report_response(r) for r in dashboard.reports],
        current_risk=score_response(dashboard.current_score) if dashboard.current_score else None,
        risk_unavailable_reason=dashboard.risk_unavailable_reason,
    )
