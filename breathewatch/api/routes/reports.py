"""Pollution incident report routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from breathewatch.api.deps import get_directory, get_report_store, get_user_store
from breathewatch.api.schemas import (
    ReportCreate,
    ReportPageResponse,
    ReportResponse,
    ReportStatusUpdate,
)
from breathewatch.config import settings
from breathewatch.data.directory import LocationDirectory
from breathewatch.data.reports import SQLReportStore
from breathewatch.data.users import SQLUserStore
from breathewatch.engine.validation import (
    validate_report_type,
    validate_severity,
    validate_status,
)
from breathewatch.models.report import Report

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


def report_response(report: Report) -> ReportResponse:
    return ReportResponse(
        id=report.id,
        user_id=report.user_id,
        neighborhood=report.neighborhood,
        borough=report.borough,
        description=report.description,
        report_type=report.report_type.value,
        severity=report.severity.value,
        status=report.status.value,
        created_at=report.created_at,
    )


@router.get("", response_model=ReportPageResponse)
async def list_reports(
    page: int = Query(1, ge=1),
    store: SQLReportStore = Depends(get_report_store),
):
    result = await store.list_reports(page, settings.reports_page_size)
    return ReportPageResponse(
        reports=[report_response(r) for r in result.reports],
        page=result.page,
        total_pages=result.total_pages,
        total_reports=result.total_reports,
    )


@router.post("", response_model=ReportResponse, status_code=201)
async def create_report(
    req: ReportCreate,
    directory: LocationDirectory = Depends(get_directory),
    store: SQLReportStore = Depends(get_report_store),
    users: SQLUserStore = Depends(get_user_store),
):
    """File a report for a registered user. The neighborhood is stored under its canonical name."""
    report_type = validate_report_type(req.report_type)
    severity = validate_severity(req.severity)
    location = directory.resolve_within(req.neighborhood, req.borough)
    user = await users.get_user(req.user_id)
    report = await store.create_report(
        user_id=str(user.id),
        neighborhood=location.neighborhood,
        borough=location.borough,
        description=req.description,
        report_type=report_type,
        severity=severity,
    )
    return report_response(report)


@router.get("/neighborhood", response_model=list[ReportResponse])
async def list_neighborhood_reports(
    neighborhood: str,
    directory: LocationDirectory = Depends(get_directory),
    store: SQLReportStore = Depends(get_report_store),
):
    location = directory.resolve(neighborhood)
    reports = await store.list_by_neighborhood(location.neighborhood, location.borough)
    return [report_response(r) for r in reports]


@router.get("/user/{user_id}", response_model=list[ReportResponse])
async def list_user_reports(user_id: str, store: SQLReportStore = Depends(get_report_store)):
    return [report_response(r) for r in await store.list_by_user(user_id)]


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report(report_id: UUID, store: SQLReportStore = Depends(get_report_store)):
    return report_response(await store.get_report(report_id))


@router.post("/{report_id}/status", response_model=ReportResponse)
async def update_report_status(
    report_id: UUID,
    req: ReportStatusUpdate,
    store: SQLReportStore = Depends(get_report_store),
):
    status = validate_status(req.status)
    return report_response(await store.update_status(report_id, status))
