"""
Reports API endpoints.

Public reads (including nearby search), authenticated submission, and
role-guarded triage actions.
"""
from typing import List, Optional
import uuid
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from civicconnect.api.deps import get_current_user_context, require_roles
from civicconnect.api.permissions import can_set_report_status
from civicconnect.db import schemas
from civicconnect.db.database import get_db
from civicconnect.db.repositories import reports as report_repo
from civicconnect.services.report_service import ReportService
from civicconnect.utils.geo import haversine_km
from civicconnect.utils.roles import ROLE_ADMIN, ROLE_OFFICIAL, ReportStatus

router = APIRouter(prefix="/reports", tags=["reports"])  # normalized prefix


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    return ReportService(db)


def _get_or_404(db: Session, report_id: uuid.UUID):
    report = report_repo.get_report(db, report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


@router.post("", response_model=schemas.Report, status_code=status.HTTP_201_CREATED)
async def create_report(
    payload: schemas.ReportCreate,
    user_context=Depends(get_current_user_context),
    service: ReportService = Depends(get_report_service),
):
    user, _ctx = user_context
    return await service.create_report(payload, reporter_id=user.user_id)


@router.get("", response_model=List[schemas.ReportWithDistance])
def list_reports(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    status_filter: Optional[ReportStatus] = Query(default=None, alias="status"),
    category: Optional[str] = None,
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lng: Optional[float] = Query(default=None, ge=-180, le=180),
    radius_km: float = Query(default=5.0, gt=0, le=20000),
    db: Session = Depends(get_db),
):
    status_value = status_filter.value if status_filter else None
    if lat is None or lng is None:
        if (lat is None) != (lng is None):
            raise HTTPException(status_code=422, detail="lat and lng must be provided together")
        return report_repo.list_reports(db, status=status_value, category=category, skip=skip, limit=limit)

    nearby = []
    for report in report_repo.list_all_reports(db, status=status_value, category=category):
        distance = haversine_km(lat, lng, report.latitude, report.longitude)
        if distance <= radius_km:
            item = schemas.ReportWithDistance.model_validate(report, from_attributes=True)
            item.distance_km = round(distance, 3)
            nearby.append(item)
    nearby.sort(key=lambda r: r.distance_km)
    return nearby[skip:skip + limit]


@router.get("/{report_id}", response_model=schemas.Report)
def get_report(report_id: uuid.UUID, db: Session = Depends(get_db)):
    return _get_or_404(db, report_id)


@router.get("/{report_id}/routing", response_model=schemas.RoutingSuggestion)
def get_report_routing(
    report_id: uuid.UUID,
    db: Session = Depends(get_db),
    service: ReportService = Depends(get_report_service),
):
    report = _get_or_404(db, report_id)
    return schemas.RoutingSuggestion(
        report_id=report.report_id,
        category=report.category,
        department=service.suggested_department(report),
        assigned_department=report.assigned_department,
    )


@router.patch("/{report_id}/status", response_model=schemas.Report)
def update_report_status(
    report_id: uuid.UUID,
    payload: schemas.ReportStatusUpdate,
    db: Session = Depends(get_db),
    staff_context=Depends(require_roles(ROLE_ADMIN, ROLE_OFFICIAL)),
    service: ReportService = Depends(get_report_service),
):
    staff, current_user = staff_context
    report = _get_or_404(db, report_id)
    if not can_set_report_status(payload.status, current_user):
        raise HTTPException(
            status_code=403,
            detail=f"Role {current_user.get('role')} cannot set status {payload.status.value}",
        )
    return service.update_status(report, payload.status.value, actor_id=staff.user_id)


@router.patch("/{report_id}/assign-department", response_model=schemas.Report)
def assign_report_department(
    report_id: uuid.UUID,
    payload: schemas.DepartmentAssignment,
    db: Session = Depends(get_db),
    admin_context=Depends(require_roles(ROLE_ADMIN)),
    service: ReportService = Depends(get_report_service),
):
    admin, _ctx = admin_context
    report = _get_or_404(db, report_id)
    return service.assign_department(report, payload.department, actor_id=admin.user_id)


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(
    report_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin_context=Depends(require_roles(ROLE_ADMIN)),
    service: ReportService = Depends(get_report_service),
):
    admin, _ctx = admin_context
    report = _get_or_404(db, report_id)
    service.delete_report(report, actor_id=admin.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
