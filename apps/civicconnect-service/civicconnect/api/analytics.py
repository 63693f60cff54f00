"""
Analytics API endpoints.

Dashboard aggregates (any signed-in user) and the public map feed.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from civicconnect.api.deps import get_current_user_context
from civicconnect.db import schemas
from civicconnect.db.database import get_db
from civicconnect.db.repositories import analytics as analytics_repo
from civicconnect.db.repositories import users as user_repo
from civicconnect.utils.roles import (
    STATUS_APPROVED,
    STATUS_IN_PROGRESS,
    STATUS_OPEN,
    STATUS_REJECTED,
    STATUS_RESOLVED,
)

router = APIRouter(prefix="/analytics", tags=["analytics"])


def format_resolution_time(hours: Optional[float]) -> str:
    """Human-readable average resolution time: hours under a day, else days."""
    if hours is None:
        return "N/A"
    if hours < 24:
        return f"{hours:.1f} Hours"
    return f"{hours / 24:.1f} Days"


@router.get("/dashboard-stats", response_model=schemas.DashboardStats, response_model_by_alias=True)
def dashboard_stats(
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    by_status = analytics_repo.count_reports_by_status(db)
    avg_hours = analytics_repo.average_resolution_hours(db)
    return schemas.DashboardStats(
        total=sum(by_status.values()),
        open=by_status[STATUS_OPEN],
        in_progress=by_status[STATUS_IN_PROGRESS],
        approved=by_status[STATUS_APPROVED],
        resolved=by_status[STATUS_RESOLVED],
        rejected=by_status[STATUS_REJECTED],
        by_category=analytics_repo.count_reports_by_category(db),
        users_by_role=user_repo.count_users_by_role(db),
        avg_resolution_hours=round(avg_hours, 2) if avg_hours is not None else None,
        avg_resolution_time=format_resolution_time(avg_hours),
        ward_performance=analytics_repo.ward_resolution_rates(db),
    )


@router.get("/heatmap", response_model=schemas.HeatmapPoints)
def heatmap(db: Session = Depends(get_db)):
    """Return ``[latitude, longitude]`` pairs for every report."""
    return analytics_repo.heatmap_points(db)
