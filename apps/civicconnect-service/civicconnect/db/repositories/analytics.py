"""
Aggregate queries backing the dashboard.

Counts reports by status and category, computes resolution times and
per-ward resolution rates, and returns map points.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from civicconnect.db import models
from civicconnect.utils.roles import ALL_STATUSES, STATUS_RESOLVED


def count_reports_by_status(db: Session) -> Dict[str, int]:
    rows = db.query(models.Report.status, func.count(models.Report.report_id)).group_by(models.Report.status).all()
    counts = {status: 0 for status in ALL_STATUSES}
    for status, count in rows:
        counts[status] = int(count)
    return counts


def count_reports_by_category(db: Session) -> Dict[str, int]:
    rows = (
        db.query(models.Report.category, func.count(models.Report.report_id))
        .group_by(models.Report.category)
        .all()
    )
    return {category: int(count) for category, count in rows}


def _as_aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on round-trip
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def average_resolution_hours(db: Session) -> Optional[float]:
    rows: List[Tuple[datetime, datetime]] = (
        db.query(models.Report.created_at, models.Report.resolved_at)
        .filter(models.Report.status == STATUS_RESOLVED, models.Report.resolved_at.isnot(None))
        .all()
    )
    durations = [
        (_as_aware(resolved) - _as_aware(created)).total_seconds() / 3600.0
        for created, resolved in rows
        if created is not None and resolved is not None
    ]
    if not durations:
        return None
    return sum(max(0.0, d) for d in durations) / len(durations)


def ward_resolution_rates(db: Session) -> Dict[str, int]:
    """Percentage of each ward's reports that are resolved, keyed ``"Ward <id>"``."""
    rows = (
        db.query(models.Report.ward_id, models.Report.status, func.count(models.Report.report_id))
        .filter(models.Report.ward_id.isnot(None))
        .group_by(models.Report.ward_id, models.Report.status)
        .all()
    )
    totals: Dict[int, int] = {}
    resolved: Dict[int, int] = {}
    for ward_id, status, count in rows:
        totals[ward_id] = totals.get(ward_id, 0) + int(count)
        if status == STATUS_RESOLVED:
            resolved[ward_id] = resolved.get(ward_id, 0) + int(count)
    return {
        f"Ward {ward_id}": round(resolved.get(ward_id, 0) * 100 / total)
        for ward_id, total in sorted(totals.items())
    }


def heatmap_points(db: Session) -> List[List[float]]:
    rows = db.query(models.Report.latitude, models.Report.longitude).all()
    return [[float(lat), float(lng)] for lat, lng in rows]
