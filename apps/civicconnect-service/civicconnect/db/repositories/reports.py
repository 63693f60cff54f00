"""
Report repository functions.

Implements create/read/update/delete for reports with status, category and
reporter filters.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from civicconnect.db import models, schemas
from civicconnect.utils.roles import STATUS_OPEN, STATUS_RESOLVED


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_report(
    db: Session,
    *,
    user_id: uuid.UUID,
    payload: schemas.ReportCreate,
    ai_label: Optional[str] = None,
    ai_confidence: Optional[float] = None,
) -> models.Report:
    report = models.Report(
        **payload.model_dump(),
        user_id=user_id,
        status=STATUS_OPEN,
        ai_label=ai_label,
        ai_confidence=ai_confidence,
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    return report


def get_report(db: Session, report_id: uuid.UUID) -> Optional[models.Report]:
    return db.query(models.Report).filter(models.Report.report_id == report_id).first()


def _filtered(db: Session, status: Optional[str], category: Optional[str]):
    q = db.query(models.Report)
    if status:
        q = q.filter(models.Report.status == status)
    if category:
        q = q.filter(models.Report.category == category)
    return q.order_by(models.Report.created_at.desc())


def list_reports(
    db: Session,
    *,
    status: Optional[str] = None,
    category: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[models.Report]:
    return _filtered(db, status, category).offset(skip).limit(limit).all()


def list_all_reports(
    db: Session,
    *,
    status: Optional[str] = None,
    category: Optional[str] = None,
) -> List[models.Report]:
    """Unpaginated listing used when results are post-filtered in Python."""
    return _filtered(db, status, category).all()


def list_reports_for_user(db: Session, user_id: uuid.UUID, *, skip: int = 0, limit: int = 100) -> List[models.Report]:
    return (
        db.query(models.Report)
        .filter(models.Report.user_id == user_id)
        .order_by(models.Report.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def update_status(db: Session, report: models.Report, status: str) -> models.Report:
    report.status = status
    if status == STATUS_RESOLVED:
        if report.resolved_at is None:
            report.resolved_at = _now()
    else:
        report.resolved_at = None
    db.commit()
    db.refresh(report)
    return report


def assign_department(db: Session, report: models.Report, department: str) -> models.Report:
    report.assigned_department = department
    db.commit()
    db.refresh(report)
    return report


def delete_report(db: Session, report: models.Report) -> None:
    db.delete(report)
    db.commit()
