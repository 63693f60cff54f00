"""
Report lifecycle: creation pipeline and triage mutations.

Creation runs validation, persistence, routing and notification in order.
Status changes notify the reporter; every mutation is audited.
"""
from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy.orm import Session

from civicconnect.audit import AuditAction, log_report
from civicconnect.db import models, schemas
from civicconnect.db.repositories import reports as report_repo
from civicconnect.services.ai_validation_service import AIValidationService, get_ai_validation_service
from civicconnect.services.notification_service import NotificationService
from civicconnect.services.routing_service import RoutingService
from civicconnect.utils.roles import STATUS_OPEN

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(
        self,
        db: Session,
        *,
        validator: Optional[AIValidationService] = None,
        router: Optional[RoutingService] = None,
        notifier: Optional[NotificationService] = None,
    ) -> None:
        self.db = db
        self.validator = validator or get_ai_validation_service()
        self.router = router or RoutingService()
        self.notifier = notifier or NotificationService()

    async def create_report(self, payload: schemas.ReportCreate, *, reporter_id: uuid.UUID) -> models.Report:
        try:
            result = await self.validator.analyze_image(payload.image_url)
            if not result.valid:
                logger.warning("report_create: rejected by validation label=%s", result.category)
            else:
                logger.info("report_create: validation confidence=%.2f label=%s", result.confidence, result.category)

            report = report_repo.create_report(
                self.db,
                user_id=reporter_id,
                payload=payload,
                ai_label=result.category,
                ai_confidence=round(result.confidence, 4),
            )

            department = self.router.route_report(report)
            self.notifier.notify_official(department, report.report_id)
            self.notifier.send_status_update(report.user_id, report.report_id, STATUS_OPEN)
        except Exception as exc:
            logger.error("report_create_failed: %s", exc, exc_info=True)
            raise

        log_report(
            self.db,
            actor_user_id=reporter_id,
            report_id=report.report_id,
            action=AuditAction.REPORT_CREATE,
            metadata={"category": report.category, "suggested_department": department},
        )
        return report

    def suggested_department(self, report: models.Report) -> str:
        return self.router.department_for(report.category)

    def update_status(self, report: models.Report, status: str, *, actor_id: uuid.UUID) -> models.Report:
        previous = report.status
        updated = report_repo.update_status(self.db, report, status)
        self.notifier.send_status_update(updated.user_id, updated.report_id, status)
        log_report(
            self.db,
            actor_user_id=actor_id,
            report_id=updated.report_id,
            action=AuditAction.REPORT_STATUS_CHANGE,
            metadata={"old_status": previous, "new_status": status},
        )
        return updated

    def assign_department(self, report: models.Report, department: str, *, actor_id: uuid.UUID) -> models.Report:
        previous = report.assigned_department
        updated = report_repo.assign_department(self.db, report, department)
        log_report(
            self.db,
            actor_user_id=actor_id,
            report_id=updated.report_id,
            action=AuditAction.REPORT_ASSIGN_DEPARTMENT,
            metadata={"old_department": previous, "new_department": department},
        )
        return updated

    def delete_report(self, report: models.Report, *, actor_id: uuid.UUID) -> None:
        report_id = report.report_id
        category = report.category
        report_repo.delete_report(self.db, report)
        log_report(
            self.db,
            actor_user_id=actor_id,
            report_id=report_id,
            action=AuditAction.REPORT_DELETE,
            metadata={"category": category},
        )
