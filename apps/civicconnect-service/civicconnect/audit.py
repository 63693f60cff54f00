"""
Audit logging helpers and enums.

Centralized helpers to persist normalized audit records with consistent
schema; includes convenience wrappers per target type.
"""
from __future__ import annotations
import logging
import uuid
from enum import Enum
from typing import Any, Optional, Dict
from sqlalchemy.orm import Session

from civicconnect.db import schemas
from civicconnect.db.repositories import audits as audit_repo

logger = logging.getLogger(__name__)


class AuditAction(str, Enum):
    # Auth
    LOGIN_FAILURE = "login_failure"
    PASSWORD_CHANGE = "password_change"
    # Users
    USER_REGISTER = "user_register"
    STAFF_CREATE = "staff_create"
    USER_UPDATE = "user_update"
    USER_ROLE_CHANGE = "user_role_change"
    USER_DELETE = "user_delete"
    # Reports
    REPORT_CREATE = "report_create"
    REPORT_STATUS_CHANGE = "report_status_change"
    REPORT_ASSIGN_DEPARTMENT = "report_assign_department"
    REPORT_DELETE = "report_delete"


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


def log(
    db: Session,
    *,
    action: AuditAction | str,
    status: AuditStatus | str = AuditStatus.SUCCESS,
    target_type: str,
    target_id: Optional[uuid.UUID] = None,
    actor_user_id: Optional[uuid.UUID],
    reason: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
):
    """Central audit logging helper.

    Ensures consistent schema and a single place for enrichment.
    """
    # Persist pure string values, not Enum reprs (avoid 'AuditAction.XYZ')
    action_value = action.value if isinstance(action, AuditAction) else str(action)
    status_value = status.value if isinstance(status, AuditStatus) else str(status)
    audit_log = schemas.AuditLogCreate(
        action_type=action_value,
        status=status_value,
        target_type=target_type,
        target_id=target_id,
        reason=reason,
        metadata=metadata or {},
    )
    return audit_repo.create_audit_log(db, audit_log=audit_log, actor_user_id=actor_user_id)


def safe_log(db: Session, **kwargs) -> None:
    """Write an audit record without letting a failure break the caller's request."""
    try:
        log(db, **kwargs)
    except Exception as exc:
        db.rollback()
        logger.warning("audit_write_failed action=%s error=%s", kwargs.get("action"), exc)


__all__ = ["AuditAction", "AuditStatus", "log", "safe_log"]


# Convenience wrappers. Failures are logged, never raised.
def log_report(db: Session, *, actor_user_id: Optional[uuid.UUID], report_id: uuid.UUID, action: AuditAction, status: AuditStatus | str = AuditStatus.SUCCESS, metadata: Optional[Dict[str, Any]] = None):
    safe_log(
        db,
        action=action,
        status=status,
        target_type="report",
        target_id=report_id,
        actor_user_id=actor_user_id,
        metadata=metadata,
    )


def log_user(db: Session, *, actor_user_id: Optional[uuid.UUID], user_id: Optional[uuid.UUID], action: AuditAction, status: AuditStatus | str = AuditStatus.SUCCESS, reason: Optional[str] = None, metadata: Optional[Dict[str, Any]] = None):
    safe_log(
        db,
        action=action,
        status=status,
        target_type="user",
        target_id=user_id,
        actor_user_id=actor_user_id,
        reason=reason,
        metadata=metadata,
    )


__all__.extend(["log_report", "log_user"])
