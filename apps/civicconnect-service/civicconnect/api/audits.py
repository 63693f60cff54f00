"""
Audit log API endpoints.

Administrators query the audit trail with optional filters.
"""
from typing import Optional, List
import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from civicconnect.db.database import get_db
from civicconnect.db import schemas
from civicconnect.db.repositories import audits as audit_repo
from civicconnect.api.deps import require_roles
from civicconnect.utils.roles import ROLE_ADMIN

router = APIRouter(prefix="/audits", tags=["audits"])


@router.get("", response_model=List[schemas.AuditLog])
def list_audit_logs(
    user_id: Optional[uuid.UUID] = None,
    action_type: Optional[str] = None,
    target_type: Optional[str] = None,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
    admin_context=Depends(require_roles(ROLE_ADMIN)),
):
    audit_logs = audit_repo.get_audit_logs(
        db,
        user_id=user_id,
        action_type=action_type,
        target_type=target_type,
        skip=skip,
        limit=limit,
    )
    # Schema reads .metadata; the model stores it on metadata_json
    return [
        schemas.AuditLog(
            id=log.id,
            actor_user_id=log.actor_user_id,
            action_type=log.action_type,
            status=log.status,
            target_type=log.target_type,
            target_id=log.target_id,
            reason=log.reason,
            metadata=log.metadata_json,
            created_at=log.created_at,
        )
        for log in audit_logs
    ]
