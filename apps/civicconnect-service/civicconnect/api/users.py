"""
Users API endpoints.

Listing and profile management; role changes and deletion are restricted to
administrators.
"""
from typing import List, Optional
import uuid
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from civicconnect.audit import AuditAction, log_user
from civicconnect.api.deps import get_current_user_context, require_roles
from civicconnect.api.permissions import can_change_role, can_edit_user, can_view_user
from civicconnect.db import schemas
from civicconnect.db.database import get_db
from civicconnect.db.repositories import reports as report_repo
from civicconnect.db.repositories import users as user_repo
from civicconnect.utils.roles import ROLE_ADMIN, RoleEnum

router = APIRouter(prefix="/users", tags=["users"])  # normalized prefix


def _get_or_404(db: Session, user_id: uuid.UUID):
    user = user_repo.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail=f"User with ID {user_id} not found")
    return user


@router.get("", response_model=List[schemas.User])
def list_users(
    role: Optional[RoleEnum] = None,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
    admin_context=Depends(require_roles(ROLE_ADMIN)),
):
    return user_repo.list_users(db, role=role.value if role else None, skip=skip, limit=limit)


@router.get("/me", response_model=schemas.User)
def get_me(user_context=Depends(get_current_user_context)):
    user, _ctx = user_context
    return user


@router.get("/{user_id}", response_model=schemas.User)
def get_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _user, current_user = user_context
    if not can_view_user(user_id, current_user):
        raise HTTPException(status_code=403, detail="Forbidden")
    return _get_or_404(db, user_id)


@router.get("/{user_id}/reports", response_model=List[schemas.Report])
def get_user_reports(
    user_id: uuid.UUID,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _user, current_user = user_context
    if not can_view_user(user_id, current_user):
        raise HTTPException(status_code=403, detail="Forbidden")
    _get_or_404(db, user_id)
    return report_repo.list_reports_for_user(db, user_id, skip=skip, limit=limit)


@router.patch("/{user_id}", response_model=schemas.User)
def update_user(
    user_id: uuid.UUID,
    payload: schemas.UserUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    actor, current_user = user_context
    if not can_edit_user(user_id, current_user):
        raise HTTPException(status_code=403, detail="Forbidden")
    target = _get_or_404(db, user_id)

    changes = payload.model_dump(exclude_unset=True)
    new_role = changes.pop("role", None)
    if new_role is not None:
        if not can_change_role(current_user):
            raise HTTPException(status_code=403, detail="Only administrators can change roles")
        changes["role"] = getattr(new_role, "value", new_role)

    if "email" in changes and not changes["email"] and target.password_hash:
        # Password accounts sign in by email
        raise HTTPException(status_code=422, detail="email cannot be removed from a password account")
    if changes.get("email") and changes["email"] != target.email:
        other = user_repo.get_user_by_email(db, changes["email"])
        if other and other.user_id != target.user_id:
            raise HTTPException(status_code=409, detail="Email already exists")
    if changes.get("phone_number") and changes["phone_number"] != target.phone_number:
        other = user_repo.get_user_by_phone(db, changes["phone_number"])
        if other and other.user_id != target.user_id:
            raise HTTPException(status_code=409, detail="Phone number already in use")
    if "display_name" in changes and changes["display_name"] is not None:
        s = changes["display_name"].strip()
        if not s:
            raise HTTPException(status_code=422, detail="display_name must be 1..80 characters")
        changes["display_name"] = s

    previous_role = target.role
    try:
        updated = user_repo.update_user(db, target, changes)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Email or phone number already in use")

    if "role" in changes and changes["role"] != previous_role:
        log_user(
            db,
            actor_user_id=actor.user_id,
            user_id=updated.user_id,
            action=AuditAction.USER_ROLE_CHANGE,
            metadata={"old_role": previous_role, "new_role": changes["role"]},
        )
    elif changes:
        log_user(
            db,
            actor_user_id=actor.user_id,
            user_id=updated.user_id,
            action=AuditAction.USER_UPDATE,
            metadata={"fields": sorted(changes.keys())},
        )
    return updated


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin_context=Depends(require_roles(ROLE_ADMIN)),
):
    admin, _ctx = admin_context
    if admin.user_id == user_id:
        raise HTTPException(status_code=400, detail="Administrators cannot delete their own account")
    target = _get_or_404(db, user_id)
    email = target.email
    user_repo.delete_user(db, target)
    log_user(
        db,
        actor_user_id=admin.user_id,
        user_id=user_id,
        action=AuditAction.USER_DELETE,
        metadata={"email": email},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
