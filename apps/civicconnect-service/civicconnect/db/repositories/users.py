"""
User repository functions.

Implements create/read/update/delete for users plus lookups by email and
phone number.
"""
from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from civicconnect.db import models
from civicconnect.utils.roles import ROLE_CITIZEN


def get_user(db: Session, user_id: uuid.UUID) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.user_id == user_id).first()


def get_user_by_email(db: Session, email: Optional[str]) -> Optional[models.User]:
    if not email:
        return None
    return db.query(models.User).filter(models.User.email == email.strip().lower()).first()


def get_user_by_phone(db: Session, phone_number: Optional[str]) -> Optional[models.User]:
    if not phone_number:
        return None
    return db.query(models.User).filter(models.User.phone_number == phone_number).first()


def list_users(
    db: Session,
    *,
    role: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[models.User]:
    q = db.query(models.User)
    if role:
        q = q.filter(models.User.role == role)
    return q.order_by(models.User.created_at.desc()).offset(skip).limit(limit).all()


def create_user(
    db: Session,
    *,
    email: Optional[str] = None,
    phone_number: Optional[str] = None,
    password_hash: Optional[str] = None,
    role: str = ROLE_CITIZEN,
    provider: str = "LOCAL",
    display_name: Optional[str] = None,
) -> models.User:
    user = models.User(
        email=email.strip().lower() if email else None,
        phone_number=phone_number,
        password_hash=password_hash,
        role=role,
        provider=provider,
        display_name=display_name or (email.split("@")[0] if email else None),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user: models.User, changes: Dict[str, Any]) -> models.User:
    changed = False
    for field, value in changes.items():
        if getattr(user, field) != value:
            setattr(user, field, value)
            changed = True
    if changed:
        db.commit()
        db.refresh(user)
    return user


def set_password_hash(db: Session, user: models.User, password_hash: str) -> models.User:
    user.password_hash = password_hash
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user: models.User) -> None:
    db.delete(user)
    db.commit()


def count_users_by_role(db: Session) -> Dict[str, int]:
    from sqlalchemy import func

    rows = db.query(models.User.role, func.count(models.User.user_id)).group_by(models.User.role).all()
    return {role: int(count) for role, count in rows}
