"""
Authentication endpoints and helpers.

Credential checks, token issuance, self-registration, staff account creation
and password changes. Also seeds the default administrator on startup.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from civicconnect.audit import AuditAction, AuditStatus, log_user
from civicconnect.api.deps import get_current_user_context, require_roles
from civicconnect.db import models, schemas
from civicconnect.db.database import get_db
from civicconnect.db.repositories import users as user_repo
from civicconnect.utils.config import get_settings, phone_login_enabled
from civicconnect.utils.roles import ROLE_ADMIN, ROLE_CITIZEN, role_is_staff
from civicconnect.utils.security import (
    create_access_token,
    hash_password,
    password_needs_rehash,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def authenticate_user(db: Session, email: str, password: str) -> Optional[models.User]:
    """Return the user when the email/password pair matches, else None."""
    user = user_repo.get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    if password_needs_rehash(user.password_hash):
        user_repo.set_password_hash(db, user, hash_password(password))
    return user


def issue_token(user: models.User) -> schemas.TokenResponse:
    token = create_access_token(
        user_id=user.user_id,
        role=user.role,
        email=user.email,
        phone=user.phone_number,
    )
    return schemas.TokenResponse(
        access_token=token,
        user=schemas.User.model_validate(user, from_attributes=True),
    )


def _ensure_unique(db: Session, *, email: Optional[str], phone: Optional[str]) -> None:
    if email and user_repo.get_user_by_email(db, email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already exists")
    if phone and user_repo.get_user_by_phone(db, phone):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Phone number already in use")


def _create_local_user(db: Session, payload: schemas.UserCreate, role: str) -> models.User:
    _ensure_unique(db, email=payload.email, phone=payload.phone)
    try:
        return user_repo.create_user(
            db,
            email=payload.email,
            phone_number=payload.phone,
            password_hash=hash_password(payload.password),
            role=role,
            display_name=payload.display_name,
        )
    except IntegrityError:
        # Lost a race with a concurrent registration
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email or phone number already in use")


def ensure_default_admin(db: Session) -> Optional[models.User]:
    """Create the configured default administrator if it does not exist yet.

    Returns the created user, or None when an account with that email exists.
    """
    settings = get_settings()
    if user_repo.get_user_by_email(db, settings.default_admin_email):
        return None
    logger.info("Creating default admin user %s", settings.default_admin_email)
    admin = user_repo.create_user(
        db,
        email=settings.default_admin_email,
        password_hash=hash_password(settings.default_admin_password),
        role=ROLE_ADMIN,
        display_name="Administrator",
    )
    if settings.default_admin_password == "admin123":
        logger.warning("Default admin %s uses the built-in password; change it", settings.default_admin_email)
    return admin


@router.post("/login", response_model=schemas.TokenResponse)
def login(payload: schemas.LoginRequest, db: Session = Depends(get_db)):
    if payload.is_phone_login:
        if not phone_login_enabled():
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Phone login is disabled")
        user = user_repo.get_user_by_phone(db, payload.phone)
        if user and (user.password_hash or role_is_staff(user.role)):
            # Password and staff accounts never sign in by phone number alone
            log_user(
                db,
                actor_user_id=None,
                user_id=user.user_id,
                action=AuditAction.LOGIN_FAILURE,
                status=AuditStatus.FAILURE,
                reason="phone login refused for password account",
            )
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )
        if not user:
            user = user_repo.create_user(db, phone_number=payload.phone, role=ROLE_CITIZEN, provider="LOCAL")
            logger.info("phone_login: created citizen %s", user.user_id)
        return issue_token(user)

    if payload.is_password_login:
        user = authenticate_user(db, payload.email, payload.password)
        if not user:
            known = user_repo.get_user_by_email(db, payload.email)
            log_user(
                db,
                actor_user_id=known.user_id if known else None,
                user_id=known.user_id if known else None,
                action=AuditAction.LOGIN_FAILURE,
                status=AuditStatus.FAILURE,
                metadata={"email": payload.email},
            )
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return issue_token(user)

    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request")


@router.post("/register", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.UserCreate, db: Session = Depends(get_db)):
    user = _create_local_user(db, payload, ROLE_CITIZEN)
    log_user(db, actor_user_id=user.user_id, user_id=user.user_id, action=AuditAction.USER_REGISTER)
    return user


@router.post("/register-admin", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def register_staff(
    payload: schemas.StaffCreate,
    db: Session = Depends(get_db),
    admin_context=Depends(require_roles(ROLE_ADMIN)),
):
    admin, _ctx = admin_context
    user = _create_local_user(db, payload, payload.role.value)
    log_user(
        db,
        actor_user_id=admin.user_id,
        user_id=user.user_id,
        action=AuditAction.STAFF_CREATE,
        metadata={"role": user.role},
    )
    return user


@router.post("/change-password")
def change_password(
    payload: schemas.ChangePasswordRequest,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    user, _ctx = user_context
    if not verify_password(payload.old_password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect old password")
    user_repo.set_password_hash(db, user, hash_password(payload.new_password))
    log_user(db, actor_user_id=user.user_id, user_id=user.user_id, action=AuditAction.PASSWORD_CHANGE)
    return {"message": "Password updated"}


@router.get("/me", response_model=schemas.User)
def read_me(user_context=Depends(get_current_user_context)):
    user, _ctx = user_context
    return user
