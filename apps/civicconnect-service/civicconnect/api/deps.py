"""
API dependency helpers.

Resolves the bearer token into a user context and provides the role guard
used by routes.
"""
import logging
from typing import Any, Callable, Dict, Optional, Tuple

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from civicconnect.db import models
from civicconnect.db.database import get_db
from civicconnect.db.repositories import users as user_repo
from civicconnect.utils.security import decode_access_token, parse_bearer

logger = logging.getLogger("civicconnect.auth")

# Contract:
# Returns (sqlalchemy User model, current_user_context_dict)
# Raises 401 if identity cannot be resolved.


def build_user_context(user: models.User) -> Dict[str, Any]:
    return {
        "id": user.user_id,
        "email": user.email,
        "phone_number": user.phone_number,
        "display_name": user.display_name,
        "role": user.role,
    }


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _resolve_user(db: Session, authorization: Optional[str]) -> Optional[models.User]:
    token = parse_bearer(authorization)
    if not token:
        return None
    claims = decode_access_token(token)
    if claims is None:
        raise _unauthorized("Invalid or expired token")
    # Reload so deleted users and role changes take effect immediately
    user = user_repo.get_user(db, claims.user_id)
    if not user:
        raise _unauthorized("Invalid token user")
    return user


def get_current_user_context(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(default=None),
) -> Tuple[models.User, Dict[str, Any]]:
    user = _resolve_user(db, authorization)
    if user is None:
        raise _unauthorized("Authentication required")
    return user, build_user_context(user)


def require_roles(*roles: str) -> Callable[..., Tuple[models.User, Dict[str, Any]]]:
    """Dependency factory: admit only authenticated users whose role is in ``roles``."""
    allowed = frozenset(roles)

    def _guard(user_context=Depends(get_current_user_context)):
        user, current_user = user_context
        if current_user.get("role") not in allowed:
            logger.info(
                "role_guard_denied: user=%s role=%s required=%s",
                user.user_id,
                current_user.get("role"),
                sorted(allowed),
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return user, current_user

    return _guard
