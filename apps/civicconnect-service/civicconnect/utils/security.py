"""
Password hashing and access-token utilities.

Responsibilities:
- Hash passwords using Argon2id and verify them without raising on mismatch
- Issue HS256 JWT access tokens carrying the user id and role
- Decode tokens into a small typed structure, returning None when invalid
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from jose import JWTError, jwt

from civicconnect.utils.config import get_settings


_argon2 = PasswordHasher()

TOKEN_TYPE_ACCESS = "access"


@dataclass(frozen=True)
class TokenClaims:
    user_id: uuid.UUID
    role: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    expires_at: datetime


def hash_password(password: str) -> str:
    """Hash a password using Argon2id."""
    return _argon2.hash(password)


def verify_password(password: str, encoded_hash: Optional[str]) -> bool:
    if not password or not encoded_hash:
        return False
    try:
        return _argon2.verify(encoded_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def password_needs_rehash(encoded_hash: str) -> bool:
    """Return True when the stored hash uses outdated Argon2 parameters."""
    try:
        return _argon2.check_needs_rehash(encoded_hash)
    except InvalidHashError:
        return True


def create_access_token(
    *,
    user_id: uuid.UUID,
    role: str,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed access token for the given user."""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expires_minutes))
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "role": role,
        "exp": expire,
        "type": TOKEN_TYPE_ACCESS,
    }
    if email:
        payload["email"] = email
    if phone:
        payload["phone"] = phone
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[TokenClaims]:
    """Decode and validate an access token.

    Returns None if the signature, expiry, type or subject is invalid.
    """
    if not token:
        return None
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if payload.get("type") != TOKEN_TYPE_ACCESS:
        return None
    try:
        user_id = uuid.UUID(str(payload.get("sub")))
    except (TypeError, ValueError):
        return None
    exp = payload.get("exp")
    expires_at = datetime.fromtimestamp(exp, tz=timezone.utc) if isinstance(exp, (int, float)) else datetime.now(timezone.utc)
    return TokenClaims(
        user_id=user_id,
        role=payload.get("role"),
        email=payload.get("email"),
        phone=payload.get("phone"),
        expires_at=expires_at,
    )


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None
    if not authorization.lower().startswith("bearer "):
        return None
    token = authorization[7:].strip()
    return token or None
