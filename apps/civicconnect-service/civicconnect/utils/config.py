"""Runtime configuration sourced from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional


DEFAULT_JWT_SECRET = "secretKey"

_DEFAULT_CORS_ORIGINS = (
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


@dataclass(frozen=True)
class Settings:
    jwt_secret: str
    jwt_algorithm: str
    jwt_expires_minutes: int
    default_admin_email: str
    default_admin_password: str
    seed_default_admin: bool
    auto_create_schema: Optional[bool]
    ai_validation_delay_ms: int
    phone_login_enabled: bool
    cors_origins: List[str]

    @property
    def uses_default_jwt_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


def _normalize_bool(value: str | None, default: bool = True) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def _optional_bool(value: str | None) -> Optional[bool]:
    if value is None or not value.strip():
        return None
    return _normalize_bool(value)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _list_env(name: str, default: tuple) -> List[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    return [entry.strip() for entry in raw.split(",") if entry.strip()]


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings state sourced from the environment."""
    return Settings(
        jwt_secret=os.getenv("JWT_SECRET") or DEFAULT_JWT_SECRET,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_expires_minutes=_int_env("JWT_EXPIRES_MINUTES", 60),
        default_admin_email=(os.getenv("DEFAULT_ADMIN_EMAIL") or "admin@civic.com").strip().lower(),
        default_admin_password=os.getenv("DEFAULT_ADMIN_PASSWORD") or "admin123",
        seed_default_admin=_normalize_bool(os.getenv("SEED_DEFAULT_ADMIN"), default=True),
        # None means "decide from the database dialect"
        auto_create_schema=_optional_bool(os.getenv("AUTO_CREATE_SCHEMA")),
        ai_validation_delay_ms=max(0, _int_env("AI_VALIDATION_DELAY_MS", 500)),
        phone_login_enabled=_normalize_bool(os.getenv("PHONE_LOGIN_ENABLED"), default=True),
        cors_origins=_list_env("CORS_ORIGINS", _DEFAULT_CORS_ORIGINS),
    )


def phone_login_enabled() -> bool:
    """Toggle for passwordless phone-number login."""
    return get_settings().phone_login_enabled


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()
