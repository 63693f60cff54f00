"""
Domain-split SQLAlchemy models with a single import surface.

Exposes `Base`, `now_utc`, and all ORM classes.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .users import User
from .reports import Report
from .audit import AuditLog

__all__ = [
    # base
    "Base",
    "now_utc",
    # users/reports
    "User",
    "Report",
    # audit
    "AuditLog",
]
