"""
Domain-split Pydantic schemas with a single import surface.
"""

from .users import UserBase, UserCreate, StaffCreate, UserUpdate, User
from .auth import LoginRequest, TokenResponse, ChangePasswordRequest
from .reports import (
    ReportBase,
    ReportCreate,
    Report,
    ReportWithDistance,
    ReportStatusUpdate,
    DepartmentAssignment,
    RoutingSuggestion,
)
from .analytics import DashboardStats, HeatmapPoints
from .audits import AuditLogBase, AuditLogCreate, AuditLog

__all__ = [
    # Users
    "UserBase",
    "UserCreate",
    "StaffCreate",
    "UserUpdate",
    "User",
    # Auth
    "LoginRequest",
    "TokenResponse",
    "ChangePasswordRequest",
    # Reports
    "ReportBase",
    "ReportCreate",
    "Report",
    "ReportWithDistance",
    "ReportStatusUpdate",
    "DepartmentAssignment",
    "RoutingSuggestion",
    # Analytics
    "DashboardStats",
    "HeatmapPoints",
    # Audits
    "AuditLogBase",
    "AuditLogCreate",
    "AuditLog",
]
