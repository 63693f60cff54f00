"""Business logic services package with public service helpers."""

from .ai_validation_service import (
    AIValidationService,
    ValidationResult,
    get_ai_validation_service,
    reset_ai_validation_service_for_tests,
)
from .notification_service import NotificationService
from .report_service import ReportService
from .routing_service import RoutingService, CATEGORY_DEPARTMENT_MAP, DEFAULT_DEPARTMENT

__all__ = [
    "AIValidationService",
    "ValidationResult",
    "get_ai_validation_service",
    "reset_ai_validation_service_for_tests",
    "NotificationService",
    "ReportService",
    "RoutingService",
    "CATEGORY_DEPARTMENT_MAP",
    "DEFAULT_DEPARTMENT",
]
