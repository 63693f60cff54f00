"""
Notification service: status updates for reporters and alerts for departments.

Delivery is log-only; each method renders the message, writes it to the
``civicconnect.notifications`` logger, and returns the rendered text.
"""
from __future__ import annotations

import logging
import uuid
from typing import Union

logger = logging.getLogger("civicconnect.notifications")

EVENT_STATUS_UPDATE = "report_status_update"
EVENT_DEPARTMENT_ALERT = "department_alert"


class NotificationService:
    """Service class for handling all notification operations."""

    def send_status_update(self, user_id: Union[uuid.UUID, str], report_id: Union[uuid.UUID, str], new_status: str) -> str:
        status_value = getattr(new_status, "value", new_status)
        message = f"Your report {report_id} is now {status_value}."
        logger.info("[%s] to user %s: %s", EVENT_STATUS_UPDATE, user_id, message)
        return message

    def notify_official(self, department: str, report_id: Union[uuid.UUID, str]) -> str:
        message = f"New report {report_id} assigned to department {department}."
        logger.info("[%s] %s", EVENT_DEPARTMENT_ALERT, message)
        return message
