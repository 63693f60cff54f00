import logging
import uuid
from types import SimpleNamespace

import pytest

from civicconnect.services.notification_service import NotificationService
from civicconnect.services.routing_service import DEFAULT_DEPARTMENT, RoutingService


@pytest.mark.parametrize(
    "category,department",
    [
        ("Pothole", "Roads & Bridges"),
        ("  garbage ", "Sanitation"),
        ("STREET LIGHT", "Electrical"),
        ("Water Leak", "Water Supply"),
        ("Stray Animals", DEFAULT_DEPARTMENT),
        (None, DEFAULT_DEPARTMENT),
    ],
)
def test_department_lookup(category, department):
    assert RoutingService().department_for(category) == department


def test_custom_mapping_and_default():
    router = RoutingService({"Noise": "Police"}, default="Front Desk")
    assert router.department_for("noise") == "Police"
    assert router.department_for("Pothole") == "Front Desk"


def test_route_report_logs_without_touching_report(caplog):
    report = SimpleNamespace(report_id=uuid.uuid4(), category="Garbage", assigned_department=None)
    with caplog.at_level(logging.INFO, logger="civicconnect.services.routing_service"):
        department = RoutingService().route_report(report)
    assert department == "Sanitation"
    assert report.assigned_department is None
    assert "Sanitation" in caplog.text


def test_status_update_message(caplog):
    rid = uuid.uuid4()
    with caplog.at_level(logging.INFO, logger="civicconnect.notifications"):
        message = NotificationService().send_status_update(uuid.uuid4(), rid, "RESOLVED")
    assert message == f"Your report {rid} is now RESOLVED."
    assert message in caplog.text


def test_official_alert_message(caplog):
    rid = uuid.uuid4()
    with caplog.at_level(logging.INFO, logger="civicconnect.notifications"):
        message = NotificationService().notify_official("Sanitation", rid)
    assert message == f"New report {rid} assigned to department Sanitation."
    assert "department_alert" in caplog.text
