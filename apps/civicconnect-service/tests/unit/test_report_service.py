import asyncio
import logging

import pytest

from civicconnect.db import models, schemas
from civicconnect.services.ai_validation_service import ValidationResult
from civicconnect.services.report_service import ReportService
from civicconnect.utils.roles import ROLE_ADMIN


class _StubValidator:
    def __init__(self, category="Garbage", confidence=0.9):
        self.calls = []
        self._result = ValidationResult(valid=True, category=category, confidence=confidence)

    async def analyze_image(self, image_url):
        self.calls.append(image_url)
        return self._result


class _RecordingNotifier:
    def __init__(self):
        self.events = []

    def send_status_update(self, user_id, report_id, new_status):
        self.events.append(("status", user_id, report_id, new_status))

    def notify_official(self, department, report_id):
        self.events.append(("official", department, report_id))


@pytest.fixture
def service_parts(db_session):
    validator = _StubValidator()
    notifier = _RecordingNotifier()
    return validator, notifier, ReportService(db_session, validator=validator, notifier=notifier)


def _create(service, reporter, report_payload, **overrides):
    payload = schemas.ReportCreate(**report_payload(**overrides))
    return asyncio.run(service.create_report(payload, reporter_id=reporter.user_id))


def test_create_report_runs_pipeline(service_parts, user_factory, report_payload, db_session):
    validator, notifier, service = service_parts
    reporter = user_factory()

    report = _create(service, reporter, report_payload, category="Pothole")

    assert validator.calls == [report_payload()["image_url"]]
    assert report.status == "OPEN"
    assert report.ai_label == "Garbage"
    assert report.ai_confidence == pytest.approx(0.9)
    # Routing is advisory only
    assert report.assigned_department is None
    assert notifier.events[0] == ("official", "Roads & Bridges", report.report_id)
    assert notifier.events[1] == ("status", reporter.user_id, report.report_id, "OPEN")

    audit = db_session.query(models.AuditLog).filter_by(action_type="report_create").one()
    assert audit.target_id == report.report_id
    assert audit.metadata_json["suggested_department"] == "Roads & Bridges"


def test_create_report_failure_is_logged_and_raised(db_session, user_factory, report_payload, caplog):
    class _Broken:
        async def analyze_image(self, image_url):
            raise RuntimeError("model offline")

    service = ReportService(db_session, validator=_Broken(), notifier=_RecordingNotifier())
    reporter = user_factory()
    with caplog.at_level(logging.ERROR):
        with pytest.raises(RuntimeError):
            _create(service, reporter, report_payload)
    assert "report_create_failed" in caplog.text
    assert db_session.query(models.Report).count() == 0


def test_status_change_sets_and_clears_resolved_at(service_parts, user_factory, report_payload):
    _validator, notifier, service = service_parts
    reporter = user_factory()
    admin = user_factory(role=ROLE_ADMIN)
    report = _create(service, reporter, report_payload)

    resolved = service.update_status(report, "RESOLVED", actor_id=admin.user_id)
    assert resolved.resolved_at is not None
    assert notifier.events[-1] == ("status", reporter.user_id, report.report_id, "RESOLVED")

    reopened = service.update_status(report, "IN_PROGRESS", actor_id=admin.user_id)
    assert reopened.resolved_at is None


def test_suggested_department_uses_category(service_parts, user_factory, report_payload):
    _validator, _notifier, service = service_parts
    report = _create(service, user_factory(), report_payload, category="Water Leak")
    assert service.suggested_department(report) == "Water Supply"


def test_assign_and_delete_are_audited(service_parts, user_factory, report_payload, db_session):
    _validator, _notifier, service = service_parts
    admin = user_factory(role=ROLE_ADMIN)
    report = _create(service, user_factory(), report_payload)
    report_id = report.report_id

    service.assign_department(report, "Sanitation", actor_id=admin.user_id)
    service.delete_report(report, actor_id=admin.user_id)

    assert db_session.query(models.Report).filter_by(report_id=report_id).first() is None
    actions = {a.action_type for a in db_session.query(models.AuditLog).filter_by(target_id=report_id)}
    assert {"report_assign_department", "report_delete"} <= actions
