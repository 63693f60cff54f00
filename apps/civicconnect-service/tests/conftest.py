import os
import uuid

# Must be set before the app modules read configuration
os.environ.setdefault("PYTEST_RUNNING", "1")
os.environ["AI_VALIDATION_DELAY_MS"] = "0"

import pytest
from fastapi.testclient import TestClient

from civicconnect.db import database, models
from civicconnect.db.repositories import users as user_repo
from civicconnect.services.ai_validation_service import reset_ai_validation_service_for_tests
from civicconnect.utils.config import refresh_settings_cache
from civicconnect.utils.roles import ROLE_CITIZEN
from civicconnect.utils.security import create_access_token, hash_password


@pytest.fixture(scope="session", autouse=True)
def _schema():
    """Create all tables once in the shared in-memory database."""
    models.Base.metadata.create_all(bind=database.engine)
    yield
    models.Base.metadata.drop_all(bind=database.engine)


@pytest.fixture(autouse=True)
def _clean_state(monkeypatch):
    monkeypatch.setenv("AI_VALIDATION_DELAY_MS", "0")
    refresh_settings_cache()
    reset_ai_validation_service_for_tests()
    yield
    with database.engine.begin() as conn:
        for table in reversed(models.Base.metadata.sorted_tables):
            conn.execute(table.delete())
    refresh_settings_cache()
    reset_ai_validation_service_for_tests()


@pytest.fixture
def db_session():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from civicconnect.api.main import app
    return TestClient(app)


@pytest.fixture
def user_factory(db_session):
    def _create(email=None, role=ROLE_CITIZEN, password="secret123", phone=None, display_name=None):
        email = email or f"user_{uuid.uuid4().hex[:8]}@example.com"
        return user_repo.create_user(
            db_session,
            email=email,
            phone_number=phone,
            password_hash=hash_password(password),
            role=role,
            display_name=display_name or email.split("@")[0],
        )
    return _create


def auth_headers(user):
    token = create_access_token(user_id=user.user_id, role=user.role, email=user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers


SAMPLE_REPORT = {
    "title": "Pothole near the market",
    "category": "Pothole",
    "description": "Deep pothole on the left lane",
    "location": "Gandhipuram, Coimbatore",
    "image_url": "https://example.com/pothole.jpg",
    "latitude": 11.0168,
    "longitude": 76.9558,
    "ward_id": 2,
}


@pytest.fixture
def report_payload():
    def _payload(**overrides):
        data = dict(SAMPLE_REPORT)
        data.update(overrides)
        return data
    return _payload


@pytest.fixture
def report_factory(client, headers_for, report_payload):
    """Submit a report through the API as ``reporter`` and return the JSON body."""
    def _create(reporter, **overrides):
        r = client.post("/reports", json=report_payload(**overrides), headers=headers_for(reporter))
        assert r.status_code == 201, r.text
        return r.json()
    return _create
