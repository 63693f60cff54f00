import uuid

from civicconnect.db import models
from civicconnect.utils.roles import ROLE_ADMIN, ROLE_OFFICIAL


def test_list_users_admin_only(client, user_factory, headers_for):
    admin = user_factory(role=ROLE_ADMIN)
    official = user_factory(role=ROLE_OFFICIAL)
    user_factory()

    assert client.get("/users", headers=headers_for(official)).status_code == 403

    r = client.get("/users", headers=headers_for(admin))
    assert r.status_code == 200
    assert len(r.json()) == 3

    r = client.get("/users?role=OFFICIAL", headers=headers_for(admin))
    assert [u["user_id"] for u in r.json()] == [str(official.user_id)]


def test_get_user_access_rules(client, user_factory, headers_for):
    me = user_factory()
    other = user_factory()
    official = user_factory(role=ROLE_OFFICIAL)

    assert client.get(f"/users/{me.user_id}", headers=headers_for(me)).status_code == 200
    assert client.get(f"/users/{other.user_id}", headers=headers_for(me)).status_code == 403
    assert client.get(f"/users/{other.user_id}", headers=headers_for(official)).status_code == 200

    missing = uuid.uuid4()
    r = client.get(f"/users/{missing}", headers=headers_for(official))
    assert r.status_code == 404
    assert r.json()["detail"] == f"User with ID {missing} not found"


def test_users_me(client, user_factory, headers_for):
    me = user_factory(display_name="Meena")
    r = client.get("/users/me", headers=headers_for(me))
    assert r.status_code == 200
    assert r.json()["display_name"] == "Meena"


def test_user_reports(client, user_factory, headers_for, report_factory):
    me = user_factory()
    other = user_factory()
    report_factory(me)
    report_factory(me, category="Garbage")
    report_factory(other)

    r = client.get(f"/users/{me.user_id}/reports", headers=headers_for(me))
    assert r.status_code == 200
    assert len(r.json()) == 2
    assert client.get(f"/users/{other.user_id}/reports", headers=headers_for(me)).status_code == 403


def test_self_update_profile(client, user_factory, headers_for):
    me = user_factory()
    r = client.patch(
        f"/users/{me.user_id}",
        json={"display_name": "  Ravi  ", "fcm_token": "device-token", "phone_number": "+91 12345"},
        headers=headers_for(me),
    )
    assert r.status_code == 200
    body = r.json()
    assert body["display_name"] == "Ravi"
    assert body["phone_number"] == "+9112345"


def test_role_change_requires_admin(client, user_factory, headers_for, db_session):
    me = user_factory()
    r = client.patch(f"/users/{me.user_id}", json={"role": "ADMIN"}, headers=headers_for(me))
    assert r.status_code == 403

    admin = user_factory(role=ROLE_ADMIN)
    r = client.patch(f"/users/{me.user_id}", json={"role": "OFFICIAL"}, headers=headers_for(admin))
    assert r.status_code == 200
    assert r.json()["role"] == "OFFICIAL"

    audit = db_session.query(models.AuditLog).filter_by(action_type="user_role_change").one()
    assert audit.metadata_json == {"old_role": "CITIZEN", "new_role": "OFFICIAL"}


def test_update_other_user_forbidden_for_non_admin(client, user_factory, headers_for):
    me = user_factory()
    other = user_factory()
    r = client.patch(f"/users/{other.user_id}", json={"display_name": "x"}, headers=headers_for(me))
    assert r.status_code == 403


def test_update_duplicate_email_conflicts(client, user_factory, headers_for):
    user_factory(email="taken@example.com")
    me = user_factory()
    r = client.patch(f"/users/{me.user_id}", json={"email": "TAKEN@example.com"}, headers=headers_for(me))
    assert r.status_code == 409


def test_delete_user(client, user_factory, headers_for, report_factory, db_session):
    admin = user_factory(role=ROLE_ADMIN)
    victim = user_factory()
    victim_id = victim.user_id
    report_factory(victim)
    assert db_session.query(models.Report).filter_by(user_id=victim_id).count() == 1

    assert client.delete(f"/users/{victim_id}", headers=headers_for(victim)).status_code == 403
    r = client.delete(f"/users/{victim_id}", headers=headers_for(admin))
    assert r.status_code == 204

    db_session.expire_all()
    assert db_session.query(models.User).filter_by(user_id=victim_id).first() is None
    assert db_session.query(models.Report).filter_by(user_id=victim_id).count() == 0
    assert client.delete(f"/users/{victim_id}", headers=headers_for(admin)).status_code == 404


def test_list_users_rejects_bad_pagination(client, user_factory, headers_for):
    admin = user_factory(role=ROLE_ADMIN)
    h = headers_for(admin)
    assert client.get("/users?skip=-1", headers=h).status_code == 422
    assert client.get("/users?limit=0", headers=h).status_code == 422
    assert client.get("/users?limit=501", headers=h).status_code == 422
    assert client.get(f"/users/{admin.user_id}/reports?skip=-5", headers=h).status_code == 422
    assert client.get("/users?skip=0&limit=500", headers=h).status_code == 200


def test_password_account_cannot_clear_email(client, user_factory, headers_for):
    me = user_factory(email="keep@example.com")
    for body in ({"email": ""}, {"email": None}):
        r = client.patch(f"/users/{me.user_id}", json=body, headers=headers_for(me))
        assert r.status_code == 422
    assert client.get("/users/me", headers=headers_for(me)).json()["email"] == "keep@example.com"
    assert client.post("/auth/login", json={"email": "keep@example.com", "password": "secret123"}).status_code == 200


def test_phone_account_may_add_and_clear_email(client):
    login = client.post("/auth/login", json={"phone": "+15550142"}).json()
    h = {"Authorization": f"Bearer {login['access_token']}"}
    user_id = login["user"]["user_id"]

    r = client.patch(f"/users/{user_id}", json={"email": "phone@example.com"}, headers=h)
    assert r.json()["email"] == "phone@example.com"
    r = client.patch(f"/users/{user_id}", json={"email": None}, headers=h)
    assert r.status_code == 200
    assert r.json()["email"] is None


def test_admin_cannot_delete_self(client, user_factory, headers_for):
    admin = user_factory(role=ROLE_ADMIN)
    r = client.delete(f"/users/{admin.user_id}", headers=headers_for(admin))
    assert r.status_code == 400
