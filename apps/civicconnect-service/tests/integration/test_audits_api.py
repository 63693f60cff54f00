from civicconnect.utils.roles import ROLE_ADMIN, ROLE_OFFICIAL


def test_audits_admin_only(client, user_factory, headers_for):
    assert client.get("/audits").status_code == 401
    official = user_factory(role=ROLE_OFFICIAL)
    assert client.get("/audits", headers=headers_for(official)).status_code == 403


def test_audits_list_with_filters(client, user_factory, headers_for, report_factory):
    admin = user_factory(role=ROLE_ADMIN)
    reporter = user_factory()
    report = report_factory(reporter)
    client.patch(f"/reports/{report['report_id']}/status", json={"status": "APPROVED"}, headers=headers_for(admin))

    r = client.get("/audits", headers=headers_for(admin))
    assert r.status_code == 200
    actions = [log["action_type"] for log in r.json()]
    assert "report_create" in actions
    assert "report_status_change" in actions

    r = client.get(f"/audits?user_id={admin.user_id}", headers=headers_for(admin))
    logs = r.json()
    assert [log["action_type"] for log in logs] == ["report_status_change"]
    assert logs[0]["metadata"] == {"old_status": "OPEN", "new_status": "APPROVED"}
    assert logs[0]["target_id"] == report["report_id"]

    r = client.get("/audits?action_type=report_create&target_type=report", headers=headers_for(admin))
    assert len(r.json()) == 1
    assert r.json()[0]["actor_user_id"] == str(reporter.user_id)
