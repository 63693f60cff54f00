from civicconnect.db import models
from civicconnect.utils.security import verify_password
from scripts import seed_demo_data


def test_seed_is_idempotent(db_session, capsys):
    assert seed_demo_data.main([]) == 0
    assert seed_demo_data.main([]) == 0

    official = db_session.query(models.User).filter_by(email="official@civic.com").one()
    assert official.role == "OFFICIAL"
    assert verify_password("official123", official.password_hash)

    reports = db_session.query(models.Report).all()
    assert len(reports) == len(seed_demo_data.SAMPLE_REPORTS)
    by_title = {r.title: r for r in reports}
    assert by_title["Broken Street Light in RS Puram"].status == "RESOLVED"
    assert by_title["Broken Street Light in RS Puram"].resolved_at is not None
    assert by_title["Damaged Park Bench"].status == "REJECTED"
    assert "Inserted 0 sample reports." in capsys.readouterr().out


def test_seed_official_only(db_session):
    assert seed_demo_data.main(["--skip-reports"]) == 0
    assert db_session.query(models.Report).count() == 0
    assert db_session.query(models.User).filter_by(role="OFFICIAL").count() == 1
