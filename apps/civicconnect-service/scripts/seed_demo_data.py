"""Seed a demo OFFICIAL account and sample Coimbatore reports."""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import suppress

from civicconnect.api.auth import ensure_default_admin
from civicconnect.db import database, models, schemas
from civicconnect.db.repositories import reports as report_repo
from civicconnect.db.repositories import users as user_repo
from civicconnect.utils.config import get_settings
from civicconnect.utils.roles import (
    ROLE_OFFICIAL,
    STATUS_IN_PROGRESS,
    STATUS_OPEN,
    STATUS_REJECTED,
    STATUS_RESOLVED,
)
from civicconnect.utils.security import hash_password


logger = logging.getLogger("civicconnect.scripts.seed_demo_data")

# Resolved lazily so callers that rebind the sessionmaker are respected.
SessionLocal = lambda: database.SessionLocal()

OFFICIAL_ACCOUNT = {
    "email": "official@civic.com",
    "password": "official123",
    "phone_number": "+919876543210",
    "display_name": "Ward Official",
}

SAMPLE_REPORTS = [
    {
        "title": "Pothole on Avinashi Road",
        "description": "Large pothole near Fun Republic Mall causing traffic slowdowns.",
        "category": "Pothole",
        "location": "Avinashi Road, Coimbatore",
        "latitude": 11.0247,
        "longitude": 77.0108,
        "ward_id": 1,
        "status": STATUS_OPEN,
        "image_url": "https://images.unsplash.com/photo-1515162816999-a0c47dc192f7?auto=format&fit=crop&q=80&w=400",
    },
    {
        "title": "Garbage Pileup in Gandhipuram",
        "description": "Uncollected garbage at the bus stand entrance for 3 days.",
        "category": "Garbage",
        "location": "Gandhipuram, Coimbatore",
        "latitude": 11.0168,
        "longitude": 76.9558,
        "ward_id": 2,
        "status": STATUS_IN_PROGRESS,
        "image_url": "https://images.unsplash.com/photo-1530587191325-3db32d826c18?auto=format&fit=crop&q=80&w=400",
    },
    {
        "title": "Broken Street Light in RS Puram",
        "description": "Street lights not working on DB Road, making it unsafe at night.",
        "category": "Street Light",
        "location": "RS Puram, Coimbatore",
        "latitude": 11.0067,
        "longitude": 76.9507,
        "ward_id": 3,
        "status": STATUS_RESOLVED,
        "image_url": "https://images.unsplash.com/photo-1549144837-de94e19ed7fb?auto=format&fit=crop&q=80&w=400",
    },
    {
        "title": "Water Leakage in Saravanampatti",
        "description": "Main pipe leakage near KCT Tech Park entrance.",
        "category": "Water Leak",
        "location": "Saravanampatti, Coimbatore",
        "latitude": 11.0797,
        "longitude": 76.9997,
        "ward_id": 1,
        "status": STATUS_OPEN,
        "image_url": "https://images.unsplash.com/photo-1528643806124-7f28ed55f41c?auto=format&fit=crop&q=80&w=400",
    },
    {
        "title": "Damaged Park Bench",
        "description": "Broken benches in VOC Park need repair.",
        "category": "Community",
        "location": "VOC Park, Coimbatore",
        "latitude": 11.0016,
        "longitude": 76.9696,
        "ward_id": 2,
        "status": STATUS_REJECTED,
        "image_url": "https://images.unsplash.com/photo-1563805042-7684c019e1cb?auto=format&fit=crop&q=80&w=400",
    },
]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed demo accounts and reports")
    parser.add_argument(
        "--skip-reports",
        action="store_true",
        help="Only create the official account",
    )
    return parser.parse_args(argv)


def ensure_official(session) -> models.User:
    existing = user_repo.get_user_by_email(session, OFFICIAL_ACCOUNT["email"])
    if existing:
        logger.info("Official user already exists: %s", existing.email)
        return existing
    official = user_repo.create_user(
        session,
        email=OFFICIAL_ACCOUNT["email"],
        phone_number=OFFICIAL_ACCOUNT["phone_number"],
        password_hash=hash_password(OFFICIAL_ACCOUNT["password"]),
        role=ROLE_OFFICIAL,
        display_name=OFFICIAL_ACCOUNT["display_name"],
    )
    print(f"Official user created: {OFFICIAL_ACCOUNT['email']} / {OFFICIAL_ACCOUNT['password']}")
    return official


def seed_reports(session, reporter: models.User) -> int:
    """Insert sample reports whose titles are not present yet; returns the count added."""
    existing_titles = {
        title for (title,) in session.query(models.Report.title).filter(models.Report.title.isnot(None)).all()
    }
    added = 0
    for sample in SAMPLE_REPORTS:
        if sample["title"] in existing_titles:
            continue
        data = dict(sample)
        status = data.pop("status")
        report = report_repo.create_report(
            session,
            user_id=reporter.user_id,
            payload=schemas.ReportCreate(**data),
        )
        if status != STATUS_OPEN:
            report_repo.update_status(session, report, status)
        added += 1
    return added


def seed(skip_reports: bool = False) -> int:
    session = SessionLocal()
    try:
        ensure_official(session)
        if skip_reports:
            return 0
        reporter = ensure_default_admin(session) or user_repo.get_user_by_email(
            session, get_settings().default_admin_email
        )
        added = seed_reports(session, reporter)
        print(f"Inserted {added} sample reports.")
        logger.info("Demo seed finished: reports_added=%s", added)
        return 0
    finally:
        with suppress(Exception):
            session.close()


def main(argv: list[str] | None = None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    return seed(skip_reports=args.skip_reports)


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
