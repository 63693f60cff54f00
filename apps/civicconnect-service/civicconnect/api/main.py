"""
FastAPI app assembly: logging, middleware, startup tasks and router wiring.
"""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)


from civicconnect.db import database
from civicconnect.api.analytics import router as analytics_router
from civicconnect.api.audits import router as audits_router
from civicconnect.api.auth import ensure_default_admin, router as auth_router
from civicconnect.api.reports import router as reports_router
from civicconnect.api.support import SERVICE_NAME, router as support_router
from civicconnect.api.users import router as users_router
from civicconnect.utils.config import get_settings


def _should_create_schema() -> bool:
    configured = get_settings().auto_create_schema
    if configured is None:
        return database.is_sqlite()
    return configured


def run_startup_tasks() -> None:
    """Prepare the database and warn about insecure defaults.

    PostgreSQL deployments are migrated with Alembic; SQLite development
    databases are created from model metadata unless AUTO_CREATE_SCHEMA says otherwise.
    """
    settings = get_settings()
    if settings.uses_default_jwt_secret:
        logger.warning("JWT_SECRET is not set; tokens are signed with the built-in development secret")

    if _should_create_schema():
        logger.info("Creating database schema from models (dialect=%s)", database.engine.dialect.name)
        database.create_schema()

    if settings.seed_default_admin:
        db = database.SessionLocal()
        try:
            ensure_default_admin(db)
        finally:
            db.close()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    run_startup_tasks()
    yield


app = FastAPI(
    title="CivicConnect Service",
    description="API for reporting municipal issues and tracking their resolution.",
    version="1.0.0",
    lifespan=lifespan,
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(reports_router)
app.include_router(analytics_router)
app.include_router(audits_router)
app.include_router(support_router)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": SERVICE_NAME}
