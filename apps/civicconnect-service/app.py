"""
App assembly entry point.

Re-exports the FastAPI `app` from `civicconnect.api.main` so servers can be
started with ``uvicorn app:app``.
"""

from civicconnect.api.main import app  # noqa: F401
