"""
Build information endpoint for deployment monitoring.
"""
from __future__ import annotations

import os

from fastapi import APIRouter

router = APIRouter(tags=["support"])  # keep paths stable (no prefix)

SERVICE_NAME = "civicconnect-service"


@router.get("/build-info")
def get_build_info():
    """Return build and deployment information for the running service."""
    build_sha = os.getenv("BUILD_SHA")
    build_timestamp = os.getenv("BUILD_TIMESTAMP")
    image_tag = os.getenv("IMAGE_TAG")
    version = os.getenv("VERSION", "unknown")

    return {
        "build_sha": build_sha or None,
        "build_timestamp": build_timestamp or None,
        "image_tag": image_tag or None,
        "service_name": SERVICE_NAME,
        "version": version,
    }
