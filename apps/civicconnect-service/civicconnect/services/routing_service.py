"""Static category -> department routing.

The result is reported to the log and to callers; it is never written to the
report. Administrators persist a department explicitly through the
assign-department endpoint.
"""
from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from civicconnect.db import models

logger = logging.getLogger(__name__)

DEFAULT_DEPARTMENT = "General Administration"

CATEGORY_DEPARTMENT_MAP: Dict[str, str] = {
    "Pothole": "Roads & Bridges",
    "Garbage": "Sanitation",
    "Street Light": "Electrical",
    "Water Leak": "Water Supply",
}


class RoutingService:
    def __init__(self, mapping: Optional[Mapping[str, str]] = None, default: str = DEFAULT_DEPARTMENT) -> None:
        source = mapping if mapping is not None else CATEGORY_DEPARTMENT_MAP
        self._mapping = {self._key(k): v for k, v in source.items()}
        self.default = default

    @staticmethod
    def _key(category: Optional[str]) -> str:
        return (category or "").strip().lower()

    def department_for(self, category: Optional[str]) -> str:
        return self._mapping.get(self._key(category), self.default)

    def route_report(self, report: models.Report) -> str:
        department = self.department_for(report.category)
        logger.info(
            "routing: report %s (%s) assigned to %s",
            report.report_id,
            report.category,
            department,
        )
        return department
