"""Image validation stub used when a report is submitted.

There is no model behind this: it waits a configurable delay and returns a
random label with a plausible confidence so the rest of the pipeline has a
realistic shape to work with.
"""
from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Optional

from civicconnect.utils.config import get_settings

logger = logging.getLogger(__name__)

LABEL_POTHOLE = "Pothole"
LABEL_GARBAGE = "Garbage"

_POTHOLE_PROBABILITY = 0.7
_MIN_CONFIDENCE = 0.85
_CONFIDENCE_SPREAD = 0.1


@dataclass
class ValidationResult:
    valid: bool
    category: str
    confidence: float


class AIValidationService:
    def __init__(self, *, delay_ms: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.delay_ms = get_settings().ai_validation_delay_ms if delay_ms is None else max(0, delay_ms)
        self._rng = rng or random.Random()

    async def analyze_image(self, image_url: str) -> ValidationResult:
        # Avoid logging whole data URLs
        logger.info("ai_validation: analyzing image %s", (image_url or "")[:80])
        if self.delay_ms:
            await asyncio.sleep(self.delay_ms / 1000.0)
        is_pothole = self._rng.random() < _POTHOLE_PROBABILITY
        return ValidationResult(
            valid=True,
            category=LABEL_POTHOLE if is_pothole else LABEL_GARBAGE,
            confidence=_MIN_CONFIDENCE + self._rng.random() * _CONFIDENCE_SPREAD,
        )


_validation_service: Optional[AIValidationService] = None


def get_ai_validation_service() -> AIValidationService:
    global _validation_service
    if _validation_service is None:
        _validation_service = AIValidationService()
    return _validation_service


def reset_ai_validation_service_for_tests() -> None:  # pragma: no cover - used in tests
    global _validation_service
    _validation_service = None
