import asyncio
import random

from civicconnect.services.ai_validation_service import (
    AIValidationService,
    LABEL_GARBAGE,
    LABEL_POTHOLE,
    get_ai_validation_service,
    reset_ai_validation_service_for_tests,
)


class _FixedRandom(random.Random):
    def __init__(self, values):
        super().__init__()
        self._values = list(values)

    def random(self):
        return self._values.pop(0)


def test_low_draw_labels_pothole():
    service = AIValidationService(delay_ms=0, rng=_FixedRandom([0.1, 0.5]))
    result = asyncio.run(service.analyze_image("https://example.com/a.jpg"))
    assert result.valid is True
    assert result.category == LABEL_POTHOLE
    assert result.confidence == 0.85 + 0.5 * 0.1


def test_high_draw_labels_garbage():
    service = AIValidationService(delay_ms=0, rng=_FixedRandom([0.7, 0.0]))
    result = asyncio.run(service.analyze_image("data:image/png;base64,AAAA"))
    assert result.category == LABEL_GARBAGE
    assert result.confidence == 0.85


def test_confidence_stays_in_range():
    service = AIValidationService(delay_ms=0, rng=random.Random(1234))
    for _ in range(50):
        result = asyncio.run(service.analyze_image("x"))
        assert 0.85 <= result.confidence < 0.95
        assert result.category in (LABEL_POTHOLE, LABEL_GARBAGE)


def test_singleton_reads_delay_from_settings():
    reset_ai_validation_service_for_tests()
    service = get_ai_validation_service()
    assert service is get_ai_validation_service()
    assert service.delay_ms == 0


def test_negative_delay_is_clamped():
    assert AIValidationService(delay_ms=-10).delay_ms == 0
