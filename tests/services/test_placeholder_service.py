# tests/services/test_placeholder_service.py
import random

import pytest

from sensei.services.placeholder_service import (
    COMMON_ISSUES, GENERIC_SUGGESTIONS, generate_placeholder_report
)


@pytest.mark.parametrize("seed", range(20))
def test_placeholder_report_bounds(seed):
    report = generate_placeholder_report("https://example.com", "url", random.Random(seed))

    assert report.is_placeholder
    assert 60 <= report.overall <= 95
    for value in report.subscores.model_dump().values():
        assert 0 <= value <= 100
    assert 1 <= len(report.issues) <= 3
    assert all(issue in COMMON_ISSUES for issue in report.issues)
    assert len({issue.id for issue in report.issues}) == len(report.issues)
    assert report.suggestions == GENERIC_SUGGESTIONS


def test_placeholder_is_reproducible():
    first = generate_placeholder_report("u", "file", random.Random(5))
    second = generate_placeholder_report("u", "file", random.Random(5))
    assert first.model_dump(exclude={"timestamp"}) == second.model_dump(exclude={"timestamp"})


def test_placeholder_serializes_camel_case():
    data = generate_placeholder_report("u", "file", random.Random(1)).model_dump(mode="json", by_alias=True)
    assert data["isPlaceholder"] is True
    assert "bestPractices" in data["subscores"]
    assert "howToFix" in data["issues"][0]
