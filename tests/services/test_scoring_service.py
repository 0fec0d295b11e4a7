# tests/services/test_scoring_service.py
import random

import pytest

from sensei.model import Issue, Severity, Subscores
from sensei.services.scoring_service import (
    ScoreEstimator, accessibility_score, clamp_score, overall_score, round_half_up, seo_score
)


def make_issue(severity: Severity, title: str = "Something") -> Issue:
    return Issue(id=1, severity=severity, title=title, description="d", how_to_fix="f")


def test_seo_score_penalties():
    issues = [make_issue(Severity.HIGH), make_issue(Severity.MEDIUM), make_issue(Severity.LOW)]
    assert seo_score(issues) == 100 - 10 - 5 - 2
    assert seo_score([]) == 100


def test_seo_score_clamped():
    assert seo_score([make_issue(Severity.HIGH)] * 20) == 0


def test_accessibility_only_counts_related_issues():
    issues = [
        make_issue(Severity.MEDIUM, "Images missing alt text"),
        make_issue(Severity.HIGH, "Missing page title"),
        make_issue(Severity.LOW, "Poor Contrast ratio"),
    ]
    assert accessibility_score(issues) == 100 - 8 - 3


def test_accessibility_untouched_score_becomes_ninety():
    assert accessibility_score([]) == 90
    assert accessibility_score([make_issue(Severity.HIGH, "Missing viewport meta tag")]) == 90


def test_accessibility_clamped():
    assert accessibility_score([make_issue(Severity.HIGH, "aria label missing")] * 10) == 0


def test_overall_is_rounded_mean():
    assert overall_score(Subscores(performance=80, seo=83, accessibility=90, best_practices=75)) == 82
    # 82.5 rounds up
    assert overall_score(Subscores(performance=80, seo=85, accessibility=90, best_practices=75)) == 83


@pytest.mark.parametrize("value, expected", [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (99.5, 100)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_clamp_score():
    assert clamp_score(-5) == 0
    assert clamp_score(150) == 100
    assert clamp_score(42) == 42


def test_estimator_file_source_uses_configured_performance():
    estimator = ScoreEstimator(rng=random.Random(1), file_performance=70)
    scores = estimator.subscores([], "file")

    assert scores.performance == 70
    assert 65 <= scores.best_practices <= 85
    assert scores.seo == 100
    assert scores.accessibility == 90


def test_estimator_github_ranges():
    estimator = ScoreEstimator(rng=random.Random(7))
    for _ in range(50):
        performance, best_practices = estimator.estimate("github")
        assert 75 <= performance <= 90
        assert 60 <= best_practices <= 80


def test_estimator_is_reproducible_with_seeded_rng():
    first = ScoreEstimator(rng=random.Random(3)).subscores([], "html")
    second = ScoreEstimator(rng=random.Random(3)).subscores([], "html")
    assert first == second
