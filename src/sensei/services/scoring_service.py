# src/sensei/services/scoring_service.py
import logging
import math
import random
from typing import Iterable, Optional

from sensei.model import Issue, Severity, Subscores

logger = logging.getLogger(__name__)

SEO_PENALTIES = {Severity.HIGH: 10, Severity.MEDIUM: 5, Severity.LOW: 2}
ACCESSIBILITY_PENALTIES = {Severity.HIGH: 15, Severity.MEDIUM: 8, Severity.LOW: 3}

ACCESSIBILITY_KEYWORDS = (
    "alt text", "aria", "contrast", "keyboard", "screen reader", "focus", "accessibility"
)

# Score reported when no accessibility-related issue was found; the
# document checks are not a full accessibility audit.
UNAUDITED_ACCESSIBILITY_SCORE = 90


def clamp_score(score: float) -> int:
    return int(max(0, min(100, score)))


def round_half_up(value: float) -> int:
    """Rounds .5 away from zero for non-negative scores (round() would go to even)."""
    return int(math.floor(value + 0.5))


def is_accessibility_issue(issue: Issue) -> bool:
    title = issue.title.lower()
    return any(keyword in title for keyword in ACCESSIBILITY_KEYWORDS)


def seo_score(issues: Iterable[Issue]) -> int:
    """100 minus 10/5/2 per high/medium/low issue, clamped to [0, 100]."""
    score = 100
    for issue in issues:
        score -= SEO_PENALTIES[issue.severity]
    return clamp_score(score)


def accessibility_score(issues: Iterable[Issue]) -> int:
    """
    100 minus 15/8/3 per high/medium/low accessibility-related issue,
    clamped to [0, 100]. An untouched 100 is reported as 90.
    """
    score = 100
    for issue in issues:
        if is_accessibility_issue(issue):
            score -= ACCESSIBILITY_PENALTIES[issue.severity]

    if score == 100:
        score = UNAUDITED_ACCESSIBILITY_SCORE

    return clamp_score(score)


def overall_score(subscores: Subscores) -> int:
    """Rounded mean of the four subscores."""
    total = (
        subscores.performance + subscores.seo
        + subscores.accessibility + subscores.best_practices
    )
    return round_half_up(total / 4)


class ScoreEstimator:
    """
    Estimates the dimensions the rule-based analyzers cannot measure
    (performance and best practices) for sources without a live page.

    Randomness is drawn from the injected generator only, so tests can pin it.
    """

    def __init__(self, rng: Optional[random.Random] = None, file_performance: int = 80):
        self.rng = rng or random.Random()
        self.file_performance = file_performance

    def estimate(self, source_type: str):
        """Returns (performance, best_practices) as floats for the given source type."""
        if source_type == "github":
            return 75 + self.rng.random() * 15, 60 + self.rng.random() * 20
        return float(self.file_performance), 65 + self.rng.random() * 20

    def subscores(self, issues: Iterable[Issue], source_type: str) -> Subscores:
        issues = list(issues)
        performance, best_practices = self.estimate(source_type)
        result = Subscores(
            performance=round_half_up(performance),
            seo=seo_score(issues),
            accessibility=accessibility_score(issues),
            best_practices=round_half_up(best_practices),
        )
        logger.debug("Subscores for %s source: %s", source_type, result)
        return result
