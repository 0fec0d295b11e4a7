# src/sensei/services/placeholder_service.py
import logging
import math
import random
from typing import Optional

from sensei.model import Issue, SeoReport, Severity, Subscores

logger = logging.getLogger(__name__)

COMMON_ISSUES = [
    Issue(
        id=1,
        severity=Severity.HIGH,
        title="Missing meta description",
        description="Your page doesn't have a meta description. Meta descriptions are important for SEO "
                    "as they appear in search results.",
        how_to_fix="Add a meta description tag in the <head> section of your HTML that accurately "
                   "summarizes the page content.",
    ),
    Issue(
        id=2,
        severity=Severity.MEDIUM,
        title="Images missing alt text",
        description="Some images on your page are missing alt text, which is important for accessibility and SEO.",
        how_to_fix="Add descriptive alt attributes to all <img> tags that describe the image content.",
    ),
    Issue(
        id=3,
        severity=Severity.LOW,
        title="Heading hierarchy not ideal",
        description="Your page skips heading levels, which isn't ideal for document structure.",
        how_to_fix="Ensure your headings follow a proper hierarchy starting with H1, then H2, etc.",
    ),
    Issue(
        id=4,
        severity=Severity.HIGH,
        title="Slow page load speed",
        description="Your page takes too long to load, which affects user experience and SEO rankings.",
        how_to_fix="Optimize images, minimize CSS/JS, and consider using a CDN to improve load times.",
    ),
    Issue(
        id=5,
        severity=Severity.MEDIUM,
        title="Mobile responsiveness issues",
        description="The page layout doesn't adapt well to mobile devices.",
        how_to_fix="Use responsive design principles and media queries to ensure the page works well "
                   "on all screen sizes.",
    ),
]

GENERIC_SUGGESTIONS = [
    "Optimize page load speed by compressing images and using lazy loading",
    "Add structured data markup to enhance your rich snippets in search results",
    "Improve mobile responsiveness with better viewport configuration",
    "Enhance internal linking structure to distribute page authority",
]

# (low, high) offset ranges applied to the overall score per subscore
SUBSCORE_JITTER = {
    "performance": (-10, 10),
    "seo": (-5, 10),
    "accessibility": (-15, -5),
    "best_practices": (-5, 10),
}


def _jitter(overall: int, bounds, rng: random.Random) -> int:
    low, high = bounds
    value = math.floor(overall + rng.uniform(low, high))
    return max(0, min(100, value))


def generate_placeholder_report(url: str, type: str, rng: Optional[random.Random] = None) -> SeoReport:
    """
    Builds a randomized stand-in report for audits that could not be completed.

    The report is flagged with is_placeholder so callers can tell it apart from
    a real analysis.
    """
    rng = rng or random.Random()

    overall = rng.randint(60, 95)
    subscores = Subscores(**{
        name: _jitter(overall, bounds, rng) for name, bounds in SUBSCORE_JITTER.items()
    })

    issues = rng.sample(COMMON_ISSUES, rng.randint(1, 3))

    logger.info("Generated placeholder report for %s (%s)", url, type)

    return SeoReport(
        url=url,
        type=type,
        overall=overall,
        subscores=subscores,
        issues=issues,
        suggestions=list(GENERIC_SUGGESTIONS),
        is_placeholder=True,
    )
