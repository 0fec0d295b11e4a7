# src/sensei/dom/element_analyzer.py
import logging
from typing import Dict, List, Tuple

from bs4 import BeautifulSoup

from sensei.model import ElementAnalysisResult, ElementIssue, Section, SectionAnalysis
from .builder import parse_markup
from .core import ElementFinding
from .registry import ElementRegistry
from .sections import SectionLocator

logger = logging.getLogger(__name__)


class ElementEngine:
    """
    Element-level audit engine.

    Runs every registered element definition over a parsed page and returns
    the raw findings together with the number of inspected elements.
    """

    def __init__(self):
        """Initializes the engine by discovering and loading all element definitions."""
        ElementRegistry.discover()
        self.definitions = ElementRegistry.get_definitions()

    def run_audit(self, soup: BeautifulSoup) -> Tuple[int, List[ElementFinding]]:
        """
        Applies all element rules to the page.

        Args:
            soup (BeautifulSoup): The parsed page.

        Returns:
            Tuple[int, List[ElementFinding]]: Inspected element count and the
            findings in reporting order.
        """
        locator = SectionLocator(soup)
        inspected = 0
        findings: List[ElementFinding] = []

        for defn in self.definitions:
            tags = defn.collect(soup)
            inspected += defn.element_count(tags)

            for rule in defn.audit_rules:
                findings.extend(rule(tags, locator))

        return inspected, findings


def tally_sections(findings: List[ElementFinding]) -> List[SectionAnalysis]:
    """
    Folds findings into the six section records.

    Every section starts at 100; each finding subtracts its penalty from the
    section it is attributed to and joins that section's issue list. Scores
    are clamped to [0, 100] only after all penalties are applied.
    """
    scores: Dict[Section, int] = {section: 100 for section in Section}
    issues: Dict[Section, List[ElementIssue]] = {section: [] for section in Section}

    for issue, penalty in findings:
        scores[issue.section] -= penalty
        issues[issue.section].append(issue)

    return [
        SectionAnalysis(
            name=section.label,
            score=max(0, min(100, scores[section])),
            issues=issues[section],
            importance=section.importance,
        )
        for section in Section
    ]


def analyze_elements(html: str, url: str) -> ElementAnalysisResult:
    """
    Analyzes a page element by element and scores its sections.

    Never raises for string input; unparsable markup is analysed as an empty page.

    Args:
        html (str): Raw page markup.
        url (str): Page URL, echoed in the result.

    Returns:
        ElementAnalysisResult: Flat issue list plus the six section records.
    """
    soup = parse_markup(html)
    inspected, findings = ElementEngine().run_audit(soup)

    logger.debug("Element analysis of %s: %d elements, %d issues", url, inspected, len(findings))

    return ElementAnalysisResult(
        url=url,
        total_elements=inspected,
        analyzed_elements=inspected,
        element_issues=[issue for issue, _ in findings],
        section_analysis=tally_sections(findings),
    )
