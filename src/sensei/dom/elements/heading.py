from typing import List

from bs4 import Tag

from sensei.model import ElementIssue, Section, Severity
from ..builder import HEADING_SELECTOR
from ..core import ElementDefinition, ElementFinding, audit_spec
from ..sections import SectionLocator, build_selector


def heading_level(tag: Tag) -> int:
    """
    Determines the hierarchy level of a heading tag (e.g., h1 -> 1).
    """
    try:
        return int(tag.name[1])
    except (ValueError, IndexError, TypeError):
        return 0


# --- AUDIT RULES ---


@audit_spec(codes=["MULTIPLE_H1", "SKIPPED_HEADING_LEVEL"])
def check_heading_sequence(tags: List[Tag], locator: SectionLocator) -> List[ElementFinding]:
    """
    Rule: one H1 per page, and no heading may jump more than one level below
    the heading right before it.

    The comparison is purely sequential in document order, so a sidebar H3
    following a header H1 counts as a skip.
    """
    results = []
    h1_count = 0
    previous_level = 0

    for tag in tags:
        level = heading_level(tag)

        if level == 1:
            h1_count += 1
            if h1_count > 1:
                results.append((
                    ElementIssue(
                        selector=build_selector(tag),
                        element="H1 Heading",
                        issue="Multiple H1 headings",
                        severity=Severity.MEDIUM,
                        recommendation="Use only one H1 heading as the main title of your page",
                        section=locator.locate(tag),
                    ),
                    15,
                ))

        if previous_level > 0 and level > previous_level + 1:
            results.append((
                ElementIssue(
                    selector=build_selector(tag),
                    element=f"H{level} Heading",
                    issue=f"Skipped heading level (H{previous_level} to H{level})",
                    severity=Severity.LOW,
                    recommendation="Maintain proper heading hierarchy (H1 → H2 → H3) to improve page structure",
                    section=locator.locate(tag),
                ),
                5,
            ))

        previous_level = level

    return results


@audit_spec(codes=["MISSING_H1"])
def check_h1_present(tags: List[Tag], locator: SectionLocator) -> List[ElementFinding]:
    """Rule: the page must contain at least one H1, wherever it sits."""
    if any(heading_level(tag) == 1 for tag in tags):
        return []

    return [(
        ElementIssue(
            selector="body",
            element="H1 Heading",
            issue="Missing H1 heading",
            severity=Severity.HIGH,
            recommendation="Add an H1 heading as the main title of your page",
            section=Section.CONTENT,
        ),
        20,
    )]


# --- ELEMENT DEFINITION ---

DEFINITION = ElementDefinition(
    category="heading",
    selector=HEADING_SELECTOR,
    position=40,
    audit_rules=[check_heading_sequence, check_h1_present]
)
