from typing import List

from bs4 import Tag

from sensei.model import ElementIssue, Section, Severity
from ..core import ElementDefinition, ElementFinding, audit_spec
from ..sections import SectionLocator

META_DESC_SELECTOR = 'head > meta[name="description"]'


def _meta_desc_finding(issue: str, severity: Severity, recommendation: str, penalty: int) -> ElementFinding:
    return (
        ElementIssue(
            selector=META_DESC_SELECTOR,
            element="Meta Description",
            issue=issue,
            severity=severity,
            recommendation=recommendation,
            section=Section.HEADER,
        ),
        penalty,
    )


# --- AUDIT RULES ---


@audit_spec(codes=["MISSING_META_DESC", "META_DESC_TOO_SHORT", "META_DESC_TOO_LONG"])
def check_meta_desc(tags: List[Tag], locator: SectionLocator) -> List[ElementFinding]:
    """Validates the presence and length of the meta description content."""
    res = []
    content = (tags[0].get('content') or '') if tags else ''

    if not content:
        res.append(_meta_desc_finding(
            "Missing meta description", Severity.HIGH,
            "Add a compelling meta description between 120-158 characters", 25
        ))
    elif len(content) < 70:
        res.append(_meta_desc_finding(
            "Meta description is too short", Severity.MEDIUM,
            "Create a more compelling meta description between 120-158 characters", 15
        ))
    elif len(content) > 160:
        res.append(_meta_desc_finding(
            "Meta description is too long", Severity.LOW,
            "Keep meta description under 158 characters to avoid truncation", 10
        ))
    return res


# --- ELEMENT DEFINITION ---
DEFINITION = ElementDefinition(
    category="meta_description",
    selector='meta[name="description"]',
    position=20,
    audit_rules=[check_meta_desc],
    single=True
)
