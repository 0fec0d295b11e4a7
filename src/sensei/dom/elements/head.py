from typing import List

from bs4 import Tag

from sensei.model import ElementIssue, Section, Severity
from ..core import ElementDefinition, ElementFinding, audit_spec
from ..sections import SectionLocator

TITLE_SELECTOR = 'head > title'


def _title_finding(issue: str, severity: Severity, recommendation: str, penalty: int) -> ElementFinding:
    return (
        ElementIssue(
            selector=TITLE_SELECTOR,
            element="Title",
            issue=issue,
            severity=severity,
            recommendation=recommendation,
            section=Section.HEADER,
        ),
        penalty,
    )


# --- AUDIT RULES ---


@audit_spec(codes=["MISSING_TITLE", "TITLE_TOO_SHORT", "TITLE_TOO_LONG"])
def check_title(tags: List[Tag], locator: SectionLocator) -> List[ElementFinding]:
    """Validates the presence and length of the <title> tag."""
    res = []
    text = tags[0].get_text() if tags else ""

    if not text:
        res.append(_title_finding(
            "Missing page title", Severity.HIGH,
            "Add a descriptive title tag that includes primary keywords", 25
        ))
    elif len(text) < 20:
        res.append(_title_finding(
            "Title is too short", Severity.MEDIUM,
            "Create a more descriptive title between 50-60 characters that includes key terms", 15
        ))
    elif len(text) > 60:
        res.append(_title_finding(
            "Title is too long", Severity.LOW,
            "Keep your title under 60 characters to avoid truncation in search results", 10
        ))
    return res


# --- ELEMENT DEFINITION ---
DEFINITION = ElementDefinition(
    category="title",
    selector="title",
    position=10,
    audit_rules=[check_title],
    single=True
)
