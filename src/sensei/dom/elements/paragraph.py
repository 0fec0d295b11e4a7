from typing import List

from bs4 import Tag

from sensei.model import ElementIssue, Severity
from ..core import ElementDefinition, ElementFinding, audit_spec
from ..sections import SectionLocator, build_selector

MAX_PARAGRAPH_LENGTH = 300


@audit_spec(codes=["LONG_PARAGRAPH"])
def check_paragraph_length(tags: List[Tag], locator: SectionLocator) -> List[ElementFinding]:
    res = []
    for p in tags:
        if len(p.get_text()) <= MAX_PARAGRAPH_LENGTH:
            continue
        res.append((
            ElementIssue(
                selector=build_selector(p),
                element="Paragraph",
                issue=f"Long paragraph (over {MAX_PARAGRAPH_LENGTH} characters)",
                severity=Severity.LOW,
                recommendation="Break long paragraphs into smaller chunks for better readability",
                section=locator.locate(p),
            ),
            5,
        ))
    return res


DEFINITION = ElementDefinition(
    category="paragraph",
    selector="p",
    position=60,
    audit_rules=[check_paragraph_length]
)
