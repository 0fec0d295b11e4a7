from typing import List

from bs4 import Tag

from sensei.model import ElementIssue, Severity
from ..core import ElementDefinition, ElementFinding, audit_spec
from ..sections import SectionLocator, build_selector

GENERIC_LINK_TEXTS = {"click here", "read more"}


def is_descriptive(text: str) -> bool:
    """Link text says where the link goes: non-blank and not a generic call to action."""
    stripped = text.strip()
    return bool(stripped) and stripped.lower() not in GENERIC_LINK_TEXTS


# --- AUDIT RULES ---


@audit_spec(codes=["NON_DESCRIPTIVE_LINK_TEXT", "EMPTY_LINK_TEXT"])
def check_link_text(tags: List[Tag], locator: SectionLocator) -> List[ElementFinding]:
    """Flags anchors whose text is empty, blank, or a generic phrase."""
    res = []
    for link in tags:
        text = link.get_text()
        if is_descriptive(text):
            continue

        res.append((
            ElementIssue(
                selector=build_selector(link),
                element="Link",
                issue="Non-descriptive link text" if text else "Link missing text content",
                severity=Severity.MEDIUM,
                recommendation="Use descriptive link text that explains where the link will take users",
                section=locator.locate(link),
            ),
            10,
        ))
    return res


# --- ELEMENT DEFINITION ---

DEFINITION = ElementDefinition(
    category="link",
    selector="a[href]",
    position=50,
    audit_rules=[check_link_text]
)
