from typing import List

from bs4 import Tag

from sensei.model import ElementIssue, Severity
from ..core import ElementDefinition, ElementFinding, audit_spec
from ..sections import SectionLocator, build_selector


# --- RULES ---

@audit_spec(codes=["MISSING_ALT"])
def check_alt_text(tags: List[Tag], locator: SectionLocator) -> List[ElementFinding]:
    res = []
    for img in tags:
        # alt="" marks a decorative image; only a missing attribute is flagged
        if 'alt' in img.attrs:
            continue
        res.append((
            ElementIssue(
                selector=build_selector(img),
                element="Image",
                issue="Image missing alt text",
                severity=Severity.MEDIUM,
                recommendation="Add descriptive alt text to the image that includes relevant keywords",
                section=locator.locate(img),
            ),
            10,
        ))
    return res


# --- DEFINITION ---
DEFINITION = ElementDefinition(
    category="image",
    selector="img",
    position=30,
    audit_rules=[check_alt_text]
)
