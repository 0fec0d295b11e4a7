# src/sensei/dom/core.py
from typing import Callable, List, Optional, Set, Tuple

from bs4 import BeautifulSoup, Tag
from pydantic import BaseModel, ConfigDict

from sensei.model import ElementIssue, Severity


class IssueDraft(BaseModel):
    """
    A document-level finding before it is numbered.
    Document rules return drafts; the analyzer assigns sequential IDs.
    """
    model_config = ConfigDict(frozen=True)

    severity: Severity
    title: str
    description: str
    how_to_fix: str


def audit_spec(codes: List[str]):
    """
    Decorator to declare which issue texts a specific audit rule function can return.
    Facilitates auto-discovery by the ElementRegistry.
    """
    def decorator(func):
        func.defined_codes = codes
        return func
    return decorator


# Type alias for element findings: (ElementIssue, score penalty)
ElementFinding = Tuple[ElementIssue, int]

# Element rules receive every matched tag of their category in document order,
# plus the SectionLocator of the page.
ElementRule = Callable[[List[Tag], "SectionLocator"], List[ElementFinding]]  # noqa: F821


class ElementDefinition:
    """
    Configuration object binding an element category to its selector and rules.

    When ``single`` is set, only the first match is handed to the rules and the
    category counts as exactly one inspected element, whether or not it exists.
    """

    def __init__(
            self,
            category: str,
            selector: str,
            position: int,
            audit_rules: Optional[List[ElementRule]] = None,
            single: bool = False,
            possible_codes: Optional[List[str]] = None
    ):
        self.category = category
        self.selector = selector
        self.position = position
        self.audit_rules = audit_rules or []
        self.single = single

        # --- Auto-Discovery of Issue Codes ---
        final_codes: Set[str] = set(possible_codes or [])

        for rule in self.audit_rules:
            if hasattr(rule, 'defined_codes'):
                final_codes.update(rule.defined_codes)

        self.codes = sorted(list(final_codes))

    def collect(self, soup: BeautifulSoup) -> List[Tag]:
        """Returns the tags this definition inspects, in document order."""
        if self.single:
            tag = soup.select_one(self.selector)
            return [tag] if tag is not None else []
        return soup.select(self.selector)

    def element_count(self, tags: List[Tag]) -> int:
        return 1 if self.single else len(tags)
