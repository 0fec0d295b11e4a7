# src/sensei/dom/sections.py
import logging
from typing import Dict, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from sensei.model import Section

logger = logging.getLogger(__name__)

# Landmark queries per region, tried in order until one matches.
# Dict order is also the attribution order: the first containing region wins.
LANDMARK_SELECTORS: Dict[Section, Tuple[str, ...]] = {
    Section.HEADER: ('header', 'div[role="banner"]', '.header'),
    Section.NAVIGATION: ('nav', 'div[role="navigation"]'),
    Section.CONTENT: ('main', 'div[role="main"]', '.content'),
    Section.SIDEBAR: ('aside', '.sidebar'),
    Section.FOOTER: ('footer', 'div[role="contentinfo"]', '.footer'),
}


def resolve_landmark(soup: BeautifulSoup, selectors: Tuple[str, ...]) -> Optional[Tag]:
    """Returns the first element matching the first selector that matches anything."""
    for selector in selectors:
        tag = soup.select_one(selector)
        if tag is not None:
            return tag
    return None


class SectionLocator:
    """
    Resolves the five page landmarks once per document and attributes
    elements to the first landmark that contains them.
    """

    def __init__(self, soup: BeautifulSoup):
        self.landmarks: Dict[Section, Optional[Tag]] = {
            section: resolve_landmark(soup, selectors)
            for section, selectors in LANDMARK_SELECTORS.items()
        }
        logger.debug(
            "Resolved landmarks: %s",
            [s.value for s, tag in self.landmarks.items() if tag is not None]
        )

    def locate(self, tag: Tag) -> Section:
        """
        Returns the section whose landmark is the tag itself or one of its ancestors.
        Containment is tested by identity; bs4 Tag equality is structural.
        """
        lineage = {id(tag)}
        lineage.update(id(parent) for parent in tag.parents)

        for section, landmark in self.landmarks.items():
            if landmark is not None and id(landmark) in lineage:
                return section
        return Section.GENERAL


def build_selector(tag: Tag) -> str:
    """
    Builds a short CSS locator for an element: the tag name followed by its
    id, or by its classes when it has no id.
    """
    selector = tag.name.lower()
    element_id = tag.get('id')
    if element_id:
        return f"{selector}#{element_id}"

    classes = tag.get('class') or []
    if isinstance(classes, str):
        classes = classes.split()
    classes = [c for c in classes if c]
    if classes:
        selector += "." + ".".join(classes)
    return selector
