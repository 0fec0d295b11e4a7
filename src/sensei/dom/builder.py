# src/sensei/dom/builder.py
import logging
from typing import Dict, List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from sensei.model import HeadingStats, ImageStats, LinkStats
from .models import PageFacts

logger = logging.getLogger(__name__)

# libxml2 tree builder: applies implied end tags (e.g. <p> closed by <p> or <div>)
PARSER = "lxml"
HEADING_SELECTOR = "h1, h2, h3, h4, h5, h6"


def parse_markup(html: str) -> BeautifulSoup:
    """
    Parses raw markup into a BeautifulSoup tree.

    Never raises: markup the parser rejects yields an empty document, so every
    downstream check reports the page elements as missing.
    """
    if not html:
        return BeautifulSoup("", PARSER)

    # Basic cleanup of potentially dirty HTML (e.g., BOM)
    clean_html = html.replace('\ufeff', '')
    try:
        return BeautifulSoup(clean_html, PARSER)
    except Exception as e:
        logger.warning("Could not build a tree from markup, analysing an empty document: %s", e)
        return BeautifulSoup("", PARSER)


def reference_hostname(ref_url: str) -> Optional[str]:
    """Returns the hostname of the reference URL, or None if it has none."""
    if not ref_url or not isinstance(ref_url, str):
        return None
    try:
        return urlparse(ref_url).hostname or None
    except ValueError:
        logger.debug("Reference URL %r could not be parsed", ref_url)
        return None


def is_internal_link(href: str, hostname: Optional[str]) -> bool:
    """
    Fragment and root-relative links are internal, as are links mentioning the
    reference hostname and anything that is not an absolute http(s) URL.
    """
    if href.startswith(('#', '/')):
        return True
    if hostname and hostname in href:
        return True
    return not href.startswith('http')


class DocumentBuilder:
    """
    Builder responsible for turning a parsed page into PageFacts:
    metadata, heading outline, and image/link partitions.
    """

    def parse_doc(self, soup: BeautifulSoup, ref_url: str = "") -> PageFacts:
        """
        Extracts document-wide facts from a parsed page.

        Args:
            soup (BeautifulSoup): The parsed page.
            ref_url (str): Optional page URL, used to classify links by hostname.

        Returns:
            PageFacts: Everything the document rules inspect.
        """
        title_tag = soup.select_one('title')
        meta_desc = soup.select_one('meta[name="description"]')
        meta_keywords = soup.select_one('meta[name="keywords"]')

        keywords_raw = meta_keywords.get('content', '') if meta_keywords else ''

        return PageFacts(
            title=title_tag.get_text() if title_tag else "",
            description=(meta_desc.get('content') or '') if meta_desc else "",
            keywords=[k.strip() for k in keywords_raw.split(',') if k.strip()],
            og_tags=self._extract_og_tags(soup),
            headings=self._extract_headings(soup),
            images=self._extract_images(soup),
            links=self._extract_links(soup, reference_hostname(ref_url)),
            links_without_text=sum(
                1 for a in soup.select('a[href]') if not a.get_text().strip()
            ),
            has_viewport=soup.select_one('meta[name="viewport"]') is not None,
            has_structured_data=(
                soup.select_one('script[type="application/ld+json"]') is not None
                or soup.select_one('[itemscope], [itemprop]') is not None
            ),
        )

    def _extract_og_tags(self, soup: BeautifulSoup) -> Dict[str, str]:
        og_tags: Dict[str, str] = {}
        for tag in soup.select('meta[property^="og:"]'):
            prop = tag.get('property')
            content = tag.get('content')
            if prop and content:
                og_tags[prop.replace('og:', '', 1)] = content
        return og_tags

    def _extract_headings(self, soup: BeautifulSoup) -> HeadingStats:
        counts = {f"h{level}": 0 for level in range(1, 7)}
        structure: List[str] = []

        for heading in soup.select(HEADING_SELECTOR):
            counts[heading.name] += 1
            text = heading.get_text().strip() or 'Empty heading'
            structure.append(f"{heading.name.upper()}: {text}")

        return HeadingStats(**counts, structure=structure)

    def _extract_images(self, soup: BeautifulSoup) -> ImageStats:
        images = soup.select('img')
        with_alt = sum(1 for img in images if img.get('alt'))
        with_empty_alt = sum(1 for img in images if img.get('alt') == '')

        return ImageStats(
            total=len(images),
            with_alt=with_alt,
            without_alt=len(images) - with_alt - with_empty_alt,
            with_empty_alt=with_empty_alt,
        )

    def _extract_links(self, soup: BeautifulSoup, hostname: Optional[str]) -> LinkStats:
        links = soup.select('a[href]')
        internal = sum(1 for a in links if is_internal_link(a.get('href', ''), hostname))

        return LinkStats(total=len(links), internal=internal, external=len(links) - internal)
