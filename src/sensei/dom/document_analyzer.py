# src/sensei/dom/document_analyzer.py
import logging
from typing import List, Optional

from sensei.model import HtmlAnalysisResult, Issue
from .builder import DocumentBuilder, parse_markup
from .core import IssueDraft
from .document_rules import DOCUMENT_RULES, DocumentRule

logger = logging.getLogger(__name__)

REQUIRED_HTML_MARKERS = ('<html', '<head', '<body', '</html>')


def is_valid_html(text: str) -> bool:
    """
    Cheap plausibility gate for uploaded files: the raw text must contain the
    html, head and body openers and the closing html tag (case-sensitive).
    """
    return all(marker in text for marker in REQUIRED_HTML_MARKERS)


def number_issues(drafts: List[IssueDraft]) -> List[Issue]:
    """Assigns sequential IDs, starting at 1, in rule order."""
    return [
        Issue(
            id=index,
            severity=draft.severity,
            title=draft.title,
            description=draft.description,
            how_to_fix=draft.how_to_fix,
        )
        for index, draft in enumerate(drafts, start=1)
    ]


def analyze_document(
        html: str,
        ref_url: str = "",
        rules: Optional[List[DocumentRule]] = None
) -> HtmlAnalysisResult:
    """
    Extracts document metadata and runs the document-level checks.

    Never raises for string input; unparsable markup is analysed as an empty page.

    Args:
        html (str): Raw page markup.
        ref_url (str): Optional page URL, used to classify links as internal/external.
        rules (Optional[List[DocumentRule]]): Override of the default rule battery.

    Returns:
        HtmlAnalysisResult: Metadata, structural counts and numbered issues.
    """
    soup = parse_markup(html)
    page = DocumentBuilder().parse_doc(soup, ref_url)

    drafts: List[IssueDraft] = []
    for rule in rules if rules is not None else DOCUMENT_RULES:
        drafts.extend(rule(page))

    logger.debug("Document analysis found %d issues", len(drafts))

    return HtmlAnalysisResult(
        title=page.title,
        description=page.description,
        keywords=page.keywords,
        og_tags=page.og_tags,
        headings=page.headings,
        images=page.images,
        links=page.links,
        issues=number_issues(drafts),
    )
