# src/sensei/dom/document_rules.py
from typing import Callable, List

from sensei.model import Severity
from .core import IssueDraft, audit_spec
from .models import PageFacts

DocumentRule = Callable[[PageFacts], List[IssueDraft]]


@audit_spec(codes=["MISSING_TITLE", "TITLE_TOO_SHORT", "TITLE_TOO_LONG"])
def check_title(page: PageFacts) -> List[IssueDraft]:
    """Validates the presence and length of the <title> tag."""
    title_len = len(page.title)
    if not page.title:
        return [IssueDraft(
            severity=Severity.HIGH,
            title="Missing page title",
            description="Your page is missing a title tag, which is critical for SEO.",
            how_to_fix="Add a descriptive title tag within the <head> section of your HTML.",
        )]
    if title_len < 10:
        return [IssueDraft(
            severity=Severity.MEDIUM,
            title="Title too short",
            description=f"Your title tag is only {title_len} characters long, "
                        f"which may not be descriptive enough.",
            how_to_fix="Create a more descriptive title between 50-60 characters that includes key terms.",
        )]
    if title_len > 60:
        return [IssueDraft(
            severity=Severity.LOW,
            title="Title too long",
            description=f"Your title tag is {title_len} characters long, "
                        f"which may be truncated in search results.",
            how_to_fix="Keep your title under 60 characters while maintaining key information.",
        )]
    return []


@audit_spec(codes=["MISSING_META_DESC", "META_DESC_TOO_SHORT", "META_DESC_TOO_LONG"])
def check_meta_desc(page: PageFacts) -> List[IssueDraft]:
    """Validates the presence and length of the meta description."""
    desc_len = len(page.description)
    if not page.description:
        return [IssueDraft(
            severity=Severity.HIGH,
            title="Missing meta description",
            description="Your page is missing a meta description, which is important for SEO "
                        "and click-through rates in search results.",
            how_to_fix="Add a meta description tag with a compelling summary of your page "
                       "(around 150-160 characters).",
        )]
    if desc_len < 50:
        return [IssueDraft(
            severity=Severity.MEDIUM,
            title="Meta description too short",
            description=f"Your meta description is only {desc_len} characters long, "
                        f"which may not adequately describe your page.",
            how_to_fix="Write a more descriptive meta description between 120-158 characters.",
        )]
    if desc_len > 160:
        return [IssueDraft(
            severity=Severity.LOW,
            title="Meta description too long",
            description=f"Your meta description is {desc_len} characters long "
                        f"and may be truncated in search results.",
            how_to_fix="Keep your meta description under 158 characters while maintaining key information.",
        )]
    return []


@audit_spec(codes=["MISSING_H1", "MULTIPLE_H1"])
def check_h1_count(page: PageFacts) -> List[IssueDraft]:
    h1_count = page.headings.h1
    if h1_count == 0:
        return [IssueDraft(
            severity=Severity.HIGH,
            title="Missing H1 heading",
            description="Your page does not have an H1 heading, which is important for page structure and SEO.",
            how_to_fix="Add a descriptive H1 heading that contains your primary keyword.",
        )]
    if h1_count > 1:
        return [IssueDraft(
            severity=Severity.MEDIUM,
            title="Multiple H1 headings",
            description=f"Your page has {h1_count} H1 headings. It's generally best to have a single H1.",
            how_to_fix="Use only one H1 heading as the main title of your page and use H2-H6 for subheadings.",
        )]
    return []


@audit_spec(codes=["H2_WITHOUT_H1"])
def check_h2_without_h1(page: PageFacts) -> List[IssueDraft]:
    if page.headings.h1 == 0 and page.headings.h2 > 0:
        return [IssueDraft(
            severity=Severity.MEDIUM,
            title="H2 without H1",
            description="Your page uses H2 headings without an H1 heading.",
            how_to_fix="Add an H1 heading as the main title of your page before using H2 headings.",
        )]
    return []


@audit_spec(codes=["H3_WITHOUT_H2"])
def check_h3_without_h2(page: PageFacts) -> List[IssueDraft]:
    if page.headings.h2 == 0 and page.headings.h3 > 0:
        return [IssueDraft(
            severity=Severity.LOW,
            title="H3 without H2",
            description="Your page uses H3 headings without H2 headings, "
                        "which creates a gap in the heading hierarchy.",
            how_to_fix="Maintain proper heading hierarchy (H1 → H2 → H3) to improve page structure.",
        )]
    return []


@audit_spec(codes=["IMAGES_MISSING_ALT"])
def check_image_alt(page: PageFacts) -> List[IssueDraft]:
    images = page.images
    if images.total > 0 and images.without_alt > 0:
        return [IssueDraft(
            severity=Severity.MEDIUM,
            title="Images missing alt text",
            description=f"{images.without_alt} out of {images.total} images are missing alt text, "
                        f"which is important for accessibility and SEO.",
            how_to_fix="Add descriptive alt attributes to all images that describe "
                       "the content and function of the image.",
        )]
    return []


@audit_spec(codes=["LINKS_WITHOUT_TEXT"])
def check_link_text(page: PageFacts) -> List[IssueDraft]:
    if page.links_without_text > 0:
        return [IssueDraft(
            severity=Severity.MEDIUM,
            title="Links without text",
            description=f"{page.links_without_text} links on your page have no text content, "
                        f"which is bad for accessibility and SEO.",
            how_to_fix="Add descriptive text to all links to help users and search engines "
                       "understand their purpose.",
        )]
    return []


@audit_spec(codes=["MISSING_VIEWPORT"])
def check_viewport(page: PageFacts) -> List[IssueDraft]:
    if not page.has_viewport:
        return [IssueDraft(
            severity=Severity.HIGH,
            title="Missing viewport meta tag",
            description="Your page is missing the viewport meta tag, which is essential for mobile responsiveness.",
            how_to_fix='Add <meta name="viewport" content="width=device-width, initial-scale=1"> '
                       'to the <head> section.',
        )]
    return []


@audit_spec(codes=["MISSING_STRUCTURED_DATA"])
def check_structured_data(page: PageFacts) -> List[IssueDraft]:
    """JSON-LD scripts and microdata attributes both count as structured data."""
    if not page.has_structured_data:
        return [IssueDraft(
            severity=Severity.MEDIUM,
            title="Missing structured data",
            description="Your page does not appear to use structured data (schema.org) markup.",
            how_to_fix="Implement relevant schema.org markup to enhance your search engine "
                       "listings with rich results.",
        )]
    return []


# Applied in this order; issue IDs follow it.
DOCUMENT_RULES: List[DocumentRule] = [
    check_title,
    check_meta_desc,
    check_h1_count,
    check_h2_without_h1,
    check_h3_without_h2,
    check_image_alt,
    check_link_text,
    check_viewport,
    check_structured_data,
]
