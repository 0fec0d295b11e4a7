# src/sensei/dom/models.py
from typing import Dict, List

from pydantic import BaseModel, Field

from sensei.model import HeadingStats, ImageStats, LinkStats


class PageFacts(BaseModel):
    """
    Document-wide facts extracted from a parsed page.

    This model is the input of every document rule. Most fields are copied
    verbatim into the HtmlAnalysisResult; the trailing flags only feed rules.
    """
    title: str = ""
    description: str = ""
    keywords: List[str] = Field(default_factory=list)
    og_tags: Dict[str, str] = Field(default_factory=dict)

    headings: HeadingStats = Field(default_factory=HeadingStats)
    images: ImageStats = Field(default_factory=ImageStats)
    links: LinkStats = Field(default_factory=LinkStats)

    # --- Rule inputs ---
    links_without_text: int = 0
    has_viewport: bool = False
    has_structured_data: bool = False
