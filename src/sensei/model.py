from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Section(str, Enum):
    """Coarse page regions used to attribute element issues and aggregate scores."""
    HEADER = "header"
    NAVIGATION = "navigation"
    CONTENT = "content"
    SIDEBAR = "sidebar"
    FOOTER = "footer"
    GENERAL = "general"

    @property
    def label(self) -> str:
        return SECTION_LABELS[self]

    @property
    def importance(self) -> int:
        return SECTION_IMPORTANCE[self]


# Canonical display names, shared by both analyzers and the report layer.
SECTION_LABELS: Dict[Section, str] = {
    Section.HEADER: "Header",
    Section.NAVIGATION: "Navigation",
    Section.CONTENT: "Main Content",
    Section.SIDEBAR: "Sidebar",
    Section.FOOTER: "Footer",
    Section.GENERAL: "General",
}

SECTION_IMPORTANCE: Dict[Section, int] = {
    Section.HEADER: 8,
    Section.NAVIGATION: 7,
    Section.CONTENT: 10,
    Section.SIDEBAR: 5,
    Section.FOOTER: 4,
    Section.GENERAL: 6,
}


class SenseiModel(BaseModel):
    """
    Base for every record leaving the package.
    Attributes are snake_case in Python and camelCase on the wire
    (``model_dump(by_alias=True)``), matching the front end's field names.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Document level ---

class Issue(SenseiModel):
    """A single document-level SEO/accessibility finding."""
    model_config = ConfigDict(frozen=True)

    id: int
    severity: Severity
    title: str
    description: str
    how_to_fix: str


class HeadingStats(SenseiModel):
    h1: int = 0
    h2: int = 0
    h3: int = 0
    h4: int = 0
    h5: int = 0
    h6: int = 0
    structure: List[str] = Field(default_factory=list)


class ImageStats(SenseiModel):
    total: int = 0
    with_alt: int = 0
    without_alt: int = 0
    with_empty_alt: int = 0


class LinkStats(SenseiModel):
    total: int = 0
    internal: int = 0
    external: int = 0


class HtmlAnalysisResult(SenseiModel):
    """Metadata, structural counts and issues produced by the document analyzer."""
    title: str = ""
    description: str = ""
    keywords: List[str] = Field(default_factory=list)
    og_tags: Dict[str, str] = Field(default_factory=dict)
    headings: HeadingStats = Field(default_factory=HeadingStats)
    images: ImageStats = Field(default_factory=ImageStats)
    links: LinkStats = Field(default_factory=LinkStats)
    issues: List[Issue] = Field(default_factory=list)


# --- Element level ---

class ElementIssue(SenseiModel):
    """A violation attributed to one element and the page section containing it."""
    model_config = ConfigDict(frozen=True)

    selector: str
    element: str
    issue: str
    severity: Severity
    recommendation: str
    section: Section


class SectionAnalysis(SenseiModel):
    name: str
    score: int = Field(default=100, ge=0, le=100)
    issues: List[ElementIssue] = Field(default_factory=list)
    importance: int = Field(ge=1, le=10)


class ElementAnalysisResult(SenseiModel):
    url: str
    total_elements: int = 0
    analyzed_elements: int = 0
    element_issues: List[ElementIssue] = Field(default_factory=list)
    section_analysis: List[SectionAnalysis] = Field(default_factory=list)


# --- Combined report ---

class Subscores(SenseiModel):
    performance: int
    seo: int
    accessibility: int
    best_practices: int


class ReportMetadata(SenseiModel):
    title: str = ""
    description: str = ""
    keywords: List[str] = Field(default_factory=list)
    og_tags: Dict[str, str] = Field(default_factory=dict)


class SeoReport(SenseiModel):
    """
    The record handed to the front end: core analysis plus the scores and
    suggestions the orchestrator derives from it.
    """
    url: str
    type: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    overall: int
    subscores: Subscores
    issues: List[Issue] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    metadata: Optional[ReportMetadata] = None
    element_analysis: Optional[ElementAnalysisResult] = None
    is_placeholder: bool = False
