# src/sensei/services/suggestion_service.py
import logging
import random
import re
from typing import Any, Dict, List, Optional, Protocol, Sequence

from sensei.errors import SuggestionError
from sensei.model import Issue

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-pro"
MIN_SUGGESTIONS = 4
MAX_SUGGESTIONS = 6
MAX_UNNUMBERED_LINES = 5

NUMBERED_LINE = re.compile(r"^\d+\.")
NUMBER_PREFIX = re.compile(r"^\d+\.\s*")

# (keyword in issue title, suggestion)
ISSUE_SUGGESTIONS = [
    ("meta description",
     "Write compelling meta descriptions (150-160 characters) that include keywords and a call to action"),
    ("alt text",
     "Add descriptive alt text to all images that includes relevant keywords "
     "while accurately describing the image"),
    ("heading",
     "Restructure your headings to follow a logical hierarchy (H1 → H2 → H3) and include target keywords"),
    ("page load",
     "Optimize images, minify CSS/JS, and leverage browser caching to improve page load speed"),
    ("mobile",
     "Improve mobile responsiveness with a mobile-first design approach and test across multiple devices"),
]

GENERAL_SUGGESTIONS = [
    "Implement schema markup (structured data) to help search engines understand your content better",
    "Create a comprehensive XML sitemap and submit it to Google Search Console",
    "Improve internal linking structure to help search engines discover and rank your important pages",
    "Add canonical tags to prevent duplicate content issues",
    "Create more in-depth content that thoroughly addresses user intent",
    "Optimize your title tags to include primary keywords near the beginning",
    "Secure your website with HTTPS if not already implemented",
]


class SuggestionClient(Protocol):
    """Anything that turns a prompt into free text, e.g. a generative model client."""

    def generate(self, prompt: str, model: str) -> str:
        ...


def build_prompt(url: str, issues: Sequence[Issue], metadata: Optional[Dict[str, Any]] = None) -> str:
    """Creates the model prompt listing every issue and the page metadata."""
    issues_list = "\n".join(
        f"- {issue.severity.value.upper()} SEVERITY: {issue.title} - {issue.description}"
        for issue in issues
    )

    metadata_info = ""
    if metadata:
        if metadata.get("title"):
            metadata_info += f'Title: "{metadata["title"]}"\n'
        if metadata.get("description"):
            metadata_info += f'Meta Description: "{metadata["description"]}"\n'
        if metadata.get("keywords"):
            metadata_info += f"Keywords: {', '.join(metadata['keywords'])}\n"

    metadata_block = f"Additional metadata:\n{metadata_info}" if metadata_info else ""

    return (
        f"You are an SEO expert analyzing the website: {url}\n"
        f"\n"
        f"The following SEO issues have been identified:\n"
        f"{issues_list}\n"
        f"\n"
        f"{metadata_block}\n"
        f"\n"
        f"Based on these issues, provide 4-6 specific, actionable suggestions to improve the website's SEO.\n"
        f"Format your response as a numbered list of concise, specific recommendations "
        f"that address the identified issues.\n"
        f"Each suggestion should be clear, actionable, and focused on measurable improvements.\n"
        f"\n"
        f"For example:\n"
        f"1. [Your first suggestion]\n"
        f"2. [Your second suggestion]\n"
        f"..."
    )


def parse_suggestions(text: str) -> List[str]:
    """
    Extracts the numbered list from a model response.
    Falls back to the first five non-blank lines when nothing is numbered.
    """
    lines = [line for line in text.split("\n") if line.strip()]

    suggestions = [
        NUMBER_PREFIX.sub("", line.strip()).strip()
        for line in lines
        if NUMBERED_LINE.match(line.strip())
    ]
    if not suggestions:
        return lines[:MAX_UNNUMBERED_LINES]
    return suggestions


def fallback_suggestions(issues: Sequence[Issue], rng: Optional[random.Random] = None) -> List[str]:
    """
    Rule-based suggestions used when no model is configured or the model fails.
    Issue-specific advice first, topped up with general advice.
    """
    rng = rng or random.Random()
    suggestions: List[str] = []

    for issue in issues:
        for keyword, suggestion in ISSUE_SUGGESTIONS:
            if keyword in issue.title:
                suggestions.append(suggestion)

    remaining = [s for s in GENERAL_SUGGESTIONS if s not in suggestions]
    rng.shuffle(remaining)
    while len(suggestions) < MIN_SUGGESTIONS and remaining:
        suggestions.append(remaining.pop())

    return suggestions[:MAX_SUGGESTIONS]


class SuggestionGenerator:
    """
    Produces improvement suggestions for an analysed page.

    The model client and its configuration are supplied by the caller; without
    a client only the rule-based fallback is used.
    """

    def __init__(
            self,
            client: Optional[SuggestionClient] = None,
            model: str = DEFAULT_MODEL,
            rng: Optional[random.Random] = None
    ):
        self.client = client
        self.model = model
        self.rng = rng or random.Random()

    def generate(
            self,
            url: str,
            issues: Sequence[Issue],
            metadata: Optional[Dict[str, Any]] = None
    ) -> List[str]:
        if self.client is None:
            return fallback_suggestions(issues, self.rng)

        try:
            return self._ask_model(url, issues, metadata)
        except SuggestionError as e:
            logger.warning("AI suggestions unavailable for %s, using fallback: %s", url, e)
            return fallback_suggestions(issues, self.rng)

    def _ask_model(
            self,
            url: str,
            issues: Sequence[Issue],
            metadata: Optional[Dict[str, Any]]
    ) -> List[str]:
        prompt = build_prompt(url, issues, metadata)
        try:
            text = self.client.generate(prompt, self.model)
        except Exception as e:
            raise SuggestionError(f"Model call failed: {e}") from e

        suggestions = parse_suggestions(text or "")
        if not suggestions:
            raise SuggestionError("Model returned an empty response")
        return suggestions
