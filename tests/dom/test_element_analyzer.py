# tests/dom/test_element_analyzer.py
import pytest

from sensei.dom.element_analyzer import analyze_elements, tally_sections
from sensei.model import ElementAnalysisResult, ElementIssue, Section, Severity

URL = "https://example.com/"

GOOD_HEAD = (
    '<title>A perfectly reasonable page title</title>'
    '<meta name="description" content="' + "d" * 120 + '">'
)


def page(body: str = "", head: str = GOOD_HEAD) -> str:
    return f"<html><head>{head}</head><body>{body}</body></html>"


def section(result: ElementAnalysisResult, name: str):
    return next(s for s in result.section_analysis if s.name == name)


def issues_named(result: ElementAnalysisResult, prefix: str):
    return [i for i in result.element_issues if i.issue.startswith(prefix)]


# --- Section records ---

def test_six_sections_in_fixed_order():
    result = analyze_elements(page("<h1>x</h1>"), URL)

    assert [s.name for s in result.section_analysis] == [
        "Header", "Navigation", "Main Content", "Sidebar", "Footer", "General"
    ]
    assert [s.importance for s in result.section_analysis] == [8, 7, 10, 5, 4, 6]
    assert all(s.score == 100 for s in result.section_analysis)
    assert result.element_issues == []


def test_scores_are_clamped_at_zero():
    body = "<h1>x</h1>" + '<img src="a.png">' * 12
    result = analyze_elements(page(body), URL)

    assert len(issues_named(result, "Image missing alt text")) == 12
    assert section(result, "General").score == 0


def test_every_issue_is_listed_in_its_section():
    body = '<header><img src="logo.png"></header><footer><a href="/x">click here</a></footer>'
    result = analyze_elements(page(body), URL)

    for issue in result.element_issues:
        record = section(result, issue.section.label)
        assert issue in record.issues
    assert sum(len(s.issues) for s in result.section_analysis) == len(result.element_issues)


# --- Headings ---

def test_two_h1_in_header_costs_header_fifteen():
    result = analyze_elements(page("<header><h1>One</h1><h1>Two</h1></header>"), URL)

    multiple = issues_named(result, "Multiple H1 headings")
    assert len(multiple) == 1
    assert multiple[0].severity == Severity.MEDIUM
    assert multiple[0].section == Section.HEADER
    assert section(result, "Header").score == 85


def test_skipped_heading_level_once():
    result = analyze_elements(page("<h1>Main</h1><h4>Deep</h4>"), URL)

    skipped = issues_named(result, "Skipped heading level")
    assert len(skipped) == 1
    assert skipped[0].issue == "Skipped heading level (H1 to H4)"
    assert skipped[0].severity == Severity.LOW
    assert skipped[0].element == "H4 Heading"
    assert section(result, "General").score == 95


def test_skip_check_is_sequential_not_hierarchical():
    body = "<h1>a</h1><h2>b</h2><h3>c</h3><h2>d</h2><h4>e</h4>"
    result = analyze_elements(page(body), URL)

    assert [i.issue for i in issues_named(result, "Skipped")] == ["Skipped heading level (H2 to H4)"]


def test_missing_h1_is_attributed_to_main_content():
    result = analyze_elements(page("<h2>Only second level</h2>"), URL)

    missing = issues_named(result, "Missing H1 heading")
    assert len(missing) == 1
    assert missing[0].selector == "body"
    assert missing[0].severity == Severity.HIGH
    assert missing[0].section == Section.CONTENT
    assert section(result, "Main Content").score == 80


# --- Title and meta description ---

@pytest.mark.parametrize("length, expected", [
    (0, "Missing page title"),
    (19, "Title is too short"),
    (20, None),
    (60, None),
    (61, "Title is too long"),
])
def test_title_thresholds(length, expected):
    head = f"<title>{'t' * length}</title>" + '<meta name="description" content="' + "d" * 120 + '">'
    result = analyze_elements(page("<h1>x</h1>", head=head), URL)

    found = [i.issue for i in result.element_issues]
    assert found == ([expected] if expected else [])
    if expected:
        assert result.element_issues[0].selector == "head > title"
        assert result.element_issues[0].section == Section.HEADER


@pytest.mark.parametrize("length, expected", [
    (0, "Missing meta description"),
    (69, "Meta description is too short"),
    (70, None),
    (71, None),
    (160, None),
    (161, "Meta description is too long"),
])
def test_meta_description_thresholds(length, expected):
    head = "<title>A perfectly reasonable page title</title>" \
           + f'<meta name="description" content="{"d" * length}">'
    result = analyze_elements(page("<h1>x</h1>", head=head), URL)

    found = [i.issue for i in result.element_issues]
    assert found == ([expected] if expected else [])


def test_missing_title_and_description_cost_header_fifty():
    result = analyze_elements(page("<h1>x</h1>", head=""), URL)
    assert section(result, "Header").score == 50
    assert [i.severity for i in result.element_issues] == [Severity.HIGH, Severity.HIGH]


# --- Images, links, paragraphs ---

def test_image_attribution():
    body = (
        "<h1>x</h1>"
        '<footer><div><img src="f.png"></div></footer>'
        '<img src="loose.png">'
        '<img src="decorative.png" alt="">'
    )
    result = analyze_elements(page(body), URL)

    images = issues_named(result, "Image missing alt text")
    assert [i.section for i in images] == [Section.FOOTER, Section.GENERAL]
    assert section(result, "Footer").score == 90
    assert section(result, "General").score == 90


@pytest.mark.parametrize("text, expected", [
    ("", "Link missing text content"),
    ("   ", "Non-descriptive link text"),
    ("click here", "Non-descriptive link text"),
    ("Read More", "Non-descriptive link text"),
    ("Pricing and plans", None),
])
def test_link_text(text, expected):
    result = analyze_elements(page(f'<h1>x</h1><a href="/p">{text}</a>'), URL)
    found = [i.issue for i in result.element_issues]
    assert found == ([expected] if expected else [])


def test_anchor_without_href_is_ignored():
    result = analyze_elements(page('<h1>x</h1><a name="top"></a>'), URL)
    assert result.element_issues == []


@pytest.mark.parametrize("length, flagged", [(300, False), (301, True)])
def test_paragraph_length(length, flagged):
    result = analyze_elements(page(f"<h1>x</h1><main><p>{'w' * length}</p></main>"), URL)
    long_ones = issues_named(result, "Long paragraph")
    assert bool(long_ones) is flagged
    if flagged:
        assert long_ones[0].issue == "Long paragraph (over 300 characters)"
        assert section(result, "Main Content").score == 95


def test_paragraphs_without_end_tags_are_measured_separately():
    body = "<h1>x</h1>" + ("<p>" + "w" * 100) * 4
    html = f"<!DOCTYPE html><html><head>{GOOD_HEAD}</head><body>{body}</body></html>"
    result = analyze_elements(html, URL)

    assert issues_named(result, "Long paragraph") == []
    assert result.total_elements == 2 + 1 + 4


def test_block_element_closes_open_paragraph():
    body = "<h1>x</h1><p>intro<div>" + "w" * 320 + "</div>"
    result = analyze_elements(page(body), URL)

    assert issues_named(result, "Long paragraph") == []


# --- Selectors ---

def test_issue_selectors():
    body = '<h1>x</h1><img id="hero" class="wide" src="a"><img class="thumb small" src="b"><img src="c">'
    result = analyze_elements(page(body), URL)
    assert [i.selector for i in result.element_issues] == ["img#hero", "img.thumb.small", "img"]


# --- Bookkeeping ---

def test_element_counts():
    body = '<h1>x</h1><h2>y</h2><p>text</p><img src="a" alt="A"><a href="/">Home page</a>'
    result = analyze_elements(page(body, head=""), URL)

    # title + meta description always count once, plus 5 elements
    assert result.total_elements == 7
    assert result.analyzed_elements == result.total_elements
    assert result.url == URL


def test_issue_order_follows_categories():
    body = '<p>' + "w" * 301 + '</p><a href="/x"></a><h3>x</h3><img src="a">'
    result = analyze_elements(page(body, head=""), URL)

    assert [i.element for i in result.element_issues] == [
        "Title", "Meta Description", "Image", "H1 Heading", "Link", "Paragraph"
    ]


# --- Robustness ---

@pytest.mark.parametrize("html", [
    "",
    "\x00\x01\x02\xff\xfe garbage \x89PNG",
    "<div><header><h1>unclosed<footer><img src=x>",
    "<" * 500,
    "<h1>" * 300,
])
def test_never_raises_on_hostile_input(html):
    result = analyze_elements(html, URL)
    assert len(result.section_analysis) == 6
    assert all(0 <= s.score <= 100 for s in result.section_analysis)
    assert result.analyzed_elements == result.total_elements


def test_idempotent():
    html = page('<header><h1>a</h1><h1>b</h1></header><img src="x"><a href="/">click here</a>')
    assert analyze_elements(html, URL) == analyze_elements(html, URL)


def test_tally_sections_folds_penalties():
    finding = ElementIssue(
        selector="nav", element="Link", issue="Link missing text content",
        severity=Severity.MEDIUM, recommendation="r", section=Section.NAVIGATION,
    )
    records = tally_sections([(finding, 10), (finding, 10)])

    nav = next(r for r in records if r.name == "Navigation")
    assert nav.score == 80
    assert nav.issues == [finding, finding]
