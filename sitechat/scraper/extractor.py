"""Content extraction: turns page HTML into a single line of visible text."""

from __future__ import annotations

from bs4 import BeautifulSoup


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------

# Scripts, styles and consent banners never carry page content.
_STRIP_SELECTORS = ["script", "style", "noscript", ".cookie-banner", "#cookie-consent"]

# Elements whose text must stay separated from the following element's text.
_BLOCK_TAGS = [
    "p", "div", "li", "ul", "ol", "dt", "dd", "h1", "h2", "h3", "h4", "h5", "h6",
    "section", "article", "main", "header", "footer", "nav", "aside",
    "blockquote", "pre", "table", "tr", "td", "th", "form", "figure", "figcaption",
]

# Content regions, highest priority first.
CONTENT_SELECTORS = [
    "main",
    '[role="main"]',
    ".main-content",
    "#main-content",
    ".content",
    "#content",
    ".page-content",
    ".container",
    "article",
    ".article",
    "section",
    ".section",
]

_MIN_REGION_CHARS = 100
_MIN_CONTENT_CHARS = 200


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def normalise_whitespace(text: str) -> str:
    """Collapse every whitespace run to one space and trim the ends."""
    return " ".join(text.split())


def parse_page(html: str) -> BeautifulSoup:
    """Parse *html*, drop non-content elements and pad block boundaries.

    Text nodes are later joined with no separator, so inline markup such as
    ``Capital<em>ist</em>`` stays one word; block elements get a trailing
    space so adjacent paragraphs and list items do not run together.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.select(", ".join(_STRIP_SELECTORS)):
        tag.extract()
    for br in soup.find_all("br"):
        br.replace_with(" ")
    for tag in soup.find_all(_BLOCK_TAGS):
        tag.append(" ")
    return soup


def _region_text(soup: BeautifulSoup) -> str:
    """Return text from the first selector with a qualifying region, or ``""``."""
    content = ""
    for selector in CONTENT_SELECTORS:
        elements = soup.select(selector)
        if not elements:
            continue
        found = False
        for element in elements:
            text = element.get_text().strip()
            if len(text) > _MIN_REGION_CHARS:
                content += text + " "
                found = True
        if found:
            break
    return content


def _body_text(soup: BeautifulSoup) -> str:
    container = soup.body if soup.body is not None else soup
    return container.get_text()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_text(html: str) -> str:
    """Extract the visible text of *html*, preferring semantic content regions.

    The first entry of :data:`CONTENT_SELECTORS` that matches any element
    supplies the text of every matching region longer than 100 characters.
    When that yields less than 200 characters the whole ``<body>`` is used
    instead.  The result is whitespace-normalised.
    """
    soup = parse_page(html)

    content = _region_text(soup)
    if len(content) < _MIN_CONTENT_CHARS:
        content = _body_text(soup)

    return normalise_whitespace(content)
