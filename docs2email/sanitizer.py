"""Allow-list sanitization of exported document markup."""

from __future__ import annotations

import logging

import bleach
from bs4 import BeautifulSoup
from bleach.css_sanitizer import CSSSanitizer

logger = logging.getLogger("docs2email.sanitizer")

# Elements whose text must not survive as loose content once the tag is gone.
_DROPPED_ELEMENTS = ["head", "title", "script", "style", "noscript"]

# Paragraph classes the stylesheet has rules for; every other class is dropped.
STYLED_CLASSES = frozenset({"title", "subtitle"})

UGC_TAGS = frozenset(
    {
        "a", "abbr", "acronym", "b", "bdi", "bdo", "blockquote", "br",
        "caption", "cite", "code", "col", "colgroup", "dd", "del", "details",
        "dfn", "div", "dl", "dt", "em", "figcaption", "figure", "h1", "h2",
        "h3", "h4", "h5", "h6", "hr", "i", "img", "ins", "kbd", "li", "mark",
        "ol", "p", "pre", "q", "rp", "rt", "ruby", "s", "samp", "small",
        "span", "strike", "strong", "sub", "summary", "sup", "table", "tbody",
        "td", "tfoot", "th", "thead", "time", "tr", "tt", "u", "ul", "var",
        "wbr",
    }
)


def _allow_paragraph_attribute(tag: str, name: str, value: str) -> bool:
    return name == "class" and value in STYLED_CLASSES


UGC_ATTRIBUTES = {
    "*": ["id", "title", "dir", "lang"],
    "a": ["href", "name"],
    "p": _allow_paragraph_attribute,
    "img": ["src", "alt", "width", "height"],
    "ol": ["start", "type"],
    "td": ["colspan", "rowspan", "align", "valign"],
    "th": ["colspan", "rowspan", "align", "valign", "scope"],
    "col": ["span"],
    "colgroup": ["span"],
    "time": ["datetime"],
    # Spans carry the export's inline formatting.
    "span": ["style"],
}


def _strip_document_chrome(html: str) -> str:
    """Drop head-level and script content, returning only the body markup."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(_DROPPED_ELEMENTS):
        tag.decompose()
    for paragraph in soup.find_all("p", class_=True):
        kept = [name for name in paragraph["class"] if name in STYLED_CLASSES]
        if kept:
            paragraph["class"] = kept[:1]
        else:
            del paragraph["class"]
    if soup.body is not None:
        return soup.body.decode_contents()
    return soup.decode()


def sanitize(html: str) -> str:
    """Return the safe subset of ``html``; never raises on odd markup."""
    fragment = _strip_document_chrome(html)
    cleaned = bleach.clean(
        fragment,
        tags=UGC_TAGS,
        attributes=UGC_ATTRIBUTES,
        css_sanitizer=CSSSanitizer(),
        strip=True,
        strip_comments=True,
    )
    logger.debug("Sanitized %d characters down to %d", len(html), len(cleaned))
    return cleaned
