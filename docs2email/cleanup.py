"""Cleanup passes that remove word-processor cruft from sanitized markup.

Each pass is a narrow text rewrite keyed to the shapes the export produces,
not a general HTML transform. They run in the order returned by
:func:`cleanup_passes`:

1. style filter (only bold/italic declarations survive);
2. comment markers and the trailing comments section;
3. attribute-less spans;
4. spans wrapping a whole heading.

Spans only become attribute-less after pass 1, and removing comment markup
changes which spans are empty, so 3 must follow both.
"""

from __future__ import annotations

import logging
import re
from functools import partial
from typing import Callable, Iterable, List, Tuple

from .config import ALLOWED_INLINE_STYLES

logger = logging.getLogger("docs2email.cleanup")

STYLE_ATTR_PATTERN = re.compile(r'(\s+)style="([^"]*)"')

# Inline marker linking a run of text to an entry in the comments section.
COMMENT_ANCHOR_PATTERN = re.compile(
    r'<sup><a href="#cmnt\d+" id="cmnt_ref\d+"(?: rel="nofollow")?>\[\w+\]</a></sup>'
)

# Heading of the comments section appended to the end of the export.
COMMENTS_SECTION_PATTERN = re.compile(
    r"<p><span\s*>Comments</span></p>\s*<div><p>.*\Z", re.DOTALL
)

EMPTY_SPAN_PATTERN = re.compile(r"<span\s*>([^<]*)</span>")

HEADER_SPAN_PATTERN = re.compile(
    r'(<h([1-6]) id="[^"]+">)<span[^>]+>([^<]*)</span>(</h\2>)'
)


def _normalize_declaration(declaration: str) -> str:
    name, sep, value = declaration.partition(":")
    if not sep:
        return declaration.strip()
    return f"{name.strip().lower()}:{value.strip()}"


def filter_style_attributes(
    html: str, allowed_styles: Iterable[str] = ALLOWED_INLINE_STYLES
) -> str:
    """Keep only allowed declarations in every ``style`` attribute."""
    allowed = frozenset(allowed_styles)

    def _rewrite(match: re.Match) -> str:
        kept: List[str] = []
        for declaration in match.group(2).split(";"):
            normalized = _normalize_declaration(declaration)
            if normalized in allowed and normalized not in kept:
                kept.append(normalized)
        if not kept:
            return ""
        return f'{match.group(1)}style="{";".join(kept)}"'

    return STYLE_ATTR_PATTERN.sub(_rewrite, html)


def strip_comments(html: str) -> str:
    """Remove reviewer comment markers and the trailing comments section."""
    html, markers = COMMENT_ANCHOR_PATTERN.subn("", html)
    html, sections = COMMENTS_SECTION_PATTERN.subn("", html)
    logger.debug("Removed %d comment markers and %d comment sections", markers, sections)
    return html


def collapse_empty_spans(html: str) -> str:
    """Unwrap spans that have no attributes and only text inside."""
    html, count = EMPTY_SPAN_PATTERN.subn(r"\1", html)
    logger.debug("Collapsed %d empty spans", count)
    return html


def collapse_header_spans(html: str) -> str:
    """Drop the styled span the export wraps around heading text."""
    html, count = HEADER_SPAN_PATTERN.subn(r"\1\3\4", html)
    logger.debug("Collapsed %d heading spans", count)
    return html


def cleanup_passes(
    allowed_styles: Iterable[str] = ALLOWED_INLINE_STYLES,
) -> List[Tuple[str, Callable[[str], str]]]:
    """Return the named passes in the order they have to run."""
    return [
        ("styles", partial(filter_style_attributes, allowed_styles=frozenset(allowed_styles))),
        ("comments", strip_comments),
        ("spans", collapse_empty_spans),
        ("headers", collapse_header_spans),
    ]


def run_cleanup_passes(
    html: str, allowed_styles: Iterable[str] = ALLOWED_INLINE_STYLES
) -> str:
    """Apply every cleanup pass in its fixed order."""
    for name, cleanup in cleanup_passes(allowed_styles):
        html = cleanup(html)
        logger.debug("After %s pass: %d characters", name, len(html))
    return html
