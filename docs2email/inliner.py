"""CSS inlining of the cleaned document into a standalone email body."""

from __future__ import annotations

import logging

import css_inline

from .config import BODY_CLASS, DEFAULT_STYLESHEET
from .errors import InliningError

logger = logging.getLogger("docs2email.inliner")


def wrap_document(fragment: str, stylesheet: str, body_class: str = BODY_CLASS) -> str:
    """Place the fragment in the fixed skeleton that carries the stylesheet."""
    header = (
        f"<html><head><style>{stylesheet}</style></head>"
        f'<body><div class="{body_class}">'
    )
    footer = "</div></body></html>"
    return header + fragment + footer


def inline_styles(
    fragment: str,
    stylesheet: str = DEFAULT_STYLESHEET,
    body_class: str = BODY_CLASS,
) -> str:
    """Copy matching stylesheet rules onto every element's ``style`` attribute.

    Declarations already present inline take precedence over stylesheet
    declarations for the same property.
    """
    document = wrap_document(fragment, stylesheet, body_class)
    inliner = css_inline.CSSInliner(
        keep_style_tags=False,
        keep_link_tags=False,
        load_remote_stylesheets=False,
    )
    try:
        inlined = inliner.inline(document)
    except ValueError as exc:
        raise InliningError(f"Failed inlining styles: {exc}") from exc
    logger.debug("Inlined stylesheet into %d characters of markup", len(inlined))
    return inlined
