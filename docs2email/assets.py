"""Asset reference rewriting and attachment preparation."""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional

from filetype import guess

from .config import CONTENT_ID_SCHEME
from .models import Attachment

logger = logging.getLogger("docs2email.assets")

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def rewrite_asset_references(
    html: str,
    asset_names: Iterable[str],
    scheme: str = CONTENT_ID_SCHEME,
) -> str:
    """Point every literal occurrence of an asset name at its content ID.

    This is plain substring replacement: any text equal to an asset name is
    rewritten, not only ``src``/``href`` values. Names are matched longest
    first in one pass, so a rewritten reference is never rewritten again.
    """
    names = sorted({name for name in asset_names if name}, key=len, reverse=True)
    if not names:
        return html
    pattern = re.compile("|".join(re.escape(name) for name in names))
    counts: Dict[str, int] = {}

    def _replace(match: re.Match) -> str:
        name = match.group(0)
        counts[name] = counts.get(name, 0) + 1
        return scheme + name

    rewritten = pattern.sub(_replace, html)
    for name in names:
        if name not in counts:
            logger.warning("Asset %s is not referenced by the document", name)
        else:
            logger.debug("Rewrote %d references to %s", counts[name], name)
    return rewritten


def detect_content_type(data: bytes) -> str:
    """Guess a MIME type from the file signature."""
    kind = guess(data)
    if kind is None:
        return DEFAULT_CONTENT_TYPE
    return kind.mime


def build_attachments(
    assets: Dict[str, bytes],
    exclude: Optional[str] = None,
) -> List[Attachment]:
    """Wrap assets as attachments, skipping the document entry if named."""
    attachments: List[Attachment] = []
    for name, data in assets.items():
        if name == exclude:
            continue
        attachments.append(
            Attachment(name=name, data=data, content_type=detect_content_type(data))
        )
    return attachments
