"""High-level orchestration from export archive to email-ready HTML."""

from __future__ import annotations

import logging
import time
from typing import Optional

from .archive import classify, load_source, read_archive
from .assets import rewrite_asset_references
from .cleanup import run_cleanup_passes
from .config import ConversionConfig
from .inliner import inline_styles
from .models import ConversionResult
from .sanitizer import sanitize

logger = logging.getLogger("docs2email.pipeline")


def convert_archive(
    raw: bytes, config: Optional[ConversionConfig] = None
) -> ConversionResult:
    """Run every stage over the raw archive bytes.

    Raises a :class:`~docs2email.errors.ConversionError` subclass when the
    archive is unreadable, ambiguous, or the markup cannot be inlined.
    """
    config = config or ConversionConfig()
    start = time.perf_counter()

    logger.info("Parsing zip file")
    archive = read_archive(raw)
    bundle = classify(archive, config.html_suffix)

    logger.info("Cleaning and styling %s", bundle.html_entry_name)
    fragment = sanitize(bundle.html_text())
    fragment = run_cleanup_passes(fragment, config.allowed_inline_styles)
    html = inline_styles(fragment, config.stylesheet, config.body_class)

    # Point references to files in the archive at the email "cid" scheme.
    assets = bundle.attachments()
    html = rewrite_asset_references(html, assets.keys(), config.content_id_scheme)

    logger.info(
        "Converted %s with %d asset%s in %.2fs",
        bundle.html_entry_name,
        len(assets),
        "s" if len(assets) != 1 else "",
        time.perf_counter() - start,
    )
    return ConversionResult(
        html=html,
        assets=assets,
        html_entry_name=bundle.html_entry_name,
    )


def convert_source(
    source: str, config: Optional[ConversionConfig] = None
) -> ConversionResult:
    """Load an archive from a path or URL and convert it."""
    config = config or ConversionConfig()
    raw = load_source(source, timeout=config.fetch_timeout)
    return convert_archive(raw, config)
