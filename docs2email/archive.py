"""Reading export archives and locating the document inside them."""

from __future__ import annotations

import io
import logging
import zipfile
import zlib
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests

from .config import HTML_SUFFIX
from .errors import CorruptArchive, MultipleHTMLEntries, NoHTMLEntry
from .models import Archive, ArchiveEntry, DocumentBundle

logger = logging.getLogger("docs2email.archive")

_ENTRY_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    NotImplementedError,
    RuntimeError,
    EOFError,
    ValueError,
    OSError,
)


def is_url(source: str) -> bool:
    parsed = urlparse(source)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def load_source(source: str, timeout: float = 30.0) -> bytes:
    """Return the raw archive bytes from a local path or an http(s) URL."""
    if is_url(source):
        logger.info("Requesting %s", source)
        resp = requests.get(source, timeout=timeout)
        resp.raise_for_status()
        logger.debug("Downloaded %d bytes from %s", len(resp.content), source)
        return resp.content
    path = Path(source).expanduser()
    logger.info("Reading %s", path)
    return path.read_bytes()


def read_archive(raw: bytes) -> Archive:
    """Decompress every entry of a zip archive into memory."""
    try:
        zf = zipfile.ZipFile(io.BytesIO(raw))
    except (zipfile.BadZipFile, zlib.error, OSError, EOFError, ValueError) as exc:
        raise CorruptArchive(f"Failed to read archive: {exc}") from exc

    entries = []
    seen = set()
    with zf:
        for index, info in enumerate(zf.infolist()):
            if info.is_dir():
                continue
            if info.filename in seen:
                raise CorruptArchive(
                    f"Duplicate entry in archive: {info.filename}",
                    entry_name=info.filename,
                )
            try:
                data = zf.read(info)
            except _ENTRY_READ_ERRORS as exc:
                raise CorruptArchive(
                    f"Failed to read zipped file {info.filename}: {exc}",
                    entry_name=info.filename,
                ) from exc
            seen.add(info.filename)
            entries.append(ArchiveEntry(name=info.filename, data=data))
            logger.info("File %d: %s (%d bytes)", index, info.filename, len(data))
    return Archive(entries=tuple(entries))


def classify(archive: Archive, html_suffix: str = HTML_SUFFIX) -> DocumentBundle:
    """Pick out the one HTML entry; anything else is ambiguous and fatal."""
    suffix = html_suffix.lower()
    html_entry: Optional[str] = None
    for name in archive.names():
        if not name.lower().endswith(suffix):
            continue
        if html_entry is not None:
            raise MultipleHTMLEntries(html_entry, name)
        html_entry = name
    if html_entry is None:
        raise NoHTMLEntry("Zip file does not contain a HTML file")
    logger.debug("Document entry is %s", html_entry)
    return DocumentBundle(html_entry_name=html_entry, assets=archive.as_mapping())
