"""Data models used throughout the conversion pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple


@dataclass(frozen=True)
class ArchiveEntry:
    """One named blob read out of the export archive."""

    name: str
    data: bytes


@dataclass(frozen=True)
class Archive:
    """Every entry of an export archive, in archive order."""

    entries: Tuple[ArchiveEntry, ...] = ()

    def __iter__(self) -> Iterator[ArchiveEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def names(self) -> List[str]:
        return [entry.name for entry in self.entries]

    def as_mapping(self) -> Dict[str, bytes]:
        return {entry.name: entry.data for entry in self.entries}


@dataclass
class DocumentBundle:
    """The single HTML entry of an archive plus every file it shipped with.

    ``assets`` still contains the HTML entry; use :meth:`attachments` for the
    files that travel alongside the rendered document.
    """

    html_entry_name: str
    assets: Dict[str, bytes]

    def html_text(self) -> str:
        return self.assets[self.html_entry_name].decode("utf-8", errors="replace")

    def attachments(self) -> Dict[str, bytes]:
        return {
            name: data
            for name, data in self.assets.items()
            if name != self.html_entry_name
        }


@dataclass
class ConversionResult:
    """Email-ready HTML and the assets it references by content ID."""

    html: str
    assets: Dict[str, bytes]
    html_entry_name: str


@dataclass
class Attachment:
    """An asset prepared for embedding in a MIME message."""

    name: str
    data: bytes
    content_type: str

    @property
    def maintype(self) -> str:
        return self.content_type.split("/", 1)[0]

    @property
    def subtype(self) -> str:
        return self.content_type.split("/", 1)[1]
