"""Fatal conditions raised by the conversion pipeline."""

from __future__ import annotations

from typing import Optional


class ConversionError(Exception):
    """Base class for failures that abort a whole conversion."""

    exit_code = 1


class CorruptArchive(ConversionError):
    """The source bytes are not a readable zip archive."""

    exit_code = 3

    def __init__(self, message: str, entry_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.entry_name = entry_name


class NoHTMLEntry(ConversionError):
    """The archive holds no HTML document."""

    exit_code = 4


class MultipleHTMLEntries(ConversionError):
    """The archive holds more than one HTML document."""

    exit_code = 5

    def __init__(self, first: str, second: str) -> None:
        super().__init__(
            f"Multiple HTML files in export, not supported: {first!r} and {second!r}"
        )
        self.first = first
        self.second = second


class InliningError(ConversionError):
    """The cleaned markup could not be run through the CSS inliner."""

    exit_code = 6
