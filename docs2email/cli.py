"""Command-line entry point for docs2email."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import requests

from .config import ConversionConfig
from .errors import (
    ConversionError,
    CorruptArchive,
    InliningError,
    MultipleHTMLEntries,
    NoHTMLEntry,
)
from .message import build_message, parse_address_list
from .models import ConversionResult
from .pipeline import convert_source

logger = logging.getLogger("docs2email.cli")

EXIT_BAD_ARGUMENTS = 2
EXIT_SOURCE_UNAVAILABLE = 7

_FAILURE_MESSAGES = {
    CorruptArchive: "Failed to read zip",
    NoHTMLEntry: "Zip file does not contain a HTML file",
    MultipleHTMLEntries: "Multiple HTML files in export, not supported",
    InliningError: "Failed to clean HTML",
}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docs2email",
        description=(
            "Convert a zipped HTML document export into email-ready HTML with "
            "inlined styles and cid: image references."
        ),
    )
    parser.add_argument("source", help="Path or http(s) URL of the exported zip archive")
    parser.add_argument(
        "--output",
        default="output",
        type=Path,
        help="Directory where the HTML (and .eml) should be written",
    )
    parser.add_argument(
        "--eml",
        action="store_true",
        help="Also write a MIME message with the assets embedded inline",
    )
    parser.add_argument("--subject", default="", help="Subject line for --eml")
    parser.add_argument(
        "--from",
        dest="sender",
        default="",
        help="Sender for --eml: e.g. Alice <alice@example.com>",
    )
    parser.add_argument(
        "--to",
        default="",
        help="Recipient list: e.g. Alice <alice@example.com>, Bob <bob@example.com>",
    )
    parser.add_argument("--cc", default="", help="CC list, same format as --to")
    parser.add_argument("--bcc", default="", help="BCC list, same format as --to")
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Seconds to wait when downloading the archive from a URL",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def _failure_message(exc: ConversionError) -> str:
    for error_type, message in _FAILURE_MESSAGES.items():
        if isinstance(exc, error_type):
            return message
    return "Conversion failed"


def _message_headers(args: argparse.Namespace) -> Dict[str, Any]:
    """Validate the --eml flags before any work is done."""
    if not args.subject:
        raise ValueError("No subject specified")
    senders = parse_address_list(args.sender)
    if len(senders) != 1:
        raise ValueError("Exactly one sender is required")
    return {
        "subject": args.subject,
        "sender": senders[0],
        "to": parse_address_list(args.to),
        "cc": parse_address_list(args.cc),
        "bcc": parse_address_list(args.bcc),
    }


def _write_eml(result: ConversionResult, headers: Dict[str, Any], path: Path) -> None:
    msg = build_message(result, **headers)
    path.write_bytes(msg.as_bytes())
    logger.info("Saved message to %s", path)


def run(args: argparse.Namespace) -> int:
    headers: Optional[Dict[str, Any]] = None
    if args.eml:
        try:
            headers = _message_headers(args)
        except ValueError as exc:
            logger.error("Invalid message arguments: %s", exc)
            return EXIT_BAD_ARGUMENTS

    config = ConversionConfig(fetch_timeout=args.timeout)
    start = time.perf_counter()
    try:
        result = convert_source(args.source, config)
    except ConversionError as exc:
        logger.error("%s: %s", _failure_message(exc), exc)
        return exc.exit_code
    except (requests.RequestException, OSError) as exc:
        logger.error("Failed to retrieve file %s: %s", args.source, exc)
        return EXIT_SOURCE_UNAVAILABLE

    output_dir = Path(args.output).resolve()
    output_dir.mkdir(parents=True, exist_ok=True)
    stem = Path(result.html_entry_name).stem or "document"
    html_path = output_dir / f"{stem}.html"
    html_path.write_text(result.html, encoding="utf-8")
    logger.info("Saved HTML to %s", html_path)

    if headers is not None:
        _write_eml(result, headers, output_dir / f"{stem}.eml")

    logger.debug("Finished in %.2fs", time.perf_counter() - start)
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    sys.exit(run(args))


if __name__ == "__main__":
    main()
