"""Assemble the converted document into a MIME message."""

from __future__ import annotations

import logging
from email.message import EmailMessage
from email.utils import formataddr, getaddresses
from typing import List, Sequence, Tuple

from .assets import build_attachments
from .models import ConversionResult

logger = logging.getLogger("docs2email.message")

Address = Tuple[str, str]


def parse_address_list(value: str) -> List[Address]:
    """Parse ``Alice <alice@example.com>, bob@example.com`` style lists."""
    if not value or not value.strip():
        return []
    addresses = getaddresses([value])
    for name, addr in addresses:
        if "@" not in addr:
            raise ValueError(f"Invalid address: {name or addr!r}")
    return addresses


def _format_addresses(addresses: Sequence[Address]) -> str:
    return ", ".join(formataddr(address) for address in addresses)


def build_message(
    result: ConversionResult,
    subject: str,
    sender: Address,
    to: Sequence[Address] = (),
    cc: Sequence[Address] = (),
    bcc: Sequence[Address] = (),
) -> EmailMessage:
    """Create an HTML message with every asset embedded by content ID."""
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = formataddr(sender)
    if to:
        msg["To"] = _format_addresses(to)
    if cc:
        msg["Cc"] = _format_addresses(cc)
    if bcc:
        msg["Bcc"] = _format_addresses(bcc)
    msg.set_content(result.html, subtype="html")

    attachments = build_attachments(result.assets, exclude=result.html_entry_name)
    logger.info("Adding %d attachments", len(attachments))
    for attachment in attachments:
        msg.add_related(
            attachment.data,
            maintype=attachment.maintype,
            subtype=attachment.subtype,
            cid=f"<{attachment.name}>",
            filename=attachment.name,
            disposition="inline",
        )
    return msg
