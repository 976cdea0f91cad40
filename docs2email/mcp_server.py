"""MCP server exposing the docs2email conversion as a tool."""

from __future__ import annotations

import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from .pipeline import convert_archive

logger = logging.getLogger("docs2email.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="docs2email")


@mcp.tool()
async def convert(
    path: str,
) -> str:
    """Convert a zipped HTML document export to email-ready HTML."""

    source = Path(path).expanduser()
    if not source.is_file():
        raise FileNotFoundError(f"Archive path does not exist: {source}")
    result = convert_archive(source.read_bytes())
    return result.html


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
