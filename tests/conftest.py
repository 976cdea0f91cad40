"""
Pytest configuration and shared fixtures.
"""

import io
import sys
import warnings
import zipfile
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 32

# Shaped like the zipped HTML export: inline styles on every span, reviewer
# comment markers, and a trailing comments section.
EXPORT_HTML = (
    '<html><head><meta content="text/html; charset=UTF-8" http-equiv="content-type">'
    '<style type="text/css">.c1{font-weight:700}</style><title>Newsletter</title></head>'
    '<body class="c5">'
    '<h1 id="h.abc"><span style="color:#000000;font-weight:700;font-size:20pt">Weekly Update</span></h1>'
    '<p style="margin:0"><span style="color:#000000;font-weight:400">Hello team</span>'
    '<sup><a href="#cmnt1" id="cmnt_ref1">[a]</a></sup>'
    '<span style="font-style:italic;color:#000000">, welcome.</span></p>'
    '<p><span style="overflow:hidden;display:inline-block">'
    '<img alt="" src="images/image1.png" style="width:100px" title=""></span></p>'
    '<script>alert("x")</script>'
    '<p><span style="color:#000000">Comments</span></p>'
    '<div><p><a href="#cmnt_ref1" id="cmnt1">[a]</a><span>Reviewer note</span></p></div>'
    "</body></html>"
)


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "integration: mark as integration test")


# ============================================================================
# Archive Fixtures
# ============================================================================


def build_zip(entries, compression=zipfile.ZIP_DEFLATED):
    """Build zip bytes from ``(name, data)`` pairs, duplicates allowed."""
    buffer = io.BytesIO()
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        with zipfile.ZipFile(buffer, "w", compression=compression) as zf:
            for name, data in entries:
                zf.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def make_archive():
    """Factory turning a name -> data mapping into zip bytes."""

    def _make(files):
        items = files.items() if isinstance(files, dict) else files
        return build_zip(list(items))

    return _make


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def export_html():
    return EXPORT_HTML


@pytest.fixture
def export_archive(make_archive):
    """A complete export: one document and the image it references."""
    return make_archive(
        {
            "Newsletter.html": EXPORT_HTML.encode("utf-8"),
            "images/image1.png": PNG_BYTES,
        }
    )


@pytest.fixture
def export_archive_path(tmp_path, export_archive):
    path = tmp_path / "Newsletter.zip"
    path.write_bytes(export_archive)
    return path


def style_map(value):
    """Parse a ``style`` attribute into a property -> value dict."""
    declarations = {}
    for declaration in (value or "").split(";"):
        name, sep, val = declaration.partition(":")
        if sep:
            declarations[name.strip().lower()] = val.strip()
    return declarations
