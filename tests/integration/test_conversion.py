"""
Integration tests for the complete archive-to-email conversion.
"""

import asyncio

import pytest
from bs4 import BeautifulSoup

from conftest import PNG_BYTES, style_map
from docs2email.config import ConversionConfig
from docs2email.errors import MultipleHTMLEntries, NoHTMLEntry
from docs2email.pipeline import convert_archive, convert_source

pytestmark = pytest.mark.integration


class TestMinimalArchive:
    """One document referencing one image."""

    @pytest.fixture
    def result(self, make_archive):
        raw = make_archive(
            {
                "doc.html": b'<html><body><p><img alt="diagram" src="image1.png"></p></body></html>',
                "image1.png": PNG_BYTES,
            }
        )
        return convert_archive(raw)

    def test_references_use_content_ids(self, result):
        img = BeautifulSoup(result.html, "html.parser").find("img")

        assert img["src"] == "cid:image1.png"
        assert 'src="image1.png"' not in result.html

    def test_assets_exclude_document(self, result):
        assert result.assets == {"image1.png": PNG_BYTES}
        assert result.html_entry_name == "doc.html"

    def test_output_is_standalone_document(self, result):
        soup = BeautifulSoup(result.html, "html.parser")

        assert soup.find("html") is not None
        assert soup.find("head") is not None
        assert soup.find("div", class_="body") is not None
        assert "<style" not in result.html


class TestExportConversion:
    """A realistic export with comments, inline styles and an image."""

    @pytest.fixture
    def result(self, export_archive):
        return convert_archive(export_archive)

    @pytest.fixture
    def soup(self, result):
        return BeautifulSoup(result.html, "html.parser")

    def test_comments_are_removed(self, result):
        assert "Reviewer note" not in result.html
        assert "cmnt" not in result.html
        assert "Comments" not in result.html

    def test_head_and_scripts_are_removed(self, result):
        assert "alert" not in result.html
        assert ".c1" not in result.html

    def test_heading_is_collapsed_and_styled(self, soup):
        h1 = soup.find("h1")

        assert h1.find("span") is None
        assert h1.get_text() == "Weekly Update"
        assert h1["id"] == "h.abc"
        assert style_map(h1["style"])["color"] == "#990000"

    def test_body_text_survives(self, soup):
        paragraph = soup.find("p")

        assert paragraph.get_text() == "Hello team, welcome."

    def test_italic_span_keeps_emphasis(self, soup):
        span = soup.find("p").find("span")
        styles = style_map(span["style"])

        assert span.get_text() == ", welcome."
        assert styles == {"font-style": "italic"}

    def test_image_points_at_attachment(self, soup, result):
        img = soup.find("img")

        assert img["src"] == "cid:images/image1.png"
        assert style_map(img["style"])["max-width"] == "750px"
        assert set(result.assets) == {"images/image1.png"}

    def test_paragraphs_get_stylesheet_rules(self, soup):
        for paragraph in soup.find_all("p"):
            assert style_map(paragraph["style"])["margin-bottom"] == "13px"


class TestFailures:
    """Fatal archive shapes abort the conversion."""

    def test_no_html_entry(self, make_archive):
        with pytest.raises(NoHTMLEntry):
            convert_archive(make_archive({"image1.png": PNG_BYTES}))

    def test_multiple_html_entries(self, make_archive):
        raw = make_archive({"a.html": b"<p>a</p>", "b.html": b"<p>b</p>"})

        with pytest.raises(MultipleHTMLEntries):
            convert_archive(raw)

    def test_custom_suffix(self, make_archive):
        raw = make_archive({"a.html": b"<p>a</p>", "b.htm": b"<p>b</p>"})

        result = convert_archive(raw, ConversionConfig(html_suffix=".htm"))

        assert result.html_entry_name == "b.htm"
        assert set(result.assets) == {"a.html"}


class TestSources:
    """Loading archives from disk and via the MCP tool."""

    def test_convert_source_from_path(self, export_archive_path):
        result = convert_source(str(export_archive_path))

        assert result.html_entry_name == "Newsletter.html"

    def test_mcp_convert_tool(self, export_archive_path):
        from docs2email.mcp_server import convert

        html = asyncio.run(convert(str(export_archive_path)))

        assert "cid:images/image1.png" in html

    def test_mcp_convert_tool_missing_path(self, tmp_path):
        from docs2email.mcp_server import convert

        with pytest.raises(FileNotFoundError):
            asyncio.run(convert(str(tmp_path / "missing.zip")))


class TestTitleParagraphs:
    """Title and subtitle paragraphs pick up their stylesheet rules."""

    @pytest.fixture
    def soup(self, make_archive):
        raw = make_archive(
            {
                "doc.html": (
                    b'<html><body><p class="c4 title" id="h.t"><span class="c2">Weekly</span></p>'
                    b'<p class="subtitle"><span class="c2">Issue 3</span></p>'
                    b'<p class="c1"><span class="c2">Body</span></p></body></html>'
                ),
            }
        )
        return BeautifulSoup(convert_archive(raw).html, "html.parser")

    def test_title_is_styled(self, soup):
        title = soup.find("p", class_="title")
        styles = style_map(title["style"])

        assert title.get_text() == "Weekly"
        assert styles["font-size"] == "26px"
        assert styles["font-weight"] == "bold"

    def test_subtitle_is_styled(self, soup):
        styles = style_map(soup.find("p", class_="subtitle")["style"])

        assert styles["font-size"] == "20px"
        assert styles["color"] == "#666"

    def test_plain_paragraph_has_no_title_rules(self, soup):
        paragraph = soup.find_all("p")[-1]

        assert paragraph.get("class") is None
        assert "font-size" not in style_map(paragraph["style"])
