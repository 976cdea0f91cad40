"""Configuration objects and constants for the conversion pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet

HTML_SUFFIX = ".html"
CONTENT_ID_SCHEME = "cid:"
BODY_CLASS = "body"

# The export carries emphasis as inline styles on spans instead of <b>/<i>.
ALLOWED_INLINE_STYLES: FrozenSet[str] = frozenset(
    {
        "font-style:italic",
        "font-weight:700",
    }
)

DEFAULT_STYLESHEET = """
.body {
  max-width: 750px;
  margin: auto;
  font-size: 16px;
  padding: 20px;
}
.title, .subtitle, h1, h2, h3, h4, h5, h6, p, ul, ol {
  line-height: 1.5;
  color: #24292e;
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif;
  word-wrap: break-word;
}
.title {
  font-size: 26px;
  font-weight: bold;
  margin-bottom: 0px;
}
.subtitle {
  margin-top: 0px;
  font-size: 20px;
  color: #666;
}
img {
  max-width: 750px;
}
h1,
h2,
h3,
h4,
h5,
h6 {
  margin-top: 6px;
  margin-bottom: 13px;
}
h1 {
  font-size: 26px;
  font-weight: 600;
  color: #990000;
  border-bottom: 1px solid #aaaaaa;
  margin-top: 18px;
}
h2 {
  font-size: 22px;
  font-weight: 400;
  color: #666;
}
h3 {
  font-size: 16px;
  font-weight: 600;
}
h4 {
  font-size: 16px;
  font-weight: 400;
}
h5 {
  font-size: 14px;
  font-weight: 400;
}
h6 {
  font-size: 12px;
  font-weight: 600;
}
p {
  margin-top: 0;
  margin-bottom: 13px;
}
a {
  color: #0366d6;
  text-decoration: none;
  text-decoration: underline;
}
hr {
  margin: 30px 0px;
  padding: 0;
  border: none;
  width: 100%;
  height: 1px;
  color: #FFF;
  background-color: #CCC;
}
"""


@dataclass(frozen=True)
class ConversionConfig:
    """Settings that control archive classification, inlining and rewriting."""

    html_suffix: str = HTML_SUFFIX
    content_id_scheme: str = CONTENT_ID_SCHEME
    body_class: str = BODY_CLASS
    stylesheet: str = DEFAULT_STYLESHEET
    allowed_inline_styles: FrozenSet[str] = ALLOWED_INLINE_STYLES
    fetch_timeout: float = 30.0
