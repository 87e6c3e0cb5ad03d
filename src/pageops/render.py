# pageops/render.py
# Markdown to sanitized HTML

from __future__ import annotations

from typing import Union

import bleach
import markdown
from markupsafe import Markup

from .errors import RenderError

MARKDOWN_EXTENSIONS = ["tables", "fenced_code", "sane_lists", "toc"]

# Tags and attributes allowed in user generated content
ALLOWED_TAGS = frozenset({
    "a", "abbr", "b", "blockquote", "br", "code", "dd", "del", "div", "dl",
    "dt", "em", "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "ins",
    "kbd", "li", "ol", "p", "pre", "q", "s", "span", "strong", "sub", "sup",
    "table", "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
})

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title"],
    "abbr": ["title"],
    "img": ["src", "alt", "title", "width", "height"],
    "td": ["align"],
    "th": ["align"],
    "h1": ["id"], "h2": ["id"], "h3": ["id"],
    "h4": ["id"], "h5": ["id"], "h6": ["id"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})


def markdown_to_html(text: str) -> str:
    """Convert Markdown text to (unsanitized) HTML."""
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS, output_format="html")


def sanitize_html(html: str) -> str:
    """
    Strip scripts, disallowed tags, attributes and URL schemes from HTML.

    Disallowed tags are removed entirely; their text content is kept as
    escaped text so it cannot execute.
    """
    return bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )


def render_markdown(body: Union[bytes, str]) -> Markup:
    """
    Render a page body to display-safe HTML.

    The result depends only on ``body``. Bytes are decoded as UTF-8 with
    replacement so malformed input still renders.

    Raises:
        RenderError: if the Markdown converter or sanitizer fails.
    """
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")

    try:
        html = sanitize_html(markdown_to_html(body))
    except Exception as e:
        raise RenderError(f"could not render page: {e}") from e

    return Markup(html)
