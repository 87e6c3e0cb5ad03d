from unittest.mock import patch

import pytest
from markupsafe import Markup

from pageops.errors import RenderError
from pageops.render import render_markdown, sanitize_html


class TestRenderMarkdown:
    def test_bold_text(self):
        """Test that **text** becomes <strong>."""
        html = render_markdown("Hello **world**")
        assert "<strong>world</strong>" in html
        assert "**" not in html

    def test_returns_markup(self):
        """Test that the result is marked safe for Jinja templates."""
        assert isinstance(render_markdown("text"), Markup)

    def test_accepts_bytes(self):
        assert "<em>hi</em>" in render_markdown(b"*hi*")

    def test_invalid_utf8_bytes_do_not_crash(self):
        html = render_markdown(b"caf\xe9 *ok*")
        assert "<em>ok</em>" in html

    def test_deterministic(self, markdown_with_script):
        """Test that the same body always renders to the same HTML."""
        assert render_markdown(markdown_with_script) == render_markdown(markdown_with_script)

    def test_tables_and_fenced_code(self):
        text = (
            "| a | b |\n"
            "|---|---|\n"
            "| 1 | 2 |\n"
            "\n"
            "```\n"
            "print('hi')\n"
            "```\n"
        )
        html = render_markdown(text)
        assert "<table>" in html
        assert "<pre><code>" in html

    def test_heading_ids_kept(self):
        assert 'id="notes"' in render_markdown("# Notes")

    def test_empty_body(self):
        assert render_markdown("") == ""

    def test_converter_failure_raises_render_error(self):
        with patch("pageops.render.markdown.markdown", side_effect=ValueError("boom")):
            with pytest.raises(RenderError) as excinfo:
                render_markdown("text")
        assert "boom" in str(excinfo.value)


class TestSanitizer:
    def test_script_tag_removed(self, markdown_with_script):
        html = render_markdown(markdown_with_script)
        assert "<script" not in html.lower()

    def test_javascript_url_removed(self, markdown_with_script):
        html = render_markdown(markdown_with_script)
        assert "javascript:" not in html.lower()
        assert "click me" in html

    def test_event_handler_attributes_removed(self):
        html = render_markdown('<img src="x.png" onerror="alert(1)">')
        assert "onerror" not in html
        assert "alert" not in html

    def test_safe_links_kept(self):
        html = render_markdown("[home](https://example.com)")
        assert '<a href="https://example.com">home</a>' in html

    def test_iframe_and_style_stripped(self):
        html = sanitize_html('<iframe src="https://evil.example"></iframe><p style="color:red">x</p>')
        assert "<iframe" not in html
        assert "style=" not in html
        assert "<p>x</p>" in html

    def test_malformed_markup_is_sanitized(self):
        """Test that unbalanced tags cannot smuggle a script through."""
        html = render_markdown("<div><script>alert(1)<div></p>")
        assert "<script" not in html.lower()
