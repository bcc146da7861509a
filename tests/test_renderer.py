"""Tests for Markdown rendering of section descriptions.

The assertions parse the generated HTML with BeautifulSoup so they do not
depend on Python-Markdown's exact whitespace.

Usage
-----
Run ``pytest tests/test_renderer.py -v``. No fixtures are required.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from kss_docs.renderer import MarkdownRenderer


def test_fenced_code_is_highlighted_with_language_metadata() -> None:
    renderer = MarkdownRenderer()
    html = renderer.render("Usage:\n\n  ```scss\n  .btn { color: red; }\n  ```\n")
    soup = BeautifulSoup(html, "html.parser")
    block = soup.select_one("div.codehilite")
    assert block is not None, "expected a highlighted code block"
    assert block.get("data-language") == "scss"
    assert ".btn" in block.get_text()


def test_inline_rendering_drops_single_paragraph() -> None:
    renderer = MarkdownRenderer()
    assert renderer.render_inline("Hello *there*") == "Hello <em>there</em>"
    two_paragraphs = renderer.render_inline("First\n\nSecond")
    assert two_paragraphs.count("<p>") == 2


def test_blank_input_renders_empty() -> None:
    assert MarkdownRenderer().render("  \n") == ""


def test_raw_html_passes_through() -> None:
    html = MarkdownRenderer().render('<div class="note">Kept</div>')
    soup = BeautifulSoup(html, "html.parser")
    assert soup.select_one("div.note").get_text() == "Kept"
