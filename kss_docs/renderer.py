"""Render KSS descriptions from Markdown into HTML.

Section descriptions are rendered as block-level HTML; modifier and parameter
descriptions use :meth:`MarkdownRenderer.render_inline`, which drops the
wrapping paragraph so the result can sit inside a table cell or list item.
Raw HTML embedded in comments passes through untouched.
"""

from __future__ import annotations

import re
from html import escape

from markdown import Markdown

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
WRAPPING_PARAGRAPH = re.compile(r"\A<p>(.*)</p>\Z", re.DOTALL)


class MarkdownRenderer:
    """Render Markdown with syntax-highlighted fenced code."""

    def __init__(self, pygments_style: str = "default") -> None:
        """Initialize a renderer with an optional pygments style.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for highlighted code blocks.
            Defaults to ``"default"``.
        """
        self.pygments_style = pygments_style
        self._md = Markdown(
            extensions=["fenced_code", "codehilite", "tables", "sane_lists"],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": pygments_style,
                }
            },
        )

    def render(self, text: str) -> str:
        """Render ``text`` into block-level HTML; blank input gives ``""``."""
        normalized = FENCED_INDENT_PATTERN.sub(r"\1", text or "")
        if not normalized.strip():
            return ""
        html = self._md.reset().convert(normalized)
        return self._annotate_codehilite(html, normalized)

    def render_inline(self, text: str) -> str:
        """Render ``text`` without the ``<p>`` element wrapping a single paragraph."""
        html = self.render(text)
        match = WRAPPING_PARAGRAPH.match(html)
        if match and "<p>" not in match.group(1):
            return match.group(1)
        return html

    @staticmethod
    def _annotate_codehilite(html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))


__all__ = ["MarkdownRenderer"]
