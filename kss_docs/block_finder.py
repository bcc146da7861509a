r"""Locate documentation comment blocks inside stylesheet source text.

Three comment dialects are recognised: runs of ``//`` line comments, ``/** */``
docblocks whose interior lines carry a leading ``*``, and plain ``/* */``
blocks whose indentation is normalised against their first non-blank line.
Only lines that consist entirely of an opening or closing delimiter change
state, so ``/*`` inside a CSS string never opens a block.

Example
-------
>>> from kss_docs.block_finder import find_block_texts
>>> find_block_texts("// Button\n//\n// Styleguide 1.1\n.button {}\n")
['Button\n\nStyleguide 1.1']
"""

from __future__ import annotations

import dataclasses as dc
import enum
import re

SINGLE_LINE_PATTERN = re.compile(r"^\s*//.*$")
DOCBLOCK_START_PATTERN = re.compile(r"^\s*/\*\*\s*$")
MULTI_START_PATTERN = re.compile(r"^\s*/\*+\s*$")
MULTI_FINISH_PATTERN = re.compile(r"^\s*\*/\s*$")
SINGLE_MARKER_PATTERN = re.compile(r"^\s*//\s?")
DOCBLOCK_MARKER_PATTERN = re.compile(r"^\s*\*\s?")
LEADING_SPACE_PATTERN = re.compile(r"^\s*")


class _State(enum.Enum):
    IDLE = "idle"
    SINGLE = "single-line-run"
    DOCBLOCK = "doc-block"
    MULTI = "multi-block"


@dc.dataclass(slots=True)
class CommentBlock:
    """One contiguous documentation comment.

    Attributes
    ----------
    text : str
        Comment body with markers and common indentation removed; leading and
        trailing blank lines are trimmed.
    raw : str
        The comment exactly as it appeared (trailing whitespace removed).
    line : int
        1-based line number of the first line of the comment.
    """

    text: str = ""
    raw: str = ""
    line: int = 0


class _BlockCollector:
    """Accumulate lines for the block currently being scanned."""

    def __init__(self) -> None:
        self.blocks: list[CommentBlock] = []
        self._text: list[str] = []
        self._raw: list[str] = []
        self._line = 0

    def start(self, line_number: int) -> None:
        self._line = line_number

    def add(self, raw_line: str, text_line: str | None) -> None:
        self._raw.append(raw_line)
        if text_line is not None:
            self._text.append(text_line)

    def emit(self) -> None:
        text = "\n".join(self._text).strip("\n")
        if text or self._raw:
            self.blocks.append(
                CommentBlock(
                    text=text,
                    raw="".join(f"{line}\n" for line in self._raw),
                    line=self._line,
                )
            )
        self._text = []
        self._raw = []
        self._line = 0


def normalize_newlines(text: str) -> str:
    """Convert Windows and classic Mac line endings to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def find_blocks(source: str) -> list[CommentBlock]:
    """Return every comment block in ``source`` in order of appearance.

    Parameters
    ----------
    source : str
        Stylesheet source text in any line-ending convention.

    Returns
    -------
    list[CommentBlock]
        Blocks with comment syntax stripped. A block still open at the end of
        the input is returned only when it has content.
    """
    collector = _BlockCollector()
    state = _State.IDLE
    indent: str | None = None

    lines = normalize_newlines(source).split("\n")
    # A trailing empty line flushes a line-comment run at the end of input.
    lines.append("")
    for index, original in enumerate(lines, start=1):
        line = original.rstrip()

        if state in (_State.IDLE, _State.SINGLE) and SINGLE_LINE_PATTERN.match(line):
            if state is _State.IDLE:
                collector.start(index)
                state = _State.SINGLE
            collector.add(line, SINGLE_MARKER_PATTERN.sub("", line, count=1))
            continue

        if state is _State.SINGLE:
            collector.emit()
            state = _State.IDLE
        elif state in (_State.DOCBLOCK, _State.MULTI) and MULTI_FINISH_PATTERN.match(
            line
        ):
            collector.add(line, None)
            collector.emit()
            state = _State.IDLE
            indent = None
            continue

        if state is _State.DOCBLOCK:
            collector.add(line, DOCBLOCK_MARKER_PATTERN.sub("", line, count=1))
            continue

        if state is _State.MULTI:
            if indent is None:
                if not line:
                    collector.add(line, None)
                    continue
                indent = LEADING_SPACE_PATTERN.match(line).group(0)
            text_line = line[len(indent) :] if line.startswith(indent) else line
            collector.add(line, text_line)
            continue

        if DOCBLOCK_START_PATTERN.match(line):
            state = _State.DOCBLOCK
            collector.start(index)
            collector.add(line, None)
        elif MULTI_START_PATTERN.match(line):
            state = _State.MULTI
            collector.start(index)
            collector.add(line, None)

    if state in (_State.DOCBLOCK, _State.MULTI):
        collector.emit()
    return [block for block in collector.blocks if block.text]


def find_block_texts(source: str) -> list[str]:
    """Return only the cleaned text of each block found in ``source``."""
    return [block.text for block in find_blocks(source)]


__all__ = [
    "CommentBlock",
    "find_block_texts",
    "find_blocks",
    "normalize_newlines",
]
