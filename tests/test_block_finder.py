"""Unit tests for comment block detection.

These tests cover the three comment dialects recognised by
``kss_docs.block_finder.find_blocks``: runs of ``//`` comments, ``/** */``
docblocks and plain ``/* */`` blocks. They also check line numbers, line
ending normalisation, and that delimiters embedded in code are ignored.

Usage
-----
Run ``pytest tests/test_block_finder.py -v``. No fixtures are required.
"""

from __future__ import annotations

from kss_docs.block_finder import find_block_texts, find_blocks


def test_single_line_run_is_one_block() -> None:
    source = "// Button\n//\n// Styleguide 1.1\n.button { color: red; }\n"
    assert find_block_texts(source) == ["Button\n\nStyleguide 1.1"]


def test_blank_line_splits_single_line_runs() -> None:
    assert find_block_texts("// First\n\n// Second\n") == ["First", "Second"]


def test_docblock_strips_leading_stars() -> None:
    source = "/**\n * Title\n *\n * Styleguide 1\n */\n"
    assert find_block_texts(source) == ["Title\n\nStyleguide 1"]


def test_multi_line_block_removes_first_line_indent() -> None:
    source = "/*\n    Title\n\n    Nested\n      deeper\n\n    Styleguide 1\n*/\n"
    assert find_block_texts(source) == [
        "Title\n\nNested\n  deeper\n\nStyleguide 1"
    ]


def test_inline_delimiters_do_not_open_blocks() -> None:
    source = '.a { content: "/*"; }\n/* inline comment */\n.b {}\n'
    assert find_blocks(source) == []


def test_blocks_record_line_numbers_and_raw_text() -> None:
    source = ".a {}\n\n// Title\n//\n// Styleguide 2\n"
    [block] = find_blocks(source)
    assert block.line == 3, "expected the block to start on the third line"
    assert block.raw == "// Title\n//\n// Styleguide 2\n"


def test_windows_line_endings_are_normalised() -> None:
    assert find_block_texts("// A\r\n// B\r\n") == ["A\nB"]


def test_unterminated_block_with_content_is_returned() -> None:
    assert find_block_texts("/*\nTitle") == ["Title"]


def test_empty_comments_are_skipped() -> None:
    assert find_blocks("//\n//\n.a {}\n/*\n*/\n") == []


def test_all_three_dialects_in_one_source() -> None:
    source = (
        "// Line comment\n"
        "//\n"
        "// Styleguide 1\n"
        ".a {}\n"
        "/**\n"
        " * Docblock\n"
        " *\n"
        " * Styleguide 2\n"
        " */\n"
        ".b {}\n"
        "/*\n"
        "  Plain block\n"
        "\n"
        "  Styleguide 3\n"
        "*/\n"
        ".c {}\n"
    )
    blocks = find_blocks(source)
    assert [block.text for block in blocks] == [
        "Line comment\n\nStyleguide 1",
        "Docblock\n\nStyleguide 2",
        "Plain block\n\nStyleguide 3",
    ]
    assert [block.line for block in blocks] == [1, 5, 11]
