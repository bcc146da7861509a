"""Shared fixtures for the kss_docs test suite.

The fixtures here write small, documented stylesheets into pytest's
``tmp_path`` so parser, traversal, and CLI tests exercise real files without
relying on anything outside the test run.

Usage
-----
Request ``styles_dir`` to get a directory laid out as::

    styles/
      buttons.less          sections 2, 2.1 and 2.2
      sub/forms.scss        sections 1 and 1.1
      notes.txt             documented, but excluded by the default mask
      .git/ignored.css      documented, but inside an ignored directory
"""

from __future__ import annotations

import typing as typ

import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path

BUTTONS_LESS = """\
// Buttons
//
// Clickable controls.
//
// Styleguide 2

// Primary button
//
// The main call to action.
//
// Markup: <button class="btn {{modifier_class}}">Go</button>
//
// :hover   - Highlight on hover.
// .primary - Emphasised variant.
//
// Styleguide 2.1
.btn { color: red; }

// Link button
//
// Styleguide 2.2
.btn-link { color: blue; }
"""

FORMS_SCSS = """\
/**
 * Forms
 *
 * Form controls.
 *
 * Styleguide 1
 */

/*
  Text input

  $size = 12px - Input width.

  Styleguide 1.1
*/
.input { width: $size; }
"""

WORD_REFERENCES = """\
// Buttons
//
// Styleguide Forms - Buttons

// Forms
//
// Styleguide Forms

// Base
//
// Styleguide Base
"""


@pytest.fixture
def styles_dir(tmp_path: Path) -> Path:
    """Return a directory of documented stylesheets plus files to be ignored."""
    root = tmp_path / "styles"
    (root / "sub").mkdir(parents=True)
    (root / ".git").mkdir()
    (root / "buttons.less").write_text(BUTTONS_LESS, encoding="utf-8")
    (root / "sub" / "forms.scss").write_text(FORMS_SCSS, encoding="utf-8")
    (root / "notes.txt").write_text(
        "// Notes\n//\n// Styleguide 8\n", encoding="utf-8"
    )
    (root / ".git" / "ignored.css").write_text(
        "// Ignored\n//\n// Styleguide 9\n", encoding="utf-8"
    )
    return root


@pytest.fixture
def word_references() -> str:
    """Return stylesheet text whose sections use word references."""
    return WORD_REFERENCES


@pytest.fixture
def buttons_less() -> str:
    """Return the documented LESS source used for sections 2, 2.1 and 2.2."""
    return BUTTONS_LESS
