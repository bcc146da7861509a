"""Parse KSS documentation comments out of stylesheets into a style guide.

This package finds KSS comment blocks in CSS, LESS, SASS, SCSS and Stylus
sources, turns each block carrying a ``Styleguide`` reference into a
:class:`Section`, and collects the sections into an ordered, queryable
:class:`StyleGuide`. The ``kss`` console script wraps the same API.

Exports
-------
- ``parse``: Parse source strings or mappings into a style guide.
- ``traverse``: Walk directories for stylesheets and parse them.
- ``StyleGuide``, ``Section``, ``Modifier``, ``Parameter``: Result types.
- ``ParseOptions``: Parser flags (Markdown, multiline, typos, custom).
- ``app``/``main``: Cyclopts application entry points.

The :mod:`kss_docs.markup` module is imported on demand by builders: its
``resolve_markup`` loads template files named by a section's ``Markup:``
property together with their ``<stem>.json`` sample data.

Examples
--------
>>> from kss_docs import parse
>>> guide = parse("// Buttons\\n//\\n// Styleguide 1", {"markdown": False})
>>> guide.sections("1").header
'Buttons'
"""

from __future__ import annotations

from .block_finder import find_blocks
from .cli import app, main
from .config import ParseOptions
from .models import Modifier, Parameter, Section
from .parser import NoSectionsFoundError, parse
from .styleguide import StyleGuide
from .traverse import traverse

__all__ = [
    "Modifier",
    "NoSectionsFoundError",
    "Parameter",
    "ParseOptions",
    "Section",
    "StyleGuide",
    "app",
    "find_blocks",
    "main",
    "parse",
    "traverse",
]
