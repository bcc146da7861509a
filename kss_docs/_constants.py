"""Common literal values used across kss_docs.

These constants keep comment keywords, delimiters and file masks centralized so
the parser, style guide and traversal layers can import the same values without
drifting. Intended for internal use within the kss_docs package.

Examples
--------
>>> from kss_docs import _constants
>>> _constants.PHRASE_DELIMITER
' - '
>>> "*.scss" in _constants.DEFAULT_MASK
True
"""

REFERENCE_KEYWORD = "styleguide"
DOT_DELIMITER = "."
PHRASE_DELIMITER = " - "
DEFAULT_MASK = "*.css|*.less|*.sass|*.scss|*.styl|*.stylus"
IGNORED_DIRECTORIES = frozenset({".git", ".svn"})
MODIFIER_PLACEHOLDERS = ("{{modifier_class}}", "{$modifiers}")
TEMPLATE_EXTENSIONS = (".html", ".hbs", ".handlebars", ".twig", ".njk", ".liquid")
