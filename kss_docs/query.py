r"""Normalise style guide queries into exact lookups or compiled patterns.

Queries arrive as plain references (``"4.1"``), wildcard patterns
(``"4.x"``, ``"4.1.*"``, ``"Forms - *"``) or pre-compiled regular
expressions. :func:`normalize_query` turns each into one of three tagged
records so :meth:`StyleGuide.sections` dispatches on a single type.

Example
-------
>>> from kss_docs.query import normalize_query
>>> normalize_query("4.1", ".")
ExactQuery(reference='4.1')
>>> normalize_query("4.x", ".").pattern.pattern
'4\\..+?(?=($|\\.))'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from ._constants import DOT_DELIMITER

WILDCARD_PATTERN = re.compile(r"(^[x*]$|\s-\s[x*]$|\.[x*]$)")
_BARE_STAR = re.compile(r"^\*$")
_BARE_X = re.compile(r"^x$")
_TRAILING_STAR = re.compile(r"(\.|\s+-\s+)\*$")
_CHILD_X = re.compile(r"(\.|\s+-\s+)x\b")
_UNESCAPED_DASH = re.compile(r"([^\\])-")


@dc.dataclass(frozen=True, slots=True)
class ExactQuery:
    """Look up a single section by its exact reference."""

    reference: str


@dc.dataclass(frozen=True, slots=True)
class PatternQuery:
    """Match references against a pattern compiled from a wildcard string."""

    source: str
    pattern: re.Pattern[str]


@dc.dataclass(frozen=True, slots=True)
class RegexQuery:
    """Match references against a caller-supplied regular expression."""

    pattern: re.Pattern[str]


Query = ExactQuery | PatternQuery | RegexQuery


def delimiter_pattern(delimiter: str) -> str:
    """Return the escaped regex for the style guide's reference delimiter."""
    return r"\." if delimiter == DOT_DELIMITER else r"\ \-\ "


def compile_wildcard(query: str, delimiter: str) -> re.Pattern[str]:
    """Compile a wildcard reference query into a regular expression.

    ``*`` matches the reference and every descendant, ``x`` matches exactly
    one segment; the first ``.x`` requires one child level and further
    ``.x`` segments make one more level optional.
    """
    delim = delimiter_pattern(delimiter)
    segment = rf".+?(?=($|{delim}))"
    expression = _BARE_STAR.sub(lambda _m: ".+", query)
    expression = _BARE_X.sub(lambda _m: f"^{segment}", expression)
    expression = _TRAILING_STAR.sub(lambda _m: f"({delim}.+){{0,1}}", expression)
    expression = _CHILD_X.sub(lambda _m: f"{delim}{segment}", expression, count=1)
    expression = _CHILD_X.sub(lambda _m: f"({delim}{segment}){{0,1}}", expression)
    expression = _UNESCAPED_DASH.sub(lambda m: f"{m.group(1)}\\-", expression)
    return re.compile(expression)


def normalize_query(query: str | re.Pattern[str], delimiter: str) -> Query:
    """Classify ``query`` as an exact, wildcard or regular-expression query.

    Parameters
    ----------
    query : str or re.Pattern
        A reference, a wildcard reference pattern, or a compiled regex.
    delimiter : str
        The style guide's current reference delimiter (``"."`` or ``" - "``).

    Returns
    -------
    Query
        The tagged query record.

    Raises
    ------
    TypeError
        If ``query`` is neither a string nor a compiled pattern.
    """
    match query:
        case re.Pattern():
            return RegexQuery(pattern=typ.cast("re.Pattern[str]", query))
        case str() if "*" in query or WILDCARD_PATTERN.search(query):
            return PatternQuery(source=query, pattern=compile_wildcard(query, delimiter))
        case str():
            return ExactQuery(reference=query)
        case _:
            msg = f"Unsupported section query type: {type(query).__name__}"
            raise TypeError(msg)


def matches_reference(pattern: re.Pattern[str], reference: str) -> bool:
    """Return whether the first match of ``pattern`` spans the whole reference."""
    match = pattern.search(reference)
    return match is not None and match.group(0) == reference


__all__ = [
    "ExactQuery",
    "PatternQuery",
    "Query",
    "RegexQuery",
    "compile_wildcard",
    "delimiter_pattern",
    "matches_reference",
    "normalize_query",
]
