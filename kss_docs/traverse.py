"""Collect stylesheet files from directories and parse them into a style guide.

Directories are walked recursively (version-control folders are skipped),
files are filtered by a glob-style mask such as ``*.css|*.scss``, and the
contents are handed to :func:`kss_docs.parser.parse` in sorted path order so
the resulting style guide does not depend on filesystem iteration order.

Example
-------
>>> from kss_docs.traverse import traverse
>>> guide = traverse("styles", {"mask": "*.scss"})  # doctest: +SKIP
>>> guide.files  # doctest: +SKIP
['styles/buttons.scss', 'styles/forms.scss']
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import os
import re
import typing as typ
from pathlib import Path

from ._constants import IGNORED_DIRECTORIES
from .config import ParseOptions
from .parser import SourceFile, parse

if typ.TYPE_CHECKING:
    from .styleguide import StyleGuide

logger = logging.getLogger(__name__)

StyleGuideCallback = typ.Callable[["StyleGuide"], object]


def compile_mask(mask: str | re.Pattern[str]) -> re.Pattern[str]:
    """Turn a mask like ``*.css|*.less`` into a pattern matched against paths.

    >>> compile_mask("*.css|*.less").search("styles/base.less") is not None
    True
    """
    if isinstance(mask, re.Pattern):
        return mask
    expression = mask.replace(".", r"\.").replace("*", ".*")
    return re.compile(f"(?:{expression})$")


def collect_files(
    directories: str | os.PathLike[str] | cabc.Iterable[str | os.PathLike[str]],
    mask: str | re.Pattern[str],
) -> list[SourceFile]:
    """Return every file under ``directories`` whose path matches ``mask``.

    Files are returned sorted by path, with contents read as UTF-8.
    """
    if isinstance(directories, str | os.PathLike):
        directories = [directories]
    pattern = compile_mask(mask)
    found: list[tuple[Path, Path]] = []
    for directory in directories:
        root = Path(os.path.normpath(directory))
        for current, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(
                name for name in dirnames if name not in IGNORED_DIRECTORIES
            )
            for filename in filenames:
                path = Path(current) / filename
                if pattern.search(str(path)):
                    found.append((path, root))
    found.sort(key=lambda item: str(item[0]))
    logger.debug("Found %d stylesheet(s) matching %s", len(found), pattern.pattern)
    return [
        SourceFile(
            contents=path.read_text(encoding="utf-8"),
            path=str(path),
            base=str(root),
        )
        for path, root in found
    ]


def traverse(
    directories: str | os.PathLike[str] | cabc.Iterable[str | os.PathLike[str]],
    options: ParseOptions | cabc.Mapping[str, typ.Any] | None = None,
    *,
    callback: StyleGuideCallback | None = None,
) -> StyleGuide:
    """Parse every matching stylesheet under ``directories``.

    Parameters
    ----------
    directories : path or iterable of paths
        Directories to walk recursively.
    options : ParseOptions or mapping, optional
        Parsing options; ``mask`` selects which files are read.
    callback : callable, optional
        Invoked with the finished style guide before it is returned.

    Returns
    -------
    StyleGuide
        Style guide built from every matching file.

    Raises
    ------
    TypeError
        If ``callback`` is given but is not callable. Checked before any
        file is read.
    NoSectionsFoundError
        If none of the files contain documented sections.
    """
    if callback is not None and not callable(callback):
        msg = "traverse() callback must be callable."
        raise TypeError(msg)
    parse_options = ParseOptions.coerce(options)
    files = collect_files(directories, parse_options.mask)
    style_guide = parse(files, parse_options)
    if callback is not None:
        callback(style_guide)
    return style_guide


__all__ = ["collect_files", "compile_mask", "traverse"]
