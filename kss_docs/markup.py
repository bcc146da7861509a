"""Resolve section markup that points at template files.

A section's ``Markup:`` property may hold inline HTML or the name of a
template file (``buttons.html``). Template files are looked up beside the
stylesheet the section came from and then in each source directory; a sibling
``<stem>.json`` file provides sample data for rendering. Missing or malformed
sample data falls back to an empty mapping.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import json
import logging
import typing as typ
from pathlib import Path

from ._constants import TEMPLATE_EXTENSIONS

if typ.TYPE_CHECKING:
    from .models import Section

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class ResolvedMarkup:
    """Markup ready for a template engine.

    Attributes
    ----------
    template : str
        Inline markup or the contents of the referenced template file.
    path : Path | None
        Location of the template file, or ``None`` for inline markup.
    context : dict[str, Any]
        Sample data loaded from the sibling JSON file.
    """

    template: str
    path: Path | None = None
    context: dict[str, typ.Any] = dc.field(default_factory=dict)


def is_template_reference(markup: str | None) -> bool:
    """Return whether ``markup`` names a template file rather than inline HTML."""
    if not markup:
        return False
    candidate = markup.strip()
    return (
        len(candidate.split()) == 1
        and "<" not in candidate
        and candidate.lower().endswith(TEMPLATE_EXTENSIONS)
    )


def load_sample_data(template_path: Path) -> dict[str, typ.Any]:
    """Load ``<stem>.json`` beside ``template_path``; ``{}`` when unusable."""
    data_path = template_path.with_suffix(".json")
    if not data_path.is_file():
        return {}
    try:
        loaded = json.loads(data_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.debug("Ignoring unreadable sample data %s: %s", data_path, exc)
        return {}
    return loaded if isinstance(loaded, dict) else {}


def _candidate_paths(
    name: str, section: Section, source_dirs: cabc.Iterable[Path]
) -> list[Path]:
    candidates: list[Path] = []
    if section.source.path:
        candidates.append(Path(section.source.path).parent / name)
    candidates.extend(Path(directory) / name for directory in source_dirs)
    return candidates


def resolve_markup(
    section: Section, source_dirs: cabc.Iterable[Path] = ()
) -> ResolvedMarkup | None:
    """Return the markup for ``section`` with any template file loaded.

    Returns ``None`` when the section has no markup. Template names that
    cannot be found are returned unchanged as inline markup.
    """
    markup = section.markup
    if not markup:
        return None
    if not is_template_reference(markup):
        return ResolvedMarkup(template=markup)
    name = markup.strip()
    for candidate in _candidate_paths(name, section, source_dirs):
        if candidate.is_file():
            return ResolvedMarkup(
                template=candidate.read_text(encoding="utf-8"),
                path=candidate,
                context=load_sample_data(candidate),
            )
    logger.debug("Template %s for section %s not found", name, section.reference)
    return ResolvedMarkup(template=markup)


__all__ = [
    "ResolvedMarkup",
    "is_template_reference",
    "load_sample_data",
    "resolve_markup",
]
