"""Aggregate parsed sections into an ordered, queryable style guide.

The :class:`StyleGuide` owns every :class:`~kss_docs.models.Section`, keeps
them sorted by reference (honouring per-prefix weights and numeric segment
order), recomputes depths when the reference delimiter switches from ``.`` to
``" - "``, and assigns auto-incremented reference numbers to word-based style
guides.

Example
-------
>>> from kss_docs.styleguide import StyleGuide
>>> guide = StyleGuide([{"reference": "1.2"}, {"reference": "1.10"}, {"reference": "1"}])
>>> [section.reference for section in guide.sections()]
['1', '1.2', '1.10']
>>> guide.sections("1.x")[0].reference
'1.2'
"""

from __future__ import annotations

import collections.abc as cabc
import functools
import logging
import re
import typing as typ

from ._constants import DOT_DELIMITER, PHRASE_DELIMITER
from .models import Section
from .query import ExactQuery, PatternQuery, RegexQuery, matches_reference, normalize_query

logger = logging.getLogger(__name__)

NUMERIC_REFERENCE_PATTERN = re.compile(r"^[.\d]+$")
NUMERIC_SEGMENT_PATTERN = re.compile(r"^\d+$")

SectionInput = Section | cabc.Mapping[str, typ.Any]


class StyleGuide:
    """An ordered collection of sections with hierarchical queries.

    Sections are only ever added; each addition marks the sort order, depths
    and auto-incremented reference numbers as stale, and :meth:`init`
    recomputes whatever is stale. ``init`` runs after every batch unless
    auto-initialisation is turned off.
    """

    def __init__(
        self,
        sections: SectionInput | cabc.Iterable[SectionInput] | None = None,
        *,
        files: cabc.Iterable[str] = (),
        custom_property_names: str | cabc.Iterable[str] = (),
        auto_init: bool = True,
    ) -> None:
        """Create a style guide from section objects or section mappings.

        Parameters
        ----------
        sections : Section, mapping, or iterable of either, optional
            Initial sections to add.
        files : iterable of str, optional
            Paths of the files the sections were parsed from.
        custom_property_names : str or iterable of str, optional
            Custom property names to carry into :meth:`to_json`.
        auto_init : bool, optional
            When ``False``, :meth:`init` must be called after adding sections
            before the sort order, depths and reference numbers are reliable.
        """
        self.files: list[str] = list(files)
        self._sections: list[Section] = []
        self._custom_property_names: list[str] = []
        self._reference_map: dict[str, Section] = {}
        self._weight_map: dict[str, float] = {}
        self._reference_delimiter = DOT_DELIMITER
        self._has_numeric_references = True
        self._auto_init = False
        self.needs_sort = False
        self.needs_depth = False
        self.needs_reference_number = False

        self.custom_property_names(custom_property_names)
        if sections is not None:
            self.add_sections(sections)
        self._auto_init = auto_init
        if auto_init:
            self.init()

    @classmethod
    def from_json(cls, payload: cabc.Mapping[str, typ.Any]) -> StyleGuide:
        """Rebuild a style guide from a :meth:`to_json` payload."""
        return cls(
            payload.get("sections", ()),
            files=payload.get("files", ()),
            custom_property_names=payload.get("customPropertyNames", ()),
        )

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> cabc.Iterator[Section]:
        return iter(self._sections)

    @property
    def reference_delimiter(self) -> str:
        """Return ``"."`` or, once any phrase reference was added, ``" - "``."""
        return self._reference_delimiter

    @property
    def has_numeric_references(self) -> bool:
        """Return whether every reference so far is purely numeric."""
        return self._has_numeric_references

    @property
    def reference_map(self) -> cabc.Mapping[str, Section]:
        """Return the exact-reference index."""
        return self._reference_map

    @property
    def weight_map(self) -> cabc.Mapping[str, float]:
        """Return the lower-cased reference to weight index."""
        return self._weight_map

    def auto_init(self, enabled: bool) -> StyleGuide:
        """Toggle auto-initialisation, running :meth:`init` when enabling."""
        self._auto_init = bool(enabled)
        if self._auto_init:
            self.init()
        return self

    def custom_property_names(
        self, names: str | cabc.Iterable[str] | None = None
    ) -> list[str]:
        """Record custom property names (deduplicated) and return them all."""
        if names is not None:
            for name in [names] if isinstance(names, str) else names:
                if name not in self._custom_property_names:
                    self._custom_property_names.append(name)
        return list(self._custom_property_names)

    def add_sections(
        self, sections: SectionInput | cabc.Iterable[SectionInput]
    ) -> StyleGuide:
        """Add one or more sections and invalidate the derived state.

        Returns
        -------
        StyleGuide
            ``self``, to allow chaining.
        """
        if isinstance(sections, Section | cabc.Mapping):
            sections = [sections]
        for item in sections:
            self._add_section(
                item if isinstance(item, Section) else Section.from_mapping(item)
            )
        if self._auto_init:
            self.init()
        return self

    def _add_section(self, section: Section) -> None:
        original_delimiter = self._reference_delimiter
        reference = section.reference
        section.style_guide = self

        self._has_numeric_references = self._has_numeric_references and bool(
            NUMERIC_REFERENCE_PATTERN.match(reference)
        )
        self._reference_map[reference] = section
        self._weight_map[reference.lower()] = section.weight
        if PHRASE_DELIMITER in reference:
            self._reference_delimiter = PHRASE_DELIMITER
        self._sections.append(section)

        if original_delimiter != self._reference_delimiter:
            logger.debug(
                "Reference %r switched the delimiter to %r",
                reference,
                self._reference_delimiter,
            )
            self.needs_depth = True
        else:
            section.depth = len(reference.split(self._reference_delimiter))
        if not self._has_numeric_references:
            self.needs_reference_number = True
        self.needs_sort = True

    def init(self) -> StyleGuide:
        """Recompute depths, sort order and reference numbers that are stale.

        Returns
        -------
        StyleGuide
            ``self``, to allow chaining.
        """
        if not self._sections:
            return self
        if self.needs_depth:
            for section in self._sections:
                section.depth = len(section.reference.split(self._reference_delimiter))
            self.needs_depth = False
        if self.needs_sort:
            self._sections.sort(key=functools.cmp_to_key(self._compare_sections))
            self.needs_sort = False
        if self.needs_reference_number:
            self._assign_reference_numbers()
            self.needs_reference_number = False
        return self

    def _weight(self, reference: str, depth: int) -> float:
        """Return the weight registered for ``reference`` truncated to ``depth``."""
        delimiter = self._reference_delimiter
        prefix = delimiter.join(reference.lower().split(delimiter)[:depth])
        return self._weight_map.get(prefix) or 0

    def _compare_sections(self, a: Section, b: Section) -> int:
        delimiter = self._reference_delimiter
        refs_a = a.reference.lower().split(delimiter)
        refs_b = b.reference.lower().split(delimiter)
        for index in range(max(len(refs_a), len(refs_b))):
            chunk_a = refs_a[index] if index < len(refs_a) else ""
            chunk_b = refs_b[index] if index < len(refs_b) else ""
            if not (chunk_a and chunk_b):
                # The shorter reference is the ancestor and sorts first.
                return 1 if chunk_a else -1
            if chunk_a == chunk_b:
                continue
            weight_a = self._weight(a.reference, index + 1)
            weight_b = self._weight(b.reference, index + 1)
            if weight_a != weight_b:
                return -1 if weight_a < weight_b else 1
            if NUMERIC_SEGMENT_PATTERN.match(chunk_a) and NUMERIC_SEGMENT_PATTERN.match(
                chunk_b
            ):
                return int(chunk_a) - int(chunk_b)
            return 1 if chunk_a > chunk_b else -1
        return 0

    def _assign_reference_numbers(self) -> None:
        """Number word-based references so that sibling order is preserved."""
        delimiter = self._reference_delimiter
        auto_increment = [0]
        previous: list[str] = []
        for section in self._sections:
            segments = section.reference.split(delimiter)
            if segments != previous:
                increment_index = 0
                for index, segment in enumerate(previous):
                    if index >= len(segments) or segment != segments[index]:
                        break
                    increment_index = index + 1
                if increment_index < len(auto_increment):
                    auto_increment[increment_index] += 1
                    del auto_increment[increment_index + 1 :]
                auto_increment.extend([1] * (len(segments) - len(auto_increment)))
            section.reference_number = ".".join(str(part) for part in auto_increment)
            previous = segments

    def sections(
        self, query: str | re.Pattern[str] | None = None
    ) -> Section | list[Section] | None:
        """Return sections matching ``query`` in sort order.

        * ``sections()`` returns every section.
        * ``sections("2")`` returns section 2, or ``None`` if it does not exist.
        * ``sections("2.*")`` returns section 2 and all of its descendants.
        * ``sections("2.x")`` returns the children of section 2 only.
        * ``sections("2.x.x")`` returns its children and grandchildren.
        * ``sections(re.compile(r"2\\.[1-5]"))`` returns sections whose whole
          reference matches the expression.

        Pattern queries always return a list, which may be empty.
        """
        if query is None:
            return list(self._sections)
        match normalize_query(query, self._reference_delimiter):
            case ExactQuery(reference=reference):
                return self._reference_map.get(reference)
            case PatternQuery(pattern=pattern) | RegexQuery(pattern=pattern):
                return [
                    section
                    for section in self._sections
                    if matches_reference(pattern, section.reference)
                ]
        return []

    def to_json(self) -> dict[str, typ.Any]:
        """Return a JSON-serialisable representation of the whole style guide."""
        names = self.custom_property_names()
        return {
            "customPropertyNames": names,
            "hasNumericReferences": self._has_numeric_references,
            "referenceDelimiter": self._reference_delimiter,
            "files": list(self.files),
            "sections": [section.to_json(names) for section in self._sections],
        }


__all__ = ["StyleGuide"]
