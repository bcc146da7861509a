"""Section, modifier and parameter records produced by the KSS parser.

A :class:`Section` is created once per documented comment block and is then
owned by a single :class:`~kss_docs.styleguide.StyleGuide`. Modifiers and
parameters belong to their section; their ``section`` attribute is a lookup
handle back to the owner and does not imply ownership.
"""

from __future__ import annotations

import collections.abc as cabc
import math
import dataclasses as dc
import re
import typing as typ
from urllib.parse import quote

from ._constants import MODIFIER_PLACEHOLDERS

if typ.TYPE_CHECKING:
    from .styleguide import StyleGuide

_URI_UNSAFE = re.compile(r"[^\w-]+")
_PHRASE_SEPARATOR = re.compile(r" - ")
_WHITESPACE = re.compile(r"\s")


def encode_reference_uri(reference: str) -> str:
    """Return a URL-safe slug for ``reference``.

    >>> encode_reference_uri("Base - Buttons.Primary")
    'base-buttons-primary'
    """
    slug = _URI_UNSAFE.sub("-", _PHRASE_SEPARATOR.sub("-", reference)).lower()
    return quote(slug, safe="-_")


def pseudo_class_name(name: str) -> str:
    """Return ``name`` with ``:`` pseudo-classes rewritten as CSS classes."""
    return name.replace(":", ".pseudo-class-")


def to_weight(value: float | str | None) -> float:
    """Return ``value`` as a finite number, or ``0`` when missing or invalid.

    >>> to_weight(" -2.5 "), to_weight("heavy"), to_weight(float("nan"))
    (-2.5, 0, 0)
    """
    if value is None:
        return 0
    try:
        weight = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return 0
    return weight if math.isfinite(weight) else 0


@dc.dataclass(slots=True)
class SectionSource:
    """Where a section's comment block was found."""

    filename: str = ""
    path: str = ""
    line: int = 0


@dc.dataclass(slots=True, eq=False)
class Modifier:
    """A CSS modifier (class, pseudo-class or element) documented for a section.

    Attributes
    ----------
    name : str
        Selector as written, e.g. ``":hover"`` or ``".red"``.
    description : str
        Description, rendered as inline HTML when Markdown is enabled.
    section : Section | None
        Non-owning handle to the section that lists this modifier.
    """

    name: str = ""
    description: str = ""
    class_name_override: str = ""
    section: Section | None = dc.field(default=None, repr=False)

    @property
    def class_name(self) -> str:
        """Return the selector-safe name, e.g. ``.pseudo-class-hover``."""
        return self.class_name_override or pseudo_class_name(self.name)

    @property
    def class_names(self) -> str:
        """Return the space-separated classes to apply to markup."""
        first_selector = _WHITESPACE.split(self.class_name.strip(), maxsplit=1)[0]
        return first_selector.replace(".", " ").strip()

    @property
    def markup(self) -> str:
        """Return the owning section's markup with the modifier classes applied."""
        if self.section is None or not self.section.markup:
            return ""
        markup = self.section.markup
        for placeholder in MODIFIER_PLACEHOLDERS:
            markup = markup.replace(placeholder, self.class_names)
        return markup

    def to_json(self) -> dict[str, str]:
        """Return a JSON-serialisable representation."""
        return {
            "name": self.name,
            "description": self.description,
            "className": self.class_name,
        }


@dc.dataclass(slots=True, eq=False)
class Parameter:
    """A template parameter documented for a section without markup."""

    name: str = ""
    description: str = ""
    default_value: str = ""
    section: Section | None = dc.field(default=None, repr=False)

    def to_json(self) -> dict[str, str]:
        """Return a JSON-serialisable representation."""
        return {
            "name": self.name,
            "defaultValue": self.default_value,
            "description": self.description,
        }


class Section:
    """One parsed documentation block identified by its style guide reference."""

    __slots__ = (
        "_custom",
        "_depth",
        "_reference_number",
        "deprecated",
        "description",
        "experimental",
        "header",
        "markup",
        "modifiers",
        "parameters",
        "raw",
        "reference",
        "source",
        "style_guide",
        "weight",
    )

    def __init__(
        self,
        *,
        reference: str,
        header: str = "",
        description: str = "",
        markup: str | None = None,
        modifiers: cabc.Iterable[Modifier] = (),
        parameters: cabc.Iterable[Parameter] = (),
        weight: float | str = 0,
        deprecated: bool = False,
        experimental: bool = False,
        custom: cabc.Mapping[str, str] | None = None,
        source: SectionSource | None = None,
        raw: str = "",
        depth: int | None = None,
        reference_number: str = "",
    ) -> None:
        """Store parsed fields and attach modifiers/parameters to this section."""
        self.reference = reference
        self.header = header
        self.description = description
        self.markup = markup or None
        self.weight = to_weight(weight)
        self.deprecated = bool(deprecated)
        self.experimental = bool(experimental)
        self.source = source or SectionSource()
        self.raw = raw
        self.style_guide: StyleGuide | None = None
        self._custom = {key.lower(): value for key, value in (custom or {}).items()}
        self._depth = depth
        self._reference_number = reference_number
        self.modifiers: list[Modifier] = []
        for modifier in modifiers:
            modifier.section = self
            self.modifiers.append(modifier)
        self.parameters: list[Parameter] = []
        for parameter in parameters:
            parameter.section = self
            self.parameters.append(parameter)

    def __repr__(self) -> str:
        return f"Section(reference={self.reference!r}, header={self.header!r})"

    @classmethod
    def from_mapping(cls, data: cabc.Mapping[str, typ.Any]) -> Section:
        """Build a section from parsed data or a ``to_json()`` payload."""
        known = {
            "reference",
            "header",
            "description",
            "markup",
            "modifiers",
            "parameters",
            "weight",
            "deprecated",
            "experimental",
            "depth",
            "referenceNumber",
            "referenceURI",
            "source",
            "raw",
        }
        nested = data.get("custom")
        custom = dict(nested) if isinstance(nested, cabc.Mapping) else {}
        custom.update(
            (key, value) for key, value in data.items() if key not in known | {"custom"}
        )
        source = data.get("source")
        if isinstance(source, cabc.Mapping):
            source = SectionSource(
                filename=str(source.get("filename", "")),
                path=str(source.get("path", "")),
                line=int(source.get("line", 0) or 0),
            )
        return cls(
            reference=str(data.get("reference", "")),
            header=str(data.get("header", "")),
            description=str(data.get("description", "")),
            markup=data.get("markup") or None,
            modifiers=[_coerce_modifier(item) for item in data.get("modifiers", ())],
            parameters=[_coerce_parameter(item) for item in data.get("parameters", ())],
            weight=to_weight(data.get("weight")),
            deprecated=bool(data.get("deprecated", False)),
            experimental=bool(data.get("experimental", False)),
            custom=custom,
            source=source if isinstance(source, SectionSource) else None,
            raw=str(data.get("raw", "")),
            depth=data.get("depth"),
            reference_number=str(data.get("referenceNumber", "") or ""),
        )

    @property
    def depth(self) -> int:
        """Return the number of segments in the reference."""
        if self._depth is None:
            delimiter = self.style_guide.reference_delimiter if self.style_guide else "."
            self._depth = len(self.reference.split(delimiter))
        return self._depth

    @depth.setter
    def depth(self, value: int) -> None:
        self._depth = value

    @property
    def reference_number(self) -> str:
        """Return the numeric reference used for ordering and display.

        Numeric style guides use the reference itself; word-based ones use the
        auto-incremented number assigned by the style guide.
        """
        if self.style_guide is not None and self.style_guide.has_numeric_references:
            return self.reference
        return self._reference_number

    @reference_number.setter
    def reference_number(self, value: str) -> None:
        self._reference_number = value

    @property
    def reference_uri(self) -> str:
        """Return the URL-safe form of the reference."""
        return encode_reference_uri(self.reference)

    def custom(self, name: str) -> str | None:
        """Return the value of a custom property, or ``None`` when unset."""
        return self._custom.get(name.lower())

    @property
    def custom_properties(self) -> dict[str, str]:
        """Return a copy of every custom property found for this section."""
        return dict(self._custom)

    def modifier(self, query: int | str) -> Modifier | None:
        """Return a modifier by index, numeric string index, or name."""
        if isinstance(query, str):
            if query.isdigit():
                query = int(query)
            else:
                return next((item for item in self.modifiers if item.name == query), None)
        if 0 <= query < len(self.modifiers):
            return self.modifiers[query]
        return None

    def first_modifier(self) -> Modifier | None:
        """Return the first modifier, or ``None`` when there are none."""
        return self.modifiers[0] if self.modifiers else None

    def to_json(
        self, custom_property_names: cabc.Iterable[str] = ()
    ) -> dict[str, typ.Any]:
        """Return a JSON-serialisable representation of the section."""
        payload: dict[str, typ.Any] = {
            "header": self.header,
            "description": self.description,
            "deprecated": self.deprecated,
            "experimental": self.experimental,
            "reference": self.reference,
            "referenceNumber": self.reference_number,
            "referenceURI": self.reference_uri,
            "depth": self.depth,
            "weight": self.weight,
            "markup": self.markup,
            "source": dc.asdict(self.source),
            "modifiers": [modifier.to_json() for modifier in self.modifiers],
            "parameters": [parameter.to_json() for parameter in self.parameters],
        }
        for name in custom_property_names:
            value = self.custom(name)
            if value is not None:
                payload[name] = value
        return payload


def _coerce_modifier(item: Modifier | cabc.Mapping[str, typ.Any]) -> Modifier:
    if isinstance(item, Modifier):
        return item
    return Modifier(
        name=str(item.get("name", "")),
        description=str(item.get("description", "")),
        class_name_override=str(item.get("className", "") or ""),
    )


def _coerce_parameter(item: Parameter | cabc.Mapping[str, typ.Any]) -> Parameter:
    if isinstance(item, Parameter):
        return item
    return Parameter(
        name=str(item.get("name", "")),
        description=str(item.get("description", "")),
        default_value=str(item.get("defaultValue", "") or ""),
    )


__all__ = [
    "Modifier",
    "Parameter",
    "Section",
    "SectionSource",
    "encode_reference_uri",
    "pseudo_class_name",
    "to_weight",
]
