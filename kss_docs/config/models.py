"""Typed dataclasses describing KSS parsing options and project configuration."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
import typing as typ
from pathlib import Path

from kss_docs._constants import DEFAULT_MASK


class KssConfigError(ValueError):
    """Raised when parse options or the configuration file are invalid."""


@dc.dataclass(frozen=True, slots=True)
class ParseOptions:
    """Options altering how comment blocks are turned into sections.

    Attributes
    ----------
    markdown : bool
        Render descriptions (and modifier/parameter descriptions) as HTML.
    multiline : bool
        Strip the header paragraph from the front of the description.
    typos : bool
        Match keywords phonetically so misspellings are tolerated.
    custom : tuple[str, ...]
        Names of custom properties to extract, in lookup order.
    mask : str | re.Pattern[str]
        File mask used by traversal; ``parse`` itself ignores it.
    """

    markdown: bool = True
    multiline: bool = True
    typos: bool = False
    custom: tuple[str, ...] = ()
    mask: str | re.Pattern[str] = DEFAULT_MASK

    @classmethod
    def from_mapping(cls, payload: cabc.Mapping[str, typ.Any]) -> ParseOptions:
        """Build options from a plain mapping, rejecting unknown keys."""
        known = {field.name for field in dc.fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            msg = f"Unknown parse option(s): {', '.join(unknown)}."
            raise KssConfigError(msg)
        values = dict(payload)
        if "custom" in values:
            values["custom"] = _normalize_names(values["custom"])
        for flag in ("markdown", "multiline", "typos"):
            if flag in values:
                values[flag] = bool(values[flag])
        if values.get("mask") is None:
            values.pop("mask", None)
        return cls(**values)

    @classmethod
    def coerce(
        cls, options: ParseOptions | cabc.Mapping[str, typ.Any] | None
    ) -> ParseOptions:
        """Return ``options`` as a :class:`ParseOptions` instance."""
        match options:
            case None:
                return cls()
            case ParseOptions():
                return options
            case cabc.Mapping():
                return cls.from_mapping(options)
            case _:
                msg = f"Unsupported options type: {type(options).__name__}"
                raise TypeError(msg)


@dc.dataclass(slots=True)
class KssConfig:
    """Project-level settings loaded from a ``kss.yaml`` file."""

    source: list[Path]
    mask: str = DEFAULT_MASK
    markdown: bool = True
    multiline: bool = True
    typos: bool = False
    custom: list[str] = dc.field(default_factory=list)
    verbose: bool = False

    def parse_options(self) -> ParseOptions:
        """Return the :class:`ParseOptions` equivalent of this configuration."""
        return ParseOptions(
            markdown=self.markdown,
            multiline=self.multiline,
            typos=self.typos,
            custom=tuple(self.custom),
            mask=self.mask,
        )


def _normalize_names(value: object) -> tuple[str, ...]:
    """Normalize a custom property declaration into a tuple of names."""
    match value:
        case None:
            return ()
        case str():
            return (value.strip(),) if value.strip() else ()
        case cabc.Iterable():
            return tuple(str(name).strip() for name in value if str(name).strip())
        case _:
            msg = "Custom property names must be a string or a list of strings."
            raise KssConfigError(msg)


__all__ = ["KssConfig", "KssConfigError", "ParseOptions"]
