r"""Parse KSS documentation comments into sections and build a style guide.

Each comment block found by :mod:`kss_docs.block_finder` is split into
paragraphs. Labelled properties (``Markup:``, ``Weight:`` and any configured
custom properties) are lifted out first, the final paragraph must name the
style guide reference (``Styleguide 4.1``), and the remaining paragraphs are
classified into header, description and an optional modifier or parameter
list. Blocks without a reference are skipped silently.

Example
-------
>>> from kss_docs.parser import parse
>>> guide = parse("// Buttons\n//\n// :hover - Highlight\n//\n// Styleguide 2.1\n",
...               {"markdown": False})
>>> section = guide.sections("2.1")
>>> section.header, section.parameters[0].name
('Buttons', ':hover')
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import re
import typing as typ
from pathlib import PurePath

from ._constants import REFERENCE_KEYWORD
from .block_finder import CommentBlock, find_blocks, normalize_newlines
from .config import ParseOptions
from .models import Modifier, Parameter, Section, SectionSource, to_weight
from .phonetics import sounds_like
from .renderer import MarkdownRenderer
from .styleguide import StyleGuide

logger = logging.getLogger(__name__)

BLANK_LINE_PATTERN = re.compile(r"^[ \t]+$", re.MULTILINE)
PARAGRAPH_SPLIT_PATTERN = re.compile(r"\n{2,}")
MODIFIER_LINE_PATTERN = re.compile(r"^\s*.+?\s+-\s")
MODIFIER_SPLIT_PATTERN = re.compile(r"\s+-\s+")
DEFAULT_VALUE_SPLIT_PATTERN = re.compile(r"\s+=\s+")
PHRASE_SPACING_PATTERN = re.compile(r"\s+-\s+")
TRAILING_ZERO_PATTERN = re.compile(r"(\.0+)+$")
LEADING_PUNCTUATION_PATTERN = re.compile(r"^[-:]\s*")
LABEL_PATTERN = re.compile(r"^\s*([^:\n]+?)\s*:", re.MULTILINE)
HEADER_PARAGRAPH_PATTERN = re.compile(r"^.*?\n{2,}", re.DOTALL)


class NoSectionsFoundError(RuntimeError):
    """Raised when no documented sections exist across all parsed input."""


@dc.dataclass(slots=True)
class SourceFile:
    """Stylesheet contents together with where they were read from."""

    contents: str
    path: str = ""
    base: str = ""


@dc.dataclass(slots=True)
class ParsedData:
    """Sections accumulated while parsing one or more inputs."""

    files: list[str] = dc.field(default_factory=list)
    sections: list[Section] = dc.field(default_factory=list)
    section_refs: dict[str, Section] = dc.field(default_factory=dict)


ParseInput = str | cabc.Mapping[str, str] | cabc.Sequence[str | SourceFile]


def parse(
    source: ParseInput, options: ParseOptions | cabc.Mapping[str, typ.Any] | None = None
) -> StyleGuide:
    """Parse documented stylesheet text into a :class:`StyleGuide`.

    Parameters
    ----------
    source : str, sequence, or mapping
        A single string, a sequence of strings or :class:`SourceFile`
        objects, or a mapping of file path to contents. Mapping keys are
        processed in sorted order and recorded as the style guide's files.
    options : ParseOptions or mapping, optional
        Parsing options; defaults render Markdown and separate the header.

    Returns
    -------
    StyleGuide
        The initialised style guide.

    Raises
    ------
    NoSectionsFoundError
        If no comment block in any input carries a style guide reference.
        Raised once, after every input has been scanned.
    TypeError
        If ``source`` or ``options`` has an unsupported type.
    """
    parse_options = ParseOptions.coerce(options)
    renderer = MarkdownRenderer() if parse_options.markdown else None
    data = ParsedData()
    for file in _normalize_input(source):
        if file.path:
            data.files.append(file.path)
        parse_chunk(
            data,
            file.contents,
            parse_options,
            path=file.path,
            base=file.base,
            renderer=renderer,
        )

    if not data.sections:
        msg = "No KSS documentation sections were found in the supplied input."
        raise NoSectionsFoundError(msg)
    logger.debug(
        "Parsed %d section(s) from %d input file(s)",
        len(data.sections),
        len(data.files),
    )
    return StyleGuide(
        data.sections,
        files=data.files,
        custom_property_names=parse_options.custom,
    )


def _normalize_input(source: ParseInput) -> list[SourceFile]:
    """Return ``source`` as a list of :class:`SourceFile` objects."""
    match source:
        case str():
            return [SourceFile(contents=source)]
        case cabc.Mapping():
            return [
                SourceFile(contents=source[path], path=str(path))
                for path in sorted(source)
            ]
        case cabc.Sequence():
            files: list[SourceFile] = []
            for item in source:
                match item:
                    case str():
                        files.append(SourceFile(contents=item))
                    case SourceFile():
                        files.append(item)
                    case _:
                        msg = f"Unsupported parse input item: {type(item).__name__}"
                        raise TypeError(msg)
            return files
        case _:
            msg = f"Unsupported parse input: {type(source).__name__}"
            raise TypeError(msg)


def parse_chunk(
    data: ParsedData,
    text: str,
    options: ParseOptions | cabc.Mapping[str, typ.Any] | None = None,
    *,
    path: str = "",
    base: str = "",
    renderer: MarkdownRenderer | None = None,
) -> ParsedData:
    """Parse every comment block in ``text`` and append its sections to ``data``.

    Parameters
    ----------
    data : ParsedData
        Accumulator shared across inputs.
    text : str
        Stylesheet source text.
    options : ParseOptions or mapping, optional
        Parsing options.
    path : str, optional
        Absolute path of the file ``text`` was read from.
    base : str, optional
        Directory that ``path`` is reported relative to.
    renderer : MarkdownRenderer, optional
        Renderer reused across calls; created on demand when Markdown is on.

    Returns
    -------
    ParsedData
        ``data``, updated in place.
    """
    parse_options = ParseOptions.coerce(options)
    if renderer is None and parse_options.markdown:
        renderer = MarkdownRenderer()
    filename = _display_filename(path, base)
    for block in find_blocks(text):
        section = parse_block(
            block,
            parse_options,
            renderer=renderer,
            source=SectionSource(filename=filename, path=path, line=block.line),
        )
        if section is None:
            continue
        data.sections.append(section)
        if section.reference:
            data.section_refs[section.reference] = section
    return data


def _display_filename(path: str, base: str) -> str:
    """Return ``path`` relative to ``base`` using ``/`` separators."""
    if not path:
        return ""
    pure = PurePath(path)
    if base and pure.is_relative_to(base):
        return pure.relative_to(base).as_posix()
    return pure.as_posix()


def split_paragraphs(text: str) -> list[str]:
    """Split a comment block into paragraphs separated by blank lines."""
    normalized = BLANK_LINE_PATTERN.sub("", normalize_newlines(text)).strip()
    if not normalized:
        return []
    return PARAGRAPH_SPLIT_PATTERN.split(normalized)


def parse_block(
    block: CommentBlock | str,
    options: ParseOptions | cabc.Mapping[str, typ.Any] | None,
    *,
    renderer: MarkdownRenderer | None = None,
    source: SectionSource | None = None,
) -> Section | None:
    """Turn one comment block into a :class:`Section`.

    Returns ``None`` when the block has no style guide reference.
    """
    options = ParseOptions.coerce(options)
    if renderer is None and options.markdown:
        renderer = MarkdownRenderer()
    if isinstance(block, str):
        block = CommentBlock(text=block, raw=block)
    paragraphs = split_paragraphs(block.text)

    markup = extract_property(paragraphs, "Markup")
    weight = to_weight(extract_property(paragraphs, "Weight"))
    custom: dict[str, str] = {}
    for name in options.custom:
        value = extract_property(paragraphs, name)
        if value is not None:
            custom[name] = value

    reference = find_reference(paragraphs[-1], typos=options.typos) if paragraphs else None
    if not reference:
        logger.debug("Skipping comment block at line %d: no reference", block.line)
        return None

    header = description = ""
    modifiers: list[Modifier] = []
    parameters: list[Parameter] = []
    if len(paragraphs) == 1:
        header = reference
    elif len(paragraphs) == 2:
        header = description = paragraphs[0]
    else:
        header = paragraphs[0]
        description = "\n\n".join(paragraphs[:-2])
        candidate = paragraphs[-2]
        lines = collect_modifier_lines(candidate)
        if lines is None:
            description = f"{description}\n\n{candidate}"
        elif markup:
            modifiers = create_modifiers(lines, options, renderer=renderer)
        else:
            parameters = create_parameters(lines, options, renderer=renderer)

    header = header.replace("\n", " ")
    deprecated = has_prefix(description, "Deprecated", typos=options.typos)
    experimental = has_prefix(description, "Experimental", typos=options.typos)

    if options.multiline:
        if re.search(r"\n{2,}", description):
            description = HEADER_PARAGRAPH_PATTERN.sub("", description, count=1)
        else:
            description = ""

    if renderer is not None:
        description = renderer.render(description)

    return Section(
        reference=reference,
        header=header,
        description=description,
        markup=markup,
        modifiers=modifiers,
        parameters=parameters,
        weight=weight,
        deprecated=deprecated,
        experimental=experimental,
        custom=custom,
        source=source,
        raw=block.raw,
    )


def _property_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"^\s*{re.escape(name)}:\s*", re.IGNORECASE | re.MULTILINE)


def extract_property(paragraphs: list[str], name: str) -> str | None:
    """Remove the first paragraph labelled ``name:`` and return its value.

    The label may sit on any line of the paragraph; every occurrence of the
    label is stripped from the returned value. ``paragraphs`` is modified in
    place.
    """
    pattern = _property_pattern(name)
    for index, paragraph in enumerate(paragraphs):
        if pattern.search(paragraph):
            del paragraphs[index]
            return pattern.sub("", paragraph).rstrip()
    return None


def has_prefix(text: str, prefix: str, *, typos: bool = False) -> bool:
    """Return whether any line of ``text`` starts with the label ``prefix:``."""
    if _property_pattern(prefix).search(text):
        return True
    if not typos:
        return False
    return any(
        sounds_like(match.group(1), prefix) for match in LABEL_PATTERN.finditer(text)
    )


def _is_reference_keyword(candidate: str, *, typos: bool) -> bool:
    word = LEADING_PUNCTUATION_PATTERN.sub("", candidate.lower()).rstrip(":-")
    if word == REFERENCE_KEYWORD:
        return True
    return typos and sounds_like(word, REFERENCE_KEYWORD)


def find_reference(paragraph: str, *, typos: bool = False) -> str | None:
    """Return the reference named by a ``Styleguide`` paragraph, if any.

    The paragraph must hold at least two words and start with
    ``Styleguide`` (or ``Style guide``), optionally followed by ``:`` or
    ``-``. Phrase delimiters are normalised to ``" - "`` and trailing ``.``
    and ``.0`` segments are dropped.

    >>> find_reference("Styleguide: 4.1.0")
    '4.1'
    >>> find_reference("Style guide Forms  -   Buttons.")
    'Forms - Buttons'
    >>> find_reference("Just a sentence.") is None
    True
    """
    words = paragraph.split()
    if len(words) < 2:
        return None
    if _is_reference_keyword(words[0], typos=typos):
        remainder = words[1:]
    elif len(words) > 2 and _is_reference_keyword(words[0] + words[1], typos=typos):
        remainder = words[2:]
    else:
        return None

    reference = LEADING_PUNCTUATION_PATTERN.sub("", " ".join(remainder))
    reference = PHRASE_SPACING_PATTERN.sub(" - ", reference).strip()
    reference = reference.removesuffix(".")
    reference = TRAILING_ZERO_PATTERN.sub("", reference)
    return reference or None


def collect_modifier_lines(paragraph: str) -> list[str] | None:
    """Return modifier lines from ``paragraph``, or ``None`` if it is prose.

    The first line must look like ``name - description``; later lines that do
    not are folded into the preceding modifier's description.
    """
    lines: list[str] = []
    for index, line in enumerate(paragraph.split("\n")):
        if MODIFIER_LINE_PATTERN.match(line):
            lines.append(line)
        elif index == 0:
            return None
        else:
            lines[-1] = f"{lines[-1]} {line.strip()}"
    return lines


def _split_entry(entry: str) -> tuple[str, str]:
    """Split ``name - description`` on the first spaced hyphen."""
    parts = MODIFIER_SPLIT_PATTERN.split(entry.strip(), maxsplit=1)
    name = parts[0].strip()
    description = parts[1].strip() if len(parts) > 1 else ""
    return name, description


def _render_inline(
    description: str, options: ParseOptions, renderer: MarkdownRenderer | None
) -> str:
    if not options.markdown:
        return description
    return (renderer or MarkdownRenderer()).render_inline(description)


def create_modifiers(
    lines: cabc.Iterable[str],
    options: ParseOptions | cabc.Mapping[str, typ.Any] | None = None,
    *,
    renderer: MarkdownRenderer | None = None,
) -> list[Modifier]:
    """Turn ``name - description`` lines into :class:`Modifier` records."""
    parse_options = ParseOptions.coerce(options)
    modifiers: list[Modifier] = []
    for entry in lines:
        name, description = _split_entry(entry)
        modifiers.append(
            Modifier(
                name=name,
                description=_render_inline(description, parse_options, renderer),
            )
        )
    return modifiers


def create_parameters(
    lines: cabc.Iterable[str],
    options: ParseOptions | cabc.Mapping[str, typ.Any] | None = None,
    *,
    renderer: MarkdownRenderer | None = None,
) -> list[Parameter]:
    """Turn ``name [= default] - description`` lines into :class:`Parameter` records."""
    parse_options = ParseOptions.coerce(options)
    parameters: list[Parameter] = []
    for entry in lines:
        name, description = _split_entry(entry)
        default_value = ""
        if DEFAULT_VALUE_SPLIT_PATTERN.search(name):
            name, default_value = DEFAULT_VALUE_SPLIT_PATTERN.split(name, maxsplit=1)
        parameters.append(
            Parameter(
                name=name,
                default_value=default_value,
                description=_render_inline(description, parse_options, renderer),
            )
        )
    return parameters


__all__ = [
    "NoSectionsFoundError",
    "ParsedData",
    "SourceFile",
    "collect_modifier_lines",
    "create_modifiers",
    "create_parameters",
    "extract_property",
    "find_reference",
    "has_prefix",
    "parse",
    "parse_block",
    "parse_chunk",
    "split_paragraphs",
]
