"""Cyclopts CLI entrypoint for inspecting KSS documentation in stylesheets.

The ``kss`` console script defined here walks stylesheet directories, parses
their KSS comments, and either lists the resulting sections in style guide
order or dumps the whole style guide as JSON for downstream builders.
Settings come from command-line flags, ``KSS_*`` environment variables, or a
``kss.yaml`` project file passed with ``--config``.

Examples
--------
List every section under ``styles/``:

>>> from kss_docs.cli import app
>>> app(["sections", "--source", "styles"])  # doctest: +SKIP

Dump the children of section 2 as JSON:

>>> app(["json", "--source", "styles", "--query", "2.x"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter

from ._constants import DEFAULT_MASK
from .config import KssConfig, ParseOptions, load_kss_config
from .parser import NoSectionsFoundError
from .traverse import traverse

if typ.TYPE_CHECKING:
    from .models import Section
    from .styleguide import StyleGuide

app = App(name="kss", config=cyclopts.config.Env("KSS_", command=False))  # type: ignore[unknown-argument]

SourceOption = typ.Annotated[
    list[Path] | None,
    Parameter(help="Directory to scan for stylesheets (repeatable)"),
]
ConfigOption = typ.Annotated[
    Path | None, Parameter(help="Path to a kss.yaml project file")
]
QueryOption = typ.Annotated[
    str | None,
    Parameter(help="Reference or pattern such as '2', '2.x' or '2.*'"),
]
MaskOption = typ.Annotated[
    str | None, Parameter(help=f"File mask (default: {DEFAULT_MASK})")
]
CustomOption = typ.Annotated[
    list[str] | None, Parameter(help="Custom property name to extract (repeatable)")
]


def _resolve_settings(
    *,
    source: list[Path] | None,
    config: Path | None,
    mask: str | None,
    custom: list[str] | None,
    typos: bool | None,
    markdown: bool | None,
    multiline: bool | None,
    verbose: bool,
) -> KssConfig:
    """Merge the optional config file with command-line overrides."""
    if config is not None:
        settings = load_kss_config(config)
    elif source:
        settings = KssConfig(source=list(source))
    else:
        msg = "Provide at least one --source directory or a --config file."
        raise ValueError(msg)

    if source:
        settings.source = list(source)
    if mask:
        settings.mask = mask
    if custom:
        settings.custom = list(custom)
    if typos is not None:
        settings.typos = typos
    if markdown is not None:
        settings.markdown = markdown
    if multiline is not None:
        settings.multiline = multiline
    settings.verbose = settings.verbose or verbose
    return settings


def _build_style_guide(settings: KssConfig) -> StyleGuide:
    """Traverse the configured sources, exiting cleanly when nothing is found."""
    if settings.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    options: ParseOptions = settings.parse_options()
    try:
        return traverse(settings.source, options)
    except NoSectionsFoundError as exc:
        if settings.verbose:
            raise
        print(f"error: {exc}")
        raise SystemExit(1) from exc


def _select(style_guide: StyleGuide, query: str | None) -> list[Section]:
    """Return the sections matching ``query`` as a list."""
    result = style_guide.sections(query) if query else style_guide.sections()
    if result is None:
        return []
    return result if isinstance(result, list) else [result]


@app.command(help="List documented sections in style guide order.")
def sections(
    *,
    source: SourceOption = None,
    config: ConfigOption = None,
    query: QueryOption = None,
    mask: MaskOption = None,
    custom: CustomOption = None,
    typos: bool | None = None,
    markdown: bool | None = None,
    multiline: bool | None = None,
    verbose: bool = False,
) -> None:
    """Print one line per section: its reference number and header.

    Parameters
    ----------
    source : list[Path] or None, optional
        Directories to scan; overrides ``source`` from the config file.
    config : Path or None, optional
        Project configuration file providing defaults for every option.
    query : str or None, optional
        Restrict the listing to a reference or reference pattern.
    mask : str or None, optional
        Glob-style file mask, for example ``*.scss|*.css``.
    custom : list[str] or None, optional
        Custom property names to extract.
    typos : bool or None, optional
        Match keywords phonetically.
    markdown : bool or None, optional
        Render descriptions to HTML.
    multiline : bool or None, optional
        Strip the header from descriptions.
    verbose : bool, optional
        Enable debug logging and show tracebacks.

    Returns
    -------
    None
        Sections are printed to stdout.

    Raises
    ------
    ValueError
        If neither ``source`` nor ``config`` is supplied.
    SystemExit
        With status 1 when no sections are found and ``verbose`` is off.
    """
    settings = _resolve_settings(
        source=source,
        config=config,
        mask=mask,
        custom=custom,
        typos=typos,
        markdown=markdown,
        multiline=multiline,
        verbose=verbose,
    )
    style_guide = _build_style_guide(settings)
    for section in _select(style_guide, query):
        number = section.reference_number or section.reference
        print(f"{number}\t{section.header}")


@app.command(name="json", help="Print the parsed style guide as JSON.")
def dump_json(
    *,
    source: SourceOption = None,
    config: ConfigOption = None,
    query: QueryOption = None,
    mask: MaskOption = None,
    custom: CustomOption = None,
    typos: bool | None = None,
    markdown: bool | None = None,
    multiline: bool | None = None,
    verbose: bool = False,
) -> None:
    """Print the style guide, or the sections matching ``query``, as JSON."""
    settings = _resolve_settings(
        source=source,
        config=config,
        mask=mask,
        custom=custom,
        typos=typos,
        markdown=markdown,
        multiline=multiline,
        verbose=verbose,
    )
    style_guide = _build_style_guide(settings)
    payload = style_guide.to_json()
    if query:
        names = style_guide.custom_property_names()
        payload["sections"] = [
            section.to_json(names) for section in _select(style_guide, query)
        ]
    print(msgspec_json.format(msgspec_json.encode(payload), indent=2).decode("utf-8"))


def main() -> None:
    """Invoke the Cyclopts application that powers the ``kss`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
