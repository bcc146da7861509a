"""Load KSS project configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from kss_docs._constants import DEFAULT_MASK

from .models import KssConfig, KssConfigError, _normalize_names


def load_kss_config(path: Path) -> KssConfig:
    """Load the YAML configuration describing where and how to parse stylesheets.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``kss.yaml``).

    Returns
    -------
    KssConfig
        Parsed configuration with source directories resolved relative to the
        configuration file.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    KssConfigError
        If no source directories are configured or a value has the wrong
        shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from kss_docs.config import load_kss_config
    >>> config = load_kss_config(Path("kss.yaml"))  # doctest: +SKIP
    >>> config.parse_options().markdown  # doctest: +SKIP
    True
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    base_dir = path.resolve().parent
    sources = _resolve_sources(raw.get("source"), base_dir)
    if not sources:
        msg = f"No source directories defined in '{path}'."
        raise KssConfigError(msg)

    return KssConfig(
        source=sources,
        mask=str(raw.get("mask") or DEFAULT_MASK),
        markdown=bool(raw.get("markdown", True)),
        multiline=bool(raw.get("multiline", True)),
        typos=bool(raw.get("typos", False)),
        custom=list(_normalize_names(raw.get("custom"))),
        verbose=bool(raw.get("verbose", False)),
    )


def _resolve_sources(value: object, base_dir: Path) -> list[Path]:
    """Return source directories as absolute paths rooted at ``base_dir``."""
    match value:
        case None:
            entries: list[object] = []
        case str():
            entries = [value]
        case list():
            entries = value
        case _:
            msg = "'source' must be a path or a list of paths."
            raise KssConfigError(msg)
    resolved: list[Path] = []
    for entry in entries:
        text = str(entry).strip()
        if not text:
            continue
        candidate = Path(text)
        resolved.append(candidate if candidate.is_absolute() else base_dir / candidate)
    return resolved


__all__ = ["load_kss_config"]
