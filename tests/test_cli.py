"""Tests for the ``kss`` command functions.

The command functions are called directly, as Cyclopts would after parsing
arguments, and their printed output is captured with ``capsys``.

Usage
-----
Run ``pytest tests/test_cli.py -v``. The ``styles_dir`` fixture from
``tests/conftest.py`` provides the stylesheets.
"""

from __future__ import annotations

import typing as typ

import msgspec.json as msgspec_json
import pytest

from kss_docs import cli
from kss_docs.parser import NoSectionsFoundError

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_sections_lists_reference_and_header(
    styles_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.sections(source=[styles_dir], query="2.x", markdown=False)
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["2.1\tPrimary button", "2.2\tLink button"]


def test_json_dumps_style_guide(
    styles_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.dump_json(source=[styles_dir], markdown=False)
    payload = msgspec_json.decode(capsys.readouterr().out)
    assert payload["referenceDelimiter"] == "."
    assert [section["reference"] for section in payload["sections"]] == [
        "1",
        "1.1",
        "2",
        "2.1",
        "2.2",
    ]
    button = payload["sections"][3]
    assert button["modifiers"][0]["className"] == ".pseudo-class-hover"


def test_json_query_limits_sections(
    styles_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.dump_json(source=[styles_dir], query="1.*", markdown=False)
    payload = msgspec_json.decode(capsys.readouterr().out)
    assert [section["reference"] for section in payload["sections"]] == ["1", "1.1"]


def test_config_file_supplies_sources(
    styles_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config_path = tmp_path / "kss.yaml"
    config_path.write_text(
        f"source: {styles_dir.name}\nmask: '*.scss'\nmarkdown: false\n",
        encoding="utf-8",
    )
    cli.sections(config=config_path)
    assert capsys.readouterr().out.splitlines() == ["1\tForms", "1.1\tText input"]


def test_missing_sections_exit_with_status_one(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.sections(source=[tmp_path])
    assert excinfo.value.code == 1
    assert capsys.readouterr().out.startswith("error: ")


def test_verbose_mode_propagates_errors(tmp_path: Path) -> None:
    with pytest.raises(NoSectionsFoundError):
        cli.sections(source=[tmp_path], verbose=True)


def test_sources_are_required() -> None:
    with pytest.raises(ValueError, match="--source"):
        cli.sections()
