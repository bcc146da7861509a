"""Behaviour tests for parsing documented stylesheets.

These pytest-bdd scenarios walk a temporary stylesheet directory (or parse a
string of word-referenced comments) and check the resulting style guide
from a reader's point of view: ordering, modifiers and parameters, automatic
reference numbers, and Markdown descriptions rendered to HTML.

Usage
-----
Run ``pytest tests/bdd/test_parse_stylesheets.py -v`` after installing the
test dependencies (``uv sync --group dev``). Steps share data through the
``scenario_state`` fixture; stylesheets come from the ``styles_dir`` and
``word_references`` fixtures in ``tests/conftest.py``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from kss_docs import parse, traverse

if typ.TYPE_CHECKING:
    from kss_docs import Section, StyleGuide

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "parse_stylesheets.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _section(scenario_state: dict[str, object], reference: str) -> Section:
    guide = typ.cast("StyleGuide", scenario_state["guide"])
    section = guide.sections(reference)
    assert section is not None, f"expected section {reference!r} to exist"
    return typ.cast("Section", section)


@given("a directory of documented stylesheets")
def given_styles_dir(styles_dir: Path, scenario_state: dict[str, object]) -> None:
    """Remember the fixture directory holding documented stylesheets."""
    scenario_state["styles_dir"] = styles_dir


@given("stylesheet text that uses word references")
def given_word_references(
    word_references: str, scenario_state: dict[str, object]
) -> None:
    """Remember stylesheet text whose references are words."""
    scenario_state["text"] = word_references


@when("I traverse the stylesheet directory")
def when_traverse(scenario_state: dict[str, object]) -> None:
    """Build a style guide from the directory without Markdown rendering."""
    styles_dir = typ.cast("Path", scenario_state["styles_dir"])
    scenario_state["guide"] = traverse(styles_dir, {"markdown": False})


@when("I traverse the stylesheet directory with Markdown enabled")
def when_traverse_markdown(scenario_state: dict[str, object]) -> None:
    """Build a style guide from the directory with default options."""
    styles_dir = typ.cast("Path", scenario_state["styles_dir"])
    scenario_state["guide"] = traverse(styles_dir)


@when("I parse the stylesheet text")
def when_parse_text(scenario_state: dict[str, object]) -> None:
    """Parse the remembered text into a style guide."""
    text = typ.cast("str", scenario_state["text"])
    scenario_state["guide"] = parse(text, {"markdown": False})


@then(parsers.parse('the sections are ordered "{references}"'))
def then_sections_ordered(scenario_state: dict[str, object], references: str) -> None:
    """Verify every section appears in the expected reference order."""
    guide = typ.cast("StyleGuide", scenario_state["guide"])
    expected = [reference.strip() for reference in references.split(",")]
    actual = [section.reference for section in guide.sections()]
    assert actual == expected, f"expected order {expected}, got {actual}"


@then(parsers.parse('section "{reference}" lists the modifiers "{names}"'))
def then_modifiers(
    scenario_state: dict[str, object], reference: str, names: str
) -> None:
    """Verify the modifier names documented for a section."""
    expected = [name.strip() for name in names.split(",")]
    actual = [modifier.name for modifier in _section(scenario_state, reference).modifiers]
    assert actual == expected, f"expected modifiers {expected}, got {actual}"


@then(
    parsers.parse(
        'section "{reference}" has a parameter "{name}" defaulting to "{default}"'
    )
)
def then_parameter_default(
    scenario_state: dict[str, object], reference: str, name: str, default: str
) -> None:
    """Verify a parameter and its default value."""
    parameters = _section(scenario_state, reference).parameters
    found = {parameter.name: parameter.default_value for parameter in parameters}
    assert found.get(name) == default, f"expected {name} to default to {default}"


@then(
    parsers.parse('section "{reference}" has the reference number "{number}"')
)
def then_reference_number(
    scenario_state: dict[str, object], reference: str, number: str
) -> None:
    """Verify the auto-incremented reference number of a word reference."""
    section = _section(scenario_state, reference)
    assert section.reference_number == number, (
        f"expected reference number {number}, got {section.reference_number}"
    )


@then(
    parsers.parse('section "{reference}" has a description paragraph reading "{text}"')
)
def then_description_html(
    scenario_state: dict[str, object], reference: str, text: str
) -> None:
    """Verify the description was rendered into an HTML paragraph."""
    soup = BeautifulSoup(_section(scenario_state, reference).description, "html.parser")
    paragraph = soup.find("p")
    assert paragraph is not None, "expected the description to contain a <p>"
    assert paragraph.get_text() == text
