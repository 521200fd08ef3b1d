"""Test the priority order of the code element locator."""

from pathlib import Path

import pytest
from typing_extensions import override

from ilnavcommon.editor.code_element import CodeElement
from ilnavcommon.editor.code_element import CodeElementKind
from ilnavcommon.editor.code_element import NavigationTarget
from ilnavcommon.editor.code_model import CodeModel
from ilnavcommon.editor.locator import CodeElementLocator

DOCUMENT = Path("Widget.cs")

ALL_KINDS_IN_ORDER = [
    CodeElementKind.METHOD,
    CodeElementKind.EVENT,
    CodeElementKind.PROPERTY,
    CodeElementKind.DELEGATE,
    CodeElementKind.ENUM,
    CodeElementKind.INTERFACE,
    CodeElementKind.STRUCT,
    CodeElementKind.CLASS,
]


class FakeCodeModel(CodeModel):
    """Code model where every kind encloses the cursor or not, as configured."""

    def __init__(self, elements: dict[CodeElementKind, str]) -> None:
        self.elements = elements
        self.queried: list[CodeElementKind] = []

    @override
    def element_at(self, document: Path, offset: int, kind: CodeElementKind) -> CodeElement | None:
        self.queried.append(kind)
        full_name = self.elements.get(kind)
        if full_name is None:
            return None
        return CodeElement(
            kind=kind,
            name=full_name.rsplit(".", 1)[-1],
            full_name=full_name,
            document=document,
            start=0,
            end=100,
        )

    @override
    def file_changed(self, document: Path, content: str) -> None:
        pass


@pytest.mark.parametrize(
    "elements, expected",
    [
        (
            {CodeElementKind.CLASS: "Acme.Widget", CodeElementKind.METHOD: "Acme.Widget.Resize"},
            "/navigateTo:M:Acme.Widget.Resize",
        ),
        (
            {CodeElementKind.CLASS: "Acme.Widget", CodeElementKind.EVENT: "Acme.Widget.Changed"},
            "/navigateTo:E:Acme.Widget.Changed",
        ),
        (
            {
                CodeElementKind.CLASS: "Acme.Widget",
                CodeElementKind.PROPERTY: "Acme.Widget.Size",
                CodeElementKind.EVENT: "Acme.Widget.Changed",
            },
            "/navigateTo:E:Acme.Widget.Changed",
        ),
        ({CodeElementKind.STRUCT: "Acme.Point"}, "/navigateTo:T:Acme.Point"),
        ({CodeElementKind.DELEGATE: "Acme.Resized"}, "/navigateTo:T:Acme.Resized"),
        (
            {CodeElementKind.ENUM: "Acme.Widget.Mode", CodeElementKind.CLASS: "Acme.Widget"},
            "/navigateTo:T:Acme.Widget.Mode",
        ),
        (
            {CodeElementKind.STRUCT: "Acme.Outer.Inner", CodeElementKind.CLASS: "Acme.Outer"},
            "/navigateTo:T:Acme.Outer.Inner",
        ),
    ],
)
def test_first_kind_wins(elements: dict[CodeElementKind, str], expected: str) -> None:
    """Members win over types; within the type group enums and delegates come first."""

    target = CodeElementLocator(FakeCodeModel(elements)).locate(DOCUMENT, 42)

    assert target is not None
    assert target.argument == expected


def test_stops_at_first_match() -> None:
    """No further kinds are queried once one matched."""

    model = FakeCodeModel({CodeElementKind.METHOD: "Acme.Widget.Resize", CodeElementKind.CLASS: "Acme.Widget"})

    CodeElementLocator(model).locate(DOCUMENT, 42)

    assert model.queried == [CodeElementKind.METHOD]


def test_no_target() -> None:
    """Without any enclosing element all kinds are tried and there is no target."""

    model = FakeCodeModel({})

    assert CodeElementLocator(model).locate(DOCUMENT, 0) is None
    assert model.queried == ALL_KINDS_IN_ORDER


def test_navigation_target_argument() -> None:
    """The target renders as the viewer's command line argument."""

    target = NavigationTarget(kind_letter="T", full_name="Acme.Widget`1")

    assert target.argument == "/navigateTo:T:Acme.Widget`1"
    assert str(target) == target.argument
