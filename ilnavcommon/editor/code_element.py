"""Types for code elements and the navigation targets derived from them."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict


class CodeElementKind(Enum):
    """Kinds of named code constructs the viewer can navigate to."""

    METHOD = "method"  # including constructors, finalizers and operators
    EVENT = "event"
    PROPERTY = "property"  # including indexers
    DELEGATE = "delegate"
    ENUM = "enum"
    INTERFACE = "interface"
    STRUCT = "struct"
    CLASS = "class"


class CodeElement(BaseModel):
    """A named code construct in a document."""

    model_config = ConfigDict(frozen=True)

    kind: CodeElementKind
    name: str  # simple name
    full_name: str  # fully qualified name, e.g. "Acme.Widgets.Widget`1.Resize"
    document: Path
    start: int  # character offset of the first character
    end: int  # character offset after the last character


class NavigationTarget(BaseModel):
    """
    A viewer navigation argument like "/navigateTo:M:Acme.Widget.Resize".

    The kind letters are those of XML documentation IDs: M(ethod), E(vent), P(roperty), T(ype).
    """

    model_config = ConfigDict(frozen=True)

    kind_letter: str
    full_name: str

    @property
    def argument(self) -> str:
        """The command line argument understood by the viewer."""
        return f"/navigateTo:{self.kind_letter}:{self.full_name}"

    def __str__(self) -> str:
        return self.argument


# Tried in this order; constructs nest, so the innermost kinds come first.
# Within the type group the first kind enclosing the cursor wins; kinds that cannot contain other types come first.
NAVIGATION_KIND_GROUPS: list[tuple[str, list[CodeElementKind]]] = [
    ("M", [CodeElementKind.METHOD]),
    ("E", [CodeElementKind.EVENT]),
    ("P", [CodeElementKind.PROPERTY]),
    (
        "T",
        [
            CodeElementKind.DELEGATE,
            CodeElementKind.ENUM,
            CodeElementKind.INTERFACE,
            CodeElementKind.STRUCT,
            CodeElementKind.CLASS,
        ],
    ),
]
