"""Interface for looking up code elements in source documents. Must be implemented for each language."""

from pathlib import Path
from typing import Protocol

from .code_element import CodeElement
from .code_element import CodeElementKind


class CodeModel(Protocol):
    """Interface defining the lookup of code elements by position."""

    def element_at(self, document: Path, offset: int, kind: CodeElementKind) -> CodeElement | None:
        """
        Get the innermost element of the given kind enclosing the character offset in document.

        Returns None if no element of that kind encloses the offset.
        """

    def file_changed(self, document: Path, content: str) -> None:
        """Call when the editor holds unsaved content for document."""
