"""Find the navigation target for a cursor position."""

from pathlib import Path

from ilnav.logger import ILNAV_LOGGER

from .code_element import NAVIGATION_KIND_GROUPS
from .code_element import NavigationTarget
from .code_model import CodeModel

log = ILNAV_LOGGER.getChild(__name__)


class CodeElementLocator:
    """
    Map a cursor position to the narrowest enclosing named construct.

    A cursor in a method body is also inside the method's type; trying methods, events and properties before types
    yields the innermost construct.
    """

    def __init__(self, code_model: CodeModel) -> None:
        self.code_model = code_model

    def locate(self, document: Path, offset: int) -> NavigationTarget | None:
        """Return the target of the first kind group with an element at offset, or None."""
        for kind_letter, kinds in NAVIGATION_KIND_GROUPS:
            for kind in kinds:
                element = self.code_model.element_at(document, offset, kind)
                if element is None:
                    continue
                target = NavigationTarget(kind_letter=kind_letter, full_name=element.full_name)
                log.debug(f"{document}@{offset}: {kind.value} {element.full_name}")
                return target

        log.debug(f"{document}@{offset}: no enclosing code element")
        return None
