"""The commands offered to the IDE: open a selection in the viewer."""

from pathlib import Path
from typing import Iterable

from ilnavcommon.editor.locator import CodeElementLocator
from ilnavcommon.gac.registry import AssemblyRegistry
from ilnavcommon.launcher.launcher import MISSING_ASSEMBLY_MESSAGE
from ilnavcommon.launcher.launcher import LaunchRequest
from ilnavcommon.launcher.launcher import LaunchState
from ilnavcommon.launcher.launcher import ViewerLauncher

from .logger import ILNAV_LOGGER
from .selection import CodeItem
from .selection import ProjectOutputItem
from .selection import ReferenceItem
from .selection import SelectionItem

log = ILNAV_LOGGER.getChild(__name__)


class ViewerCommands:
    """
    Resolve selected items to assemblies (and navigation targets) and open them.

    Items are processed one after another in selection order. A missing assembly only fails its own item; a viewer
    that cannot be started (ViewerLaunchError) ends the whole command.
    """

    def __init__(self, launcher: ViewerLauncher, registry: AssemblyRegistry, locator: CodeElementLocator) -> None:
        self.launcher = launcher
        self.registry = registry
        self.locator = locator

    def resolve_reference(self, item: ReferenceItem) -> Path | None:
        """Find the referenced assembly in the registry, falling back to the path reported by the IDE."""
        try:
            identity = item.identity
        except ValueError as exc:
            log.warning(f"Not looking up {item.name} in the registry: {exc}")
        else:
            path = self.registry.find_assembly(identity)
            if path is not None:
                return path

        log.debug(f"Using IDE path for {item.name}: {item.path}")
        return item.path

    def open_reference(self, item: ReferenceItem) -> LaunchState:
        """Open a referenced assembly."""
        path = self.resolve_reference(item)
        if path is None:
            self.launcher.sink.show_message(MISSING_ASSEMBLY_MESSAGE.format(path=item.name))
            return LaunchState.FAILED
        return self.launcher.launch(LaunchRequest(assembly_path=path))

    def open_project_output(self, item: ProjectOutputItem) -> LaunchState:
        """Open the build output of a project."""
        return self.launcher.launch(LaunchRequest(assembly_path=item.assembly_path))

    def open_code_item(self, item: CodeItem) -> LaunchState:
        """
        Open the project's assembly at the code element enclosing the cursor.

        Without an enclosing element the assembly is opened without navigating anywhere.
        """
        target = self.locator.locate(item.document, item.offset)
        return self.launcher.launch(LaunchRequest(assembly_path=item.project.assembly_path, navigation_target=target))

    def open_references(self, items: Iterable[ReferenceItem]) -> list[LaunchState]:
        """Open all selected references."""
        return [self.open_reference(item) for item in items]

    def open_project_outputs(self, items: Iterable[ProjectOutputItem]) -> list[LaunchState]:
        """Open the outputs of all selected projects."""
        return [self.open_project_output(item) for item in items]

    def open_viewer(self) -> LaunchState:
        """Just start the viewer."""
        return self.launcher.open_viewer()

    def open_item(self, item: SelectionItem) -> LaunchState:
        """Open any kind of selection item."""
        match item:
            case ReferenceItem():
                return self.open_reference(item)
            case ProjectOutputItem():
                return self.open_project_output(item)
            case CodeItem():
                return self.open_code_item(item)
        raise TypeError(f"Unsupported selection item {item!r}")

    def open_selection(self, items: Iterable[SelectionItem]) -> list[LaunchState]:
        """Open a mixed selection."""
        states = [self.open_item(item) for item in items]
        failed = sum(1 for s in states if s is LaunchState.FAILED)
        log.info(f"Opened {len(states) - failed} of {len(states)} selected items")
        return states
