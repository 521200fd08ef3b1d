"""
Start the viewer on an assembly as a detached process.

Each request goes through Idle -> Validating -> (Failed | Launching -> Started). The viewer's exit code and output
are never observed; a request succeeded once the process exists.
"""

from __future__ import annotations

import subprocess
import sys
from enum import Enum
from pathlib import Path
from typing import Callable

from pydantic import BaseModel
from pydantic import ConfigDict

from ilnav.logger import ILNAV_LOGGER
from ilnavcommon.cmdline.arguments import encode_arguments
from ilnavcommon.cmdline.arguments import split_command_line
from ilnavcommon.editor.code_element import NavigationTarget

from .exceptions import ViewerLaunchError
from .message_sink import MessageSink

log = ILNAV_LOGGER.getChild(__name__)

MISSING_ASSEMBLY_MESSAGE = (
    "Could not find assembly '{path}', please ensure the project and all references were built correctly!"
)

# Creates the process and returns its pid; must not wait for it.
Spawner = Callable[[Path, str], int]


class LaunchState(Enum):
    """States of a single launch request."""

    IDLE = "idle"
    VALIDATING = "validating"
    FAILED = "failed"
    LAUNCHING = "launching"
    STARTED = "started"


class LaunchRequest(BaseModel):
    """An assembly to open and optionally where to navigate to in it."""

    model_config = ConfigDict(frozen=True)

    assembly_path: Path
    navigation_target: NavigationTarget | None = None

    @property
    def argv(self) -> list[str]:
        """Arguments passed to the viewer."""
        args = [str(self.assembly_path)]
        if self.navigation_target is not None:
            args.append(self.navigation_target.argument)
        return args

    @property
    def command_line(self) -> str:
        """The argv encoded as a single command line."""
        command_line = encode_arguments([str(self.assembly_path)])
        if self.navigation_target is not None:
            command_line += " " + encode_arguments([self.navigation_target.argument])
        return command_line


def spawn_detached(viewer: Path, command_line: str) -> int:
    """
    Start viewer with the given argument command line and return its pid without waiting for it.

    On Windows the command line is handed to the process as is. Elsewhere there is no command line string at the
    OS level, so it is split back into arguments.
    """
    kwargs: dict = {
        "stdin": subprocess.DEVNULL,
        "stdout": subprocess.DEVNULL,
        "stderr": subprocess.DEVNULL,
        "close_fds": True,
    }
    args: str | list[str]
    if sys.platform == "win32":
        args = f"{encode_arguments([str(viewer)])} {command_line}".rstrip()
        kwargs["creationflags"] = subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
    else:
        args = [str(viewer), *split_command_line(command_line)]
        kwargs["start_new_session"] = True

    process = subprocess.Popen(args, **kwargs)  # pylint: disable=consider-using-with
    return process.pid


class ViewerLauncher:
    """Validate launch requests and start the viewer for them."""

    def __init__(self, viewer: Path, sink: MessageSink, spawn: Spawner = spawn_detached) -> None:
        self.viewer = viewer
        self.sink = sink
        self.spawn = spawn

    def _start(self, command_line: str) -> int:
        try:
            pid = self.spawn(self.viewer, command_line)
        except OSError as exc:
            raise ViewerLaunchError(f"Could not start viewer {self.viewer}: {exc}") from exc
        log.info(f"Started {self.viewer} {command_line} (pid={pid})")
        return pid

    def launch(self, request: LaunchRequest) -> LaunchState:
        """
        Open request.assembly_path in the viewer.

        A missing assembly is reported to the sink and yields FAILED. Raises ViewerLaunchError if the process
        cannot be created.
        """
        state = LaunchState.VALIDATING
        log.debug(f"{state.value}: {request.assembly_path}")

        if not request.assembly_path.is_file():
            state = LaunchState.FAILED
            log.debug(f"Assembly {request.assembly_path} does not exist")
            self.sink.show_message(MISSING_ASSEMBLY_MESSAGE.format(path=request.assembly_path))
            return state

        state = LaunchState.LAUNCHING
        self._start(request.command_line)
        state = LaunchState.STARTED
        return state

    def open_viewer(self) -> LaunchState:
        """Start the viewer without opening anything."""
        self._start("")
        return LaunchState.STARTED
