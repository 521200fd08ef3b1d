"""Command line entry point: open assemblies, project outputs and code locations in the viewer."""

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from ilnavcommon.editor.csharp_code_model import CSharpCodeModel
from ilnavcommon.editor.locator import CodeElementLocator
from ilnavcommon.gac.registry import AssemblyRegistry
from ilnavcommon.gac.registry import layout_by_name
from ilnavcommon.launcher.exceptions import ViewerLaunchError
from ilnavcommon.launcher.launcher import LaunchState
from ilnavcommon.launcher.launcher import ViewerLauncher
from ilnavcommon.launcher.message_sink import ConsoleMessageSink
from ilnavcommon.logging.dump_config import dump_config
from ilnavcommon.logging.logging_provider import LOGGING_PROVIDER
from ilnavcommon.settings import init_settings
from ilnavcommon.settings import load_settings

from .commands import ViewerCommands
from .logger import ILNAV_LOGGER
from .selection import CodeItem
from .selection import ProjectOutputItem
from .selection import ReferenceItem
from .selection import SelectionItem
from .selection import parse_selection
from .settings import GAC_LAYOUT
from .settings import GAC_ROOTS
from .settings import VIEWER

log = ILNAV_LOGGER.getChild(__name__)

EXIT_OK = 0
EXIT_ITEM_FAILED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    "Declare the CLI, including the options of all settings."

    def add_project_args(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("project_dir", type=Path, help="directory containing the project file")
        parser.add_argument("output_path", type=Path, help="output directory of the active configuration")
        parser.add_argument("output_file_name", help="file name of the built assembly")

    parser = argparse.ArgumentParser(prog="ilnav", description=__doc__)
    init_settings(parser)
    sub = parser.add_subparsers(dest="command", required=True)

    ref = sub.add_parser("reference", help="open a referenced assembly")
    ref.add_argument("name", help="assembly name")
    ref.add_argument("version", help="assembly version, e.g. 4.0.0.0")
    ref.add_argument("--token", default="", help="public key token as hex string (empty: unsigned)")
    ref.add_argument("--path", type=Path, help="path of the reference as resolved by the IDE")

    project = sub.add_parser("project", help="open the build output of a project")
    add_project_args(project)

    code = sub.add_parser("code", help="open the code element at a cursor position")
    code.add_argument("document", type=Path, help="C# source file")
    code.add_argument("offset", type=int, help="character offset of the cursor")
    add_project_args(code)

    selection = sub.add_parser("selection", help="open a JSON list of selection items")
    selection.add_argument("file", help="JSON file, - for stdin")

    sub.add_parser("open", help="just start the viewer")

    return parser


def selection_from_args(args: argparse.Namespace) -> list[SelectionItem]:
    "Turn the parsed command line into selection items."
    match args.command:
        case "reference":
            return [ReferenceItem(name=args.name, version=args.version, public_key_token=args.token, path=args.path)]
        case "project":
            return [
                ProjectOutputItem(
                    project_dir=args.project_dir, output_path=args.output_path, output_file_name=args.output_file_name
                )
            ]
        case "code":
            project = ProjectOutputItem(
                project_dir=args.project_dir, output_path=args.output_path, output_file_name=args.output_file_name
            )
            return [CodeItem(document=args.document, offset=args.offset, project=project)]
        case "selection":
            text = sys.stdin.read() if args.file == "-" else Path(args.file).read_text(encoding="utf-8")
            return parse_selection(text)
    raise ValueError(f"Unknown command {args.command!r}")


def create_commands() -> ViewerCommands:
    "Wire up the commands from the loaded settings."
    launcher = ViewerLauncher(VIEWER.get(), ConsoleMessageSink())
    registry = AssemblyRegistry(GAC_ROOTS.get(), layout_by_name(GAC_LAYOUT.get()))
    return ViewerCommands(launcher, registry, CodeElementLocator(CSharpCodeModel()))


def main(argv: list[str] | None = None) -> int:
    "Run the CLI and return the exit code."
    parser = build_parser()
    args = parser.parse_args(argv)
    load_settings(args)
    LOGGING_PROVIDER.init_logging()
    dump_config(log)

    commands = create_commands()

    try:
        if args.command == "open":
            commands.open_viewer()
            return EXIT_OK
        items = selection_from_args(args)
        states = commands.open_selection(items)
    except ViewerLaunchError as exc:
        log.error(str(exc))
        return EXIT_ERROR
    except (ValidationError, ValueError, OSError) as exc:
        log.error(f"Invalid selection: {exc}")
        return EXIT_ERROR

    if any(s is LaunchState.FAILED for s in states):
        return EXIT_ITEM_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
