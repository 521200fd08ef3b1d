"""Log the configuration of ilnav at startup."""

import logging
import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import TypedDict

from git import InvalidGitRepositoryError
from git import NoSuchPathError
from git import Repo

from ..settings.settings import SETTINGS
from .settings import DUMP_ALL_CONFIG


class GitInfo(TypedDict):
    "Information about the Git checkout ilnav runs from, see get_git_info()."

    worktree: Path | None
    commit: str | None
    branch: str | None
    dirty: bool | None


def str_or_na(v: object) -> str:
    "Convert a value to a string, with N/A for None."
    return "N/A" if v is None else str(v)


def get_git_info() -> GitInfo:
    """
    Describe the Git checkout this source file lives in.

    Installed (non-editable) copies are not inside a repository; all fields are None then.
    """
    result: GitInfo = {"worktree": None, "commit": None, "branch": None, "dirty": None}
    try:
        repo = Repo(Path(__file__), search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        return result

    result["worktree"] = Path(repo.working_tree_dir) if repo.working_tree_dir is not None else None
    try:
        result["commit"] = repo.head.commit.hexsha
        result["branch"] = repo.active_branch.name
        result["dirty"] = repo.is_dirty()
    except (ValueError, TypeError):
        # fresh repository without commits, or detached HEAD
        pass
    return result


def get_pip_info() -> list[str]:
    "List the installed Python packages."
    return subprocess.run(
        [sys.executable, "-m", "pip", "freeze"], check=True, capture_output=True, text=True
    ).stdout.splitlines()


def dump_config(log: logging.Logger) -> None:
    """
    Log process parameters, Git info and all effective settings at debug level.

    Must be called after settings are loaded and logging is initialized.
    """
    log.debug(
        "\n".join(
            [
                "Process configuration:",
                f"    Command line: {shlex.join(sys.argv)}",
                f"    Python: {sys.executable}",
                f"    Working dir: {os.getcwd()}",
            ]
        )
    )

    git_info = get_git_info()
    log.debug(
        "\n".join(
            [
                "ilnav Git info:",
                f"    Work tree: {str_or_na(git_info['worktree'])}",
                f"    Branch: {str_or_na(git_info['branch'])}",
                f"    Commit: {str_or_na(git_info['commit'])}",
                f"    Dirty: {str_or_na(git_info['dirty'])}",
            ]
        )
    )

    if DUMP_ALL_CONFIG.get():
        log.debug(f"Installed Python packages: {shlex.join(get_pip_info())}")

    log_lines = ["Effective settings:"]
    for name, value in sorted(SETTINGS.values.items()):
        log_lines.append(f"    {name}: {value}")
    log.debug("\n".join(log_lines))
