"""Settings for the ilnav loggers."""

import logging
from pathlib import Path

from ilnavcommon.settings import setting


def log_level(text: str) -> str:
    "Check that text is the name of a logging level and return it in upper case."
    name = text.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"Unknown log level {text!r}")
    return name


LOG_DIR = setting(
    "log-dir",
    Path | None,
    description=(
        "Directory to write per-run log files to. "
        "Default is to log to the console only."
    ),
    default=None,
    cli_option="--log-dir",
)

LOG_LEVEL = setting(
    "log-level",
    log_level,
    description="Minimum level of messages shown on the console (DEBUG, INFO, WARNING, ERROR)",
    default="INFO",
    cli_option="--log-level",
)

DUMP_ALL_CONFIG = setting(
    "dump-all-config",
    bool,
    description="Spend extra effort to gather more information about the environment at startup",
    default=False,
    cli_option="--dump-all-config",
)
