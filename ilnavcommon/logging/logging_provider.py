"""Central registry and setup of the ilnav loggers."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from types import TracebackType

from .settings import LOG_DIR
from .settings import LOG_LEVEL

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(filename)s:%(lineno)d] %(message)s"


class LoggingProvider:
    """
    Hand out named loggers and attach handlers to them once logging is initialized.

    Loggers may be created at import time; init_logging() configures all of them (and any created later).
    """

    def __init__(self) -> None:
        self.loggers: dict[str, tuple[logging.Logger, bool]] = {}
        self.file_name_tag = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.output_dir: Path | None = None
        self.console_level = logging.INFO
        self.initialized = False
        self._hooked: list[logging.Logger] = []

    def new_logger(self, name: str, hook_exception: bool = False, log_to_console: bool = True) -> logging.Logger:
        """
        Create (or return) the logger with the given name.

        hook_exception: Log uncaught exceptions to this logger.
        log_to_console: Also show messages on stderr, not only in the log file.
        """
        if name in self.loggers:
            return self.loggers[name][0]

        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        self.loggers[name] = (logger, log_to_console)

        if hook_exception:
            self._hook_exceptions(logger)
        if self.initialized:
            self._attach_handlers(logger, log_to_console)

        return logger

    def init_logging(self, output_dir: Path | None = None) -> None:
        """
        Attach console and file handlers to all loggers.

        output_dir: Directory for log files. Default is the log-dir setting; if neither is set, no files are written.
        Settings must be loaded before calling this.
        """
        self.output_dir = output_dir if output_dir is not None else LOG_DIR.get()
        self.console_level = logging.getLevelName(LOG_LEVEL.get())
        if self.output_dir is not None:
            self.output_dir.mkdir(parents=True, exist_ok=True)

        for logger, log_to_console in self.loggers.values():
            self._attach_handlers(logger, log_to_console)
        self.initialized = True

    def log_file(self, name: str) -> Path | None:
        "Path of the log file of the given logger for this run, if file logging is enabled."
        if self.output_dir is None:
            return None
        return self.output_dir / f"{name}_{self.file_name_tag}.log"

    def _attach_handlers(self, logger: logging.Logger, log_to_console: bool) -> None:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        if log_to_console:
            console = logging.StreamHandler(sys.stderr)
            console.setLevel(self.console_level)
            console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
            logger.addHandler(console)

        log_file = self.log_file(logger.name)
        if log_file is not None:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            logger.addHandler(file_handler)

    def _hook_exceptions(self, logger: logging.Logger) -> None:
        self._hooked.append(logger)
        if len(self._hooked) > 1:
            return

        previous_hook = sys.excepthook

        def excepthook(
            exc_type: type[BaseException], exc: BaseException, traceback: TracebackType | None
        ) -> None:
            if not issubclass(exc_type, KeyboardInterrupt):
                for hooked in self._hooked:
                    hooked.critical("Uncaught exception", exc_info=(exc_type, exc, traceback))
            previous_hook(exc_type, exc, traceback)

        sys.excepthook = excepthook


LOGGING_PROVIDER = LoggingProvider()
