"""Test the logger setup."""

import logging
from pathlib import Path

from ilnavcommon.logging.logging_provider import LoggingProvider


def close_handlers(*loggers: logging.Logger) -> None:
    "Close and detach all handlers so log files can be read and removed."
    for logger in loggers:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


def test_console_and_file(tmp_path: Path) -> None:
    """Loggers write to the log directory; only some of them also to the console."""

    provider = LoggingProvider()
    shown = provider.new_logger("ilnavtest_shown")
    quiet = provider.new_logger("ilnavtest_quiet", log_to_console=False)

    provider.init_logging(tmp_path)
    quiet.info("registry scanned")
    close_handlers(shown, quiet)

    log_file = provider.log_file("ilnavtest_quiet")
    assert log_file is not None and log_file.parent == tmp_path
    assert "registry scanned" in log_file.read_text(encoding="utf-8")


def test_handlers(tmp_path: Path) -> None:
    """Console handlers are skipped for quiet loggers, also for loggers created after initialization."""

    provider = LoggingProvider()
    shown = provider.new_logger("ilnavtest_early")
    provider.init_logging(tmp_path)
    quiet = provider.new_logger("ilnavtest_late", log_to_console=False)

    try:
        assert [type(h) for h in shown.handlers] == [logging.StreamHandler, logging.FileHandler]
        assert [type(h) for h in quiet.handlers] == [logging.FileHandler]
        assert provider.new_logger("ilnavtest_late") is quiet
    finally:
        close_handlers(shown, quiet)
