"""Logging setup for the gotfiles command line.

Per-item problems (a copy that failed, a missing backup) are reported
through the standard ``logging`` module and rendered by rich on the
terminal. ``--log-file`` adds a plain-text record of the whole run.
"""

import logging
import sys
from pathlib import Path
from types import TracebackType
from typing import Optional, Type

from rich.console import Console
from rich.logging import RichHandler

console = Console()

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    """Route gotfiles log records to the terminal and, optionally, a file.

    Args:
        debug: Show DEBUG records (including each git invocation) on the
            terminal, with source locations and tracebacks with locals.
        log_file: Path of a log file that always receives DEBUG records.
            ``~`` is expanded and missing parent directories are created.
    """
    terminal_level = logging.DEBUG if debug else logging.INFO

    root = logging.getLogger()
    root.handlers.clear()

    terminal = RichHandler(
        console=console,
        level=terminal_level,
        show_path=debug,
        rich_tracebacks=True,
        tracebacks_show_locals=debug,
    )
    root.addHandler(terminal)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        record = logging.FileHandler(path, encoding="utf-8")
        record.setLevel(logging.DEBUG)
        record.setFormatter(logging.Formatter(FILE_FORMAT))
        root.addHandler(record)

    # The root level gates every handler, so it follows the most verbose one
    root.setLevel(logging.DEBUG if log_file else terminal_level)

    logger = logging.getLogger(__name__)
    logger.debug("Logging initialized (debug=%s, log_file=%s)", debug, log_file)
    sys.excepthook = _log_uncaught(logger)


def _log_uncaught(logger: logging.Logger):
    def hook(
        exc_type: Type[BaseException],
        exc_value: BaseException,
        exc_traceback: Optional[TracebackType],
    ) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

    return hook
