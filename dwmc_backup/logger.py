"""
Append-only run journal for dwmc-backup.

Messages go to ``_backup.log``, errors to ``_error.log``, both under the
backup directory. Records also propagate to the root logger, which the CLI
points at the console.
"""

import logging
from pathlib import Path
from typing import List

from rich.console import Console

from dwmc_backup.paths import BackupContext

JOURNAL_LOGGER = "dwmc_backup.journal"

# Shared by every module that talks to the user
console = Console()

journal = logging.getLogger(JOURNAL_LOGGER)

_handlers: List[logging.Handler] = []


class _BelowErrorFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.ERROR


def _file_handler(path: Path, level: int) -> logging.FileHandler:
    # delay=True: the file is created on the first record, not up front
    handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[%(asctime)s] %(message)s", datefmt="%c"))
    return handler


def attach_log_files(context: BackupContext) -> None:
    """Route journal records to the log files of *context*."""
    detach_log_files()

    log_handler = _file_handler(context.log_file, logging.DEBUG)
    log_handler.addFilter(_BelowErrorFilter())
    error_handler = _file_handler(context.error_log_file, logging.ERROR)

    for handler in (log_handler, error_handler):
        journal.addHandler(handler)
        _handlers.append(handler)
    journal.setLevel(logging.INFO)


def detach_log_files() -> None:
    """Close and remove any handlers installed by ``attach_log_files``."""
    while _handlers:
        handler = _handlers.pop()
        journal.removeHandler(handler)
        handler.close()


def log(message: str, is_error: bool = False) -> None:
    """Append *message* to the run log, or to the error log if *is_error*."""
    if is_error:
        journal.error(message)
    else:
        journal.info(message)
