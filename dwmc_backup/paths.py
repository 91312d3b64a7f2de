"""
Derived paths and per-run state for dwmc-backup.

Everything the backup and restore steps need is resolved once here and
handed around as an immutable ``BackupContext``.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dwmc_backup.config import BackupConfig
from dwmc_backup.errors import BackupPathConflict, SourceNotDirectory

logger = logging.getLogger("dwmc_backup.paths")

SNAPSHOTS_DIRNAME = "snapshots"
RESTORE_DIRNAME = "restore"
SNAR_FILENAME = "backup.snar"
LOG_FILENAME = "_backup.log"
ERROR_LOG_FILENAME = "_error.log"


@dataclass(frozen=True)
class BackupContext:
    """Resolved configuration, layout and timestamp for a single run."""

    source_dir: Path
    backup_dir: Path
    timestamp: int

    @property
    def snapshots_dir(self) -> Path:
        return self.backup_dir / SNAPSHOTS_DIRNAME

    @property
    def restore_dir(self) -> Path:
        return self.backup_dir / RESTORE_DIRNAME

    @property
    def snar_file(self) -> Path:
        return self.backup_dir / SNAR_FILENAME

    @property
    def log_file(self) -> Path:
        return self.backup_dir / LOG_FILENAME

    @property
    def error_log_file(self) -> Path:
        return self.backup_dir / ERROR_LOG_FILENAME

    def archive_path(self) -> Path:
        """Return the archive path for this run's snapshot."""
        return self.snapshots_dir / f"backup_{self.timestamp}.tar.gz"


def _make_directory(path: Path, name: str) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except FileExistsError as e:
        raise BackupPathConflict(
            f"{name} is not a directory: {path}",
            hint="> Please delete the file and try again.",
        ) from e
    except OSError as e:
        raise BackupPathConflict(
            f"Could not create {name} {path}: {e.strerror or e}",
            hint="> Check the permissions of the parent directory and try again.",
        ) from e


def initialize(config: BackupConfig, now: Optional[int] = None) -> BackupContext:
    """
    Validate the configured directories and create the backup layout.

    Args:
        config: Validated configuration
        now: Run timestamp in seconds since the epoch; defaults to the current time

    Returns:
        The run context

    Raises:
        SourceNotDirectory: if SOURCE_DIR is missing or not a directory
        BackupPathConflict: if BACKUP_DIR or its snapshot directory exists but
            is not a directory, or cannot be created
    """
    if not config.source_dir.is_dir():
        raise SourceNotDirectory(
            f"SOURCE_DIR is not a directory: {config.source_dir}",
            hint="> Please create the directory and try again.",
        )

    backup_dir = config.backup_dir
    if not backup_dir.exists():
        logger.info(f"BACKUP_DIR not found, creating {backup_dir}...")
        _make_directory(backup_dir, "BACKUP_DIR")
    elif not backup_dir.is_dir():
        raise BackupPathConflict(
            f"BACKUP_DIR is not a directory: {backup_dir}",
            hint="> Please delete the file and try again.",
        )

    context = BackupContext(
        source_dir=config.source_dir,
        backup_dir=backup_dir,
        timestamp=int(time.time()) if now is None else now,
    )
    _make_directory(context.snapshots_dir, SNAPSHOTS_DIRNAME)
    return context
