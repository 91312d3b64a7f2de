"""
Backup and restore operations for dwmc-backup.

Both operations take the run context plus the external programs to drive,
so they can be exercised with fakes instead of real tarballs.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from dwmc_backup.engine import BaseArchiver, BaseChooser
from dwmc_backup.errors import SnapshotExists
from dwmc_backup.logger import console, log
from dwmc_backup.paths import BackupContext
from dwmc_backup.snapshots import (
    list_snapshots,
    resolve_selection,
    restore_chain,
    snapshot_label,
)

logger = logging.getLogger("dwmc_backup.operations")


def backup(context: BackupContext, archiver: BaseArchiver) -> Path:
    """
    Create the next incremental snapshot of the source directory.

    Args:
        context: Run context
        archiver: Archiver used to write the snapshot

    Returns:
        Path of the new archive

    Raises:
        SnapshotExists: if an archive with this run's timestamp already exists
        BackupSubprocessFailed: if the archiver fails
    """
    archive = context.archive_path()
    if archive.exists():
        raise SnapshotExists(f"Snapshot already exists: {archive}")

    log(f"Creating incremental backup: {archive}")
    archiver.create(archive, context.snar_file, context.source_dir)
    log(f"Backup completed: {archive}")
    return archive


def _prepare_restore_dir(restore_dir: Path) -> None:
    try:
        shutil.rmtree(restore_dir)
    except FileNotFoundError:
        pass
    restore_dir.mkdir(parents=True)


def restore(
    context: BackupContext, archiver: BaseArchiver, chooser: BaseChooser
) -> Optional[Path]:
    """
    Let the user pick a snapshot and replay the chain up to it.

    The restore directory is wiped and rebuilt from scratch. If an extraction
    fails it is left as it was at that point.

    Args:
        context: Run context
        archiver: Archiver used to extract snapshots
        chooser: Interactive chooser used to pick the snapshot

    Returns:
        The restore directory, or None if nothing was restored

    Raises:
        RestoreSubprocessFailed: if the chooser or an extraction fails
    """
    snapshots = list_snapshots(context.snapshots_dir)
    if not snapshots:
        console.print("No backups found.")
        return None

    labels = [snapshot_label(s) for s in snapshots]
    selected = resolve_selection(snapshots, labels, chooser.select(labels))
    if selected is None:
        console.print("No backup selected. Restore aborted.")
        return None

    logger.debug(f"Selected snapshot {selected.name}")
    _prepare_restore_dir(context.restore_dir)

    for snapshot in restore_chain(snapshots, selected):
        log(f"Restoring incremental backup: {snapshot.name}")
        archiver.extract(snapshot.path, context.restore_dir)

    log("Restore completed.")
    return context.restore_dir
