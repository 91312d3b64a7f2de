"""
Snapshot enumeration and restore-chain selection for dwmc-backup.

Each archive only holds the changes since the one before it, so restoring a
point in time means extracting every archive from the oldest up to and
including the chosen one, in that order.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Sequence

from dwmc_backup.engine import Snapshot

logger = logging.getLogger("dwmc_backup.snapshots")

SNAPSHOT_PATTERN = re.compile(r"^backup_(\d+)\.tar\.gz$")


def parse_snapshot(path: Path) -> Optional[Snapshot]:
    """Return a ``Snapshot`` for *path*, or None if the name does not match."""
    match = SNAPSHOT_PATTERN.match(path.name)
    if not match:
        return None
    return Snapshot(name=path.name, timestamp=int(match.group(1)), path=path)


def list_snapshots(snapshots_dir: Path) -> List[Snapshot]:
    """
    List the snapshot archives in *snapshots_dir*, newest first.

    Entries whose names are not ``backup_<digits>.tar.gz`` are ignored.

    Args:
        snapshots_dir: Directory holding the archives

    Returns:
        Snapshots sorted by timestamp, descending
    """
    if not snapshots_dir.is_dir():
        logger.debug(f"Snapshot directory {snapshots_dir} does not exist")
        return []

    result = []
    for entry in snapshots_dir.iterdir():
        snapshot = parse_snapshot(entry)
        if snapshot is None:
            logger.debug(f"Skipping non-snapshot entry: {entry.name}")
            continue
        result.append(snapshot)

    result.sort(key=lambda s: (s.timestamp, s.name), reverse=True)
    return result


def snapshot_label(snapshot: Snapshot) -> str:
    """Return the line shown in the chooser for *snapshot*.

    Falls back to the bare name when the timestamp is not a representable date.
    """
    try:
        when = snapshot.time.isoformat()
    except (ValueError, OverflowError, OSError):
        logger.debug(f"Timestamp of {snapshot.name} is out of range")
        return snapshot.name
    return f"{snapshot.name} ({when})"


def resolve_selection(
    snapshots: Sequence[Snapshot], labels: Sequence[str], selected: Optional[str]
) -> Optional[Snapshot]:
    """Map the chooser's output back to the snapshot it was built from."""
    if not selected:
        return None
    selected = selected.strip()
    for snapshot, label in zip(snapshots, labels):
        if label == selected:
            return snapshot
    logger.warning(f"Selection does not match any snapshot: {selected!r}")
    return None


def restore_chain(snapshots: Sequence[Snapshot], selected: Snapshot) -> List[Snapshot]:
    """
    Return the snapshots to extract to restore *selected*, oldest first.

    Args:
        snapshots: Available snapshots, in any order
        selected: Snapshot to restore up to, inclusive

    Returns:
        Snapshots from the oldest up to and including *selected*

    Raises:
        ValueError: if *selected* is not among *snapshots*
    """
    ordered = sorted(snapshots, key=lambda s: (s.timestamp, s.name))
    if selected not in ordered:
        raise ValueError(f"{selected.name} is not an available snapshot")

    chain = []
    for snapshot in ordered:
        chain.append(snapshot)
        if snapshot == selected:
            break
    return chain
