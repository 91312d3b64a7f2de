"""
Engine package for dwmc-backup.

This module provides the interfaces for the external programs dwmc-backup
drives: an archiver that creates and extracts incremental snapshots, and a
chooser that lets the user pick one line out of many.
"""

import abc
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class Snapshot:
    """Represents one incremental snapshot archive on disk."""

    name: str
    timestamp: int
    path: Path

    @property
    def time(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)


class BaseArchiver(abc.ABC):
    """Base class for incremental archivers."""

    @abc.abstractmethod
    def create(self, archive: Path, state_file: Path, source: Path) -> None:
        """
        Create an incremental archive of *source*.

        Args:
            archive: Archive file to write
            state_file: Incremental state file, updated in place
            source: Directory to archive

        Raises:
            BackupSubprocessFailed: if the archiver fails
        """
        pass

    @abc.abstractmethod
    def extract(self, archive: Path, target: Path) -> None:
        """
        Extract *archive* into *target*.

        Raises:
            RestoreSubprocessFailed: if the archiver fails
        """
        pass


class BaseChooser(abc.ABC):
    """Base class for interactive single-line choosers."""

    @abc.abstractmethod
    def select(self, choices: List[str]) -> Optional[str]:
        """
        Let the user pick one of *choices*.

        Returns:
            The chosen line, or None if the user made no choice
        """
        pass
