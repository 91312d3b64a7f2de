"""
Shared fixtures and fake engines for the unit tests.
"""

import os
from pathlib import Path
from typing import Dict, Generator, List, Optional, Tuple
from unittest.mock import patch

import pytest

from dwmc_backup.config import BackupConfig
from dwmc_backup.engine import BaseArchiver, BaseChooser
from dwmc_backup.errors import RestoreSubprocessFailed
from dwmc_backup.logger import detach_log_files
from dwmc_backup.paths import BackupContext, initialize


class FakeArchiver(BaseArchiver):
    """Records calls instead of running tar; ``create`` writes an empty archive."""

    def __init__(self, fail_on: Optional[str] = None):
        self.created: List[Tuple[Path, Path, Path]] = []
        self.extracted: List[Tuple[Path, Path]] = []
        self.fail_on = fail_on

    def create(self, archive: Path, state_file: Path, source: Path) -> None:
        self.created.append((archive, state_file, source))
        archive.write_bytes(b"")
        state_file.touch()

    def extract(self, archive: Path, target: Path) -> None:
        if archive.name == self.fail_on:
            raise RestoreSubprocessFailed(["tar"], 2, "unexpected end of file")
        self.extracted.append((archive, target))
        (target / archive.name).touch()

    @property
    def extracted_names(self) -> List[str]:
        return [archive.name for archive, _ in self.extracted]


class FakeChooser(BaseChooser):
    """Picks the first choice starting with *prefix*, or nothing."""

    def __init__(self, prefix: Optional[str] = None):
        self.prefix = prefix
        self.choices: List[str] = []

    def select(self, choices: List[str]) -> Optional[str]:
        self.choices = list(choices)
        if self.prefix is None:
            return None
        for choice in choices:
            if choice.startswith(self.prefix):
                return choice + "\n"
        return None


@pytest.fixture(autouse=True)
def close_log_files() -> Generator[None, None, None]:
    """Make sure no test leaves log file handlers attached."""
    yield
    detach_log_files()


@pytest.fixture
def home(tmp_path: Path) -> Generator[Path, None, None]:
    """Point HOME at a temporary directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    env: Dict[str, str] = {"HOME": str(home_dir), "USERPROFILE": str(home_dir)}
    with patch.dict(os.environ, env):
        yield home_dir


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    path = tmp_path / "data"
    path.mkdir()
    (path / "notes.md").write_text("hello")
    return path


@pytest.fixture
def backup_dir(tmp_path: Path) -> Path:
    return tmp_path / "backups"


@pytest.fixture
def context(source_dir: Path, backup_dir: Path) -> BackupContext:
    config = BackupConfig(source_dir=source_dir, backup_dir=backup_dir)
    return initialize(config, now=1700000000)


@pytest.fixture
def archiver() -> FakeArchiver:
    return FakeArchiver()


@pytest.fixture
def chooser() -> FakeChooser:
    return FakeChooser()


@pytest.fixture
def make_snapshots(context: BackupContext):
    """Return a helper that creates empty archives in the snapshot dir."""

    def _make(*timestamps: int) -> None:
        for timestamp in timestamps:
            (context.snapshots_dir / f"backup_{timestamp}.tar.gz").write_bytes(b"")

    return _make
