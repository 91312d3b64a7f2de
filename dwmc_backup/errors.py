"""
Error taxonomy for dwmc-backup.

Setup errors are reported to the user with a remediation hint and end the
process before any log file exists. Everything else is a runtime error and is
recorded in the error log by the CLI.
"""

from typing import List, Optional


class DwmcBackupError(Exception):
    """Base class for all dwmc-backup errors."""


class SetupError(DwmcBackupError):
    """An error raised while bootstrapping configuration, paths or tools."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.hint = hint


class HomeNotSet(SetupError):
    """The user's home directory could not be determined."""


class ConfigMissing(SetupError):
    """The configuration file does not exist."""


class ConfigInvalid(SetupError):
    """The configuration file could not be parsed or lacks a required key."""


class SourceNotDirectory(SetupError):
    """SOURCE_DIR does not exist or is not a directory."""


class BackupPathConflict(SetupError):
    """BACKUP_DIR exists but is not a directory."""


class MissingTool(SetupError):
    """A required external program is not installed."""


class SubprocessFailed(DwmcBackupError):
    """An external program exited non-zero or could not be started."""

    def __init__(
        self,
        cmd: List[str],
        returncode: Optional[int],
        stderr: str = "",
    ):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            message = f"{cmd[0]} could not be started"
        else:
            message = f"{cmd[0]} exited with status {returncode}"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(message)


class BackupSubprocessFailed(SubprocessFailed):
    """The archiver failed while creating a snapshot."""


class RestoreSubprocessFailed(SubprocessFailed):
    """The archiver or the chooser failed during a restore."""


class SnapshotExists(DwmcBackupError):
    """The archive for this run's timestamp is already on disk."""


class UserInterrupt(DwmcBackupError):
    """The user interrupted the run (Ctrl+C)."""
