"""
Tar engine implementation for dwmc-backup.

This module provides a wrapper around GNU tar with pigz as the compression
program, using a ``--listed-incremental`` state file so that every archive
only holds the changes since the previous one.
"""

import logging
import shlex
import signal
import subprocess
import sys
from collections import deque
from pathlib import Path
from typing import Deque, List, Type

from dwmc_backup.engine import BaseArchiver
from dwmc_backup.errors import (
    BackupSubprocessFailed,
    RestoreSubprocessFailed,
    SubprocessFailed,
    UserInterrupt,
)

logger = logging.getLogger("dwmc_backup.engine.tar")

# Shells report a SIGINT death as 128 + 2; subprocess reports it as -2.
INTERRUPTED_RETURNCODES = (128 + signal.SIGINT, -signal.SIGINT)

# Lines of stderr kept for the error raised on failure
STDERR_TAIL_LINES = 20


class TarArchiver(BaseArchiver):
    """Incremental archiver backed by ``tar`` and ``pigz``."""

    def __init__(self, binary_path: str = "tar", compress_program: str = "pigz -k"):
        """
        Initialize the tar archiver.

        Args:
            binary_path: Path to the tar binary
            compress_program: Compression program handed to ``--use-compress-program``
        """
        self.binary_path = binary_path
        self.compress_program = compress_program

    def _base_args(self) -> List[str]:
        return [f"--use-compress-program={self.compress_program}", "--verbose"]

    def _run_command(self, args: List[str], error: Type[SubprocessFailed]) -> None:
        """
        Run a tar command, streaming its output to the console.

        stdout is inherited. stderr is echoed line by line as tar writes it,
        and its last ``STDERR_TAIL_LINES`` lines are kept for the error.

        Args:
            args: Command arguments
            error: Exception type raised on failure

        Raises:
            UserInterrupt: if tar was killed by SIGINT
            SubprocessFailed: (as *error*) if tar fails or cannot be started
        """
        cmd = [self.binary_path] + args
        cmd_str = " ".join(shlex.quote(str(arg)) for arg in cmd)
        logger.debug(f"Running command: {cmd_str}")

        try:
            process = subprocess.Popen(cmd, stderr=subprocess.PIPE, text=True)
        except OSError as e:
            logger.error(f"Could not start {self.binary_path}: {e}")
            raise error(cmd, None, str(e)) from e

        tail: Deque[str] = deque(maxlen=STDERR_TAIL_LINES)
        with process:
            for line in process.stderr:
                sys.stderr.write(line)
                tail.append(line)
            returncode = process.wait()

        stderr = "".join(tail).strip()
        if returncode in INTERRUPTED_RETURNCODES:
            raise UserInterrupt(f"{self.binary_path} was interrupted")
        if returncode != 0:
            logger.error(f"Command failed: {cmd_str}")
            logger.error(f"Return code: {returncode}")
            logger.error(f"Stderr: {stderr}")
            raise error(cmd, returncode, stderr)
        if stderr:
            logger.debug(f"tar stderr:\n{stderr}")

    def create(self, archive: Path, state_file: Path, source: Path) -> None:
        args = self._base_args() + [
            "--create",
            f"--file={archive}",
            f"--listed-incremental={state_file}",
            str(source),
        ]
        self._run_command(args, BackupSubprocessFailed)

    def extract(self, archive: Path, target: Path) -> None:
        args = self._base_args() + [
            "--extract",
            f"--file={archive}",
            "-C",
            str(target),
        ]
        self._run_command(args, RestoreSubprocessFailed)
