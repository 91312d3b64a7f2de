"""
Fzf chooser implementation for dwmc-backup.

This module provides a wrapper around ``fzf`` that lets the user pick a
restore point from the snapshot labels.
"""

import logging
import shlex
import subprocess
from typing import List, Optional

from dwmc_backup.engine import BaseChooser
from dwmc_backup.errors import RestoreSubprocessFailed

logger = logging.getLogger("dwmc_backup.engine.fzf")

# fzf exit codes: 1 = no match, 130 = interrupted with Esc or Ctrl+C
NO_SELECTION_RETURNCODES = (1, 130)


class FzfChooser(BaseChooser):
    """Single-line chooser backed by ``fzf``."""

    def __init__(self, binary_path: str = "fzf", prompt: str = "Restore point> "):
        self.binary_path = binary_path
        self.prompt = prompt

    def select(self, choices: List[str]) -> Optional[str]:
        """
        Pipe *choices* into fzf and return the line the user picked.

        Args:
            choices: Lines to choose from, in display order

        Returns:
            The chosen line, or None if fzf found no match or was cancelled

        Raises:
            RestoreSubprocessFailed: if fzf fails or cannot be started
        """
        cmd = [self.binary_path, "--no-multi", f"--prompt={self.prompt}"]
        cmd_str = " ".join(shlex.quote(arg) for arg in cmd)
        logger.debug(f"Running command: {cmd_str} with {len(choices)} choices")

        try:
            # fzf draws its UI on the terminal, only the choice goes to stdout
            result = subprocess.run(
                cmd,
                input="\n".join(choices) + "\n",
                stdout=subprocess.PIPE,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.error(f"Could not start {self.binary_path}: {e}")
            raise RestoreSubprocessFailed(cmd, None, str(e)) from e

        if result.returncode in NO_SELECTION_RETURNCODES:
            logger.debug(f"fzf returned {result.returncode}, nothing selected")
            return None
        if result.returncode != 0:
            raise RestoreSubprocessFailed(cmd, result.returncode)

        selected = (result.stdout or "").strip()
        return selected or None
