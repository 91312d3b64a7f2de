"""
External program checks for dwmc-backup.

Each action needs a few programs on PATH; they are looked up with ``which``
before any work starts.
"""

import logging
import subprocess
from typing import Iterable, List

logger = logging.getLogger("dwmc_backup.tools")


def is_installed(name: str) -> bool:
    """Return True if *name* is found on PATH by ``which``."""
    try:
        subprocess.run(["which", name], check=True, capture_output=True)
    except (subprocess.CalledProcessError, FileNotFoundError):
        logger.debug(f"`{name}` is not installed")
        return False
    return True


def missing_tools(names: Iterable[str]) -> List[str]:
    """Return the programs in *names* that are not installed, in order."""
    return [name for name in names if not is_installed(name)]
