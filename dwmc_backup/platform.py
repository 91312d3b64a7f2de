"""
Platform detection helpers for dwmc-backup.

Centralizes Windows vs POSIX differences so the rest of the codebase
can call simple functions instead of scattering ``sys.platform`` checks.
"""

import os
import sys
from pathlib import Path

from dwmc_backup.errors import HomeNotSet


def is_windows() -> bool:
    """Return True when running on Windows."""
    return sys.platform.startswith("win")


def home_env_var() -> str:
    """Return the environment variable holding the user's home directory."""
    if is_windows():
        return "USERPROFILE"
    return "HOME"


def home_directory() -> Path:
    """Return the user's home directory from the environment.

    Raises:
        HomeNotSet: if the variable is unset or empty
    """
    name = home_env_var()
    value = os.environ.get(name)
    if not value:
        raise HomeNotSet(
            f"{name} is not set",
            hint=f"> Set {name} to your home directory and try again.",
        )
    return Path(value)
