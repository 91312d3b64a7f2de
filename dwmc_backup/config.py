"""
Configuration file support for dwmc-backup.

Loads ``SOURCE_DIR`` and ``BACKUP_DIR`` from ``~/.dwmc-backup.conf`` and
exposes them as a typed dataclass. The file is a flat list of
``KEY='value'`` lines, which is valid TOML.
"""

import logging
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from dwmc_backup.errors import ConfigInvalid, ConfigMissing
from dwmc_backup.platform import home_directory

logger = logging.getLogger("dwmc_backup.config")

CONFIG_FILENAME = ".dwmc-backup.conf"

CONFIG_TEMPLATE = """\
SOURCE_DIR='<absolute_path_to_source_directory>'
BACKUP_DIR='<absolute_path_to_backup_directory>'
"""

REQUIRED_KEYS = ("SOURCE_DIR", "BACKUP_DIR")


def default_config_path() -> Path:
    """Return the configuration file path, ``~/.dwmc-backup.conf``."""
    return home_directory() / CONFIG_FILENAME


class ConfigAction(Enum):
    """What the entry point should do about the configuration file."""

    PROCEED = "proceed"
    ABORT_WITH_TEMPLATE = "abort_with_template"
    ABORT_SILENTLY = "abort_silently"


def missing_config_action(exists: bool, wants_template: bool = False) -> ConfigAction:
    """Decide how to continue given whether the config file exists.

    A freshly written template only holds placeholders, so both missing-file
    outcomes abort.
    """
    if exists:
        return ConfigAction.PROCEED
    if wants_template:
        return ConfigAction.ABORT_WITH_TEMPLATE
    return ConfigAction.ABORT_SILENTLY


def write_template(path: Path) -> None:
    """Write a configuration template with placeholder values to *path*."""
    path.write_text(CONFIG_TEMPLATE)
    logger.debug(f"Wrote configuration template to {path}")


@dataclass(frozen=True)
class BackupConfig:
    """Validated configuration loaded from the config file."""

    source_dir: Path
    backup_dir: Path

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BackupConfig":
        """Construct a ``BackupConfig`` from a parsed key/value mapping."""
        values = {}
        for key in REQUIRED_KEYS:
            value = data.get(key)
            if value is None or str(value) == "":
                raise ConfigInvalid(
                    f"{key} not found in ~/{CONFIG_FILENAME}",
                    hint=f"> Add {key}='<absolute_path>' to ~/{CONFIG_FILENAME}",
                )
            values[key] = Path(str(value)).expanduser()

        return cls(source_dir=values["SOURCE_DIR"], backup_dir=values["BACKUP_DIR"])

    @classmethod
    def from_file(cls, path: Path) -> "BackupConfig":
        """Read *path* and return a ``BackupConfig``.

        Raises:
            ConfigInvalid: if the file cannot be read, is not valid or lacks a
                required key
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ConfigInvalid(
                f"Failed to parse {path}: {e}",
                hint="> Use one KEY='value' pair per line.",
            ) from e
        except OSError as e:
            raise ConfigInvalid(
                f"Could not read {path}: {e.strerror or e}",
                hint=f"> Make sure ~/{CONFIG_FILENAME} is a readable file.",
            ) from e
        return cls.from_dict(data)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "BackupConfig":
        """Main entry point: load config from *config_path* or the default location.

        Raises:
            ConfigMissing: if the file does not exist
        """
        path = config_path or default_config_path()
        if not path.exists():
            raise ConfigMissing(f"{path} not found")
        logger.debug(f"Loading configuration from {path}")
        return cls.from_file(path)
