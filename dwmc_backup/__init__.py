"""
dwmc-backup - incremental tar/pigz backups with interactive restore points.

Snapshot a directory on every run, replay the chain to get any point back.
"""

from importlib.metadata import version as _version

__version__ = _version("dwmc-backup")
