"""
Allows the package to be executed as a script using:
python -m dwmc_backup
"""

from dwmc_backup.cli import app

if __name__ == "__main__":
    app()
