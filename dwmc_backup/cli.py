"""
Command-line interface for dwmc-backup.

This module provides the command-line entry point: ``dwmc-backup backup``
creates the next incremental snapshot, ``dwmc-backup restore`` picks one
interactively and replays the chain up to it.
"""

import logging
import traceback
from typing import Annotated, NoReturn, Optional

import typer
from rich.logging import RichHandler

from dwmc_backup import __version__
from dwmc_backup.config import (
    CONFIG_TEMPLATE,
    BackupConfig,
    ConfigAction,
    default_config_path,
    missing_config_action,
    write_template,
)
from dwmc_backup.engine.fzf import FzfChooser
from dwmc_backup.engine.tar import TarArchiver
from dwmc_backup.errors import MissingTool, SetupError, UserInterrupt
from dwmc_backup.logger import attach_log_files, console, detach_log_files, log
from dwmc_backup.operations import backup, restore
from dwmc_backup.paths import BackupContext, initialize
from dwmc_backup.tools import missing_tools

# Set up the console and logger
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=console, rich_tracebacks=True)],
)
logger = logging.getLogger("dwmc_backup")

USAGE = "usage: {backup|restore}"

REQUIRED_TOOLS = {
    "backup": ["tar", "pigz"],
    "restore": ["tar", "pigz", "fzf"],
}

# Create the Typer app
app = typer.Typer(
    help="Incremental tar/pigz backups with interactive restore points.",
    add_completion=False,
)


def report_setup_error(error: SetupError) -> NoReturn:
    """Print a setup error and its remediation hint, then exit 1."""
    console.print(str(error), style="red", markup=False)
    if error.hint:
        console.print(error.hint, markup=False)
    raise typer.Exit(1)


def load_config() -> BackupConfig:
    """
    Load the configuration, offering to write a template when it is missing.

    Exits with status 1 when the file is missing, whether or not a template
    was written.
    """
    path = default_config_path()
    exists = path.exists()
    wants_template = False

    if not exists:
        console.print(f"\n{path} not found\n", markup=False)
        console.print(f"Please create {path} with the following content:", markup=False)
        for line in CONFIG_TEMPLATE.splitlines():
            console.print(f"> {line}", markup=False)
        wants_template = typer.confirm(
            f"Would you like to create a template {path} file?", default=False
        )

    action = missing_config_action(exists, wants_template)
    if action is ConfigAction.ABORT_WITH_TEMPLATE:
        write_template(path)
        console.print(
            f"Template written to {path}. Fill in both paths and run again.",
            markup=False,
        )
    if action is not ConfigAction.PROCEED:
        raise typer.Exit(1)

    return BackupConfig.load(path)


def check_tools(action: str) -> None:
    """Raise ``MissingTool`` for the first program *action* needs but cannot find."""
    missing = missing_tools(REQUIRED_TOOLS[action])
    if missing:
        raise MissingTool(
            f"{missing[0]} not found, please install it.",
            hint=f"> Missing: {', '.join(missing)}",
        )


def run_action(action: str, context: BackupContext) -> None:
    """Run *action* with the process-backed tar and fzf engines."""
    try:
        if action == "backup":
            backup(context, TarArchiver())
        else:
            restore(context, TarArchiver(), FzfChooser())
    except KeyboardInterrupt as e:
        raise UserInterrupt("Interrupted by user") from e


def version_callback(value: bool) -> None:
    if value:
        console.print(f"dwmc-backup version: {__version__}")
        raise typer.Exit()


@app.command()
def main(
    action: Annotated[
        Optional[str],
        typer.Argument(help="Action to run: backup or restore.", show_default=False),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose output.")
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show the application version and exit.",
        ),
    ] = None,
) -> None:
    """
    Create an incremental backup, or restore one picked from a list.
    """
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.debug("Verbose logging enabled")

    if action not in REQUIRED_TOOLS:
        typer.echo(USAGE)
        raise typer.Exit(1)

    # Setup errors are reported directly; the log files may not exist yet.
    try:
        config = load_config()
        context = initialize(config)
        check_tools(action)
    except SetupError as e:
        report_setup_error(e)

    attach_log_files(context)
    try:
        run_action(action, context)
    except UserInterrupt:
        console.print("Interrupt, exiting...")
        raise typer.Exit(0) from None
    except Exception as e:
        log(f"Error: {e}", is_error=True)
        log(f"Stack trace: {traceback.format_exc()}", is_error=True)
        raise typer.Exit(1) from e
    finally:
        detach_log_files()


if __name__ == "__main__":
    app()
