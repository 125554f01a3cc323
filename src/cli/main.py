"""CLI entry points for the confluence-copy and confluence-delete commands.

This module provides the two Typer applications behind the console scripts.
Each resolves its configuration from a YAML file, the environment and flags,
configures logging, runs its command and exits with the command's exit code.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli.config import ConfigLoader
from src.cli.copy_command import CopyCommand
from src.cli.delete_command import DeleteCommand
from src.cli.errors import CLIError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.page_tree.transformer import DEFAULT_CONFLICT_SUFFIX

VERSION = "0.1.0"

copy_app = typer.Typer(
    name="confluence-copy",
    help="""Copy a Confluence page, and optionally all of its child pages, to another location.

EXAMPLE:
  confluence-copy --source-account team --source-user me@team.io -s TOKEN \\
      --source-pageid 123456 --source-spacekey SRC \\
      --dest-account team --dest-spacekey DST -r""",
    add_completion=False,
    rich_markup_mode=None,
)

delete_app = typer.Typer(
    name="confluence-delete",
    help="""Delete a Confluence page together with all of its child pages.

EXAMPLE:
  confluence-delete -a team -u me@team.io -t TOKEN -p 123456 -k SRC""",
    add_completion=False,
    rich_markup_mode=None,
)

# Module logger
logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None, debug: bool = False) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. With ``debug`` the atlassian client logger is also set to
    DEBUG, which is very noisy and may print request details.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
        debug: Also enable the atlassian library's debug output
    """
    if debug:
        verbosity = max(verbosity, 2)

    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    # Configure app-specific logger (not root) to avoid affecting libraries
    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if debug:
        atlassian_logger = logging.getLogger("atlassian")
        atlassian_logger.setLevel(logging.DEBUG)
        atlassian_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"confluence-tree-copy_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"confluence-tree-copy version {VERSION}")
        raise typer.Exit()


@copy_app.command()
def copy_command(
    source_account: Optional[str] = typer.Option(
        None, "--source-account", help="Source Confluence account name",
    ),
    dest_account: Optional[str] = typer.Option(
        None, "--dest-account", help="Destination Confluence account name. Can be same as source",
    ),
    source_user: Optional[str] = typer.Option(
        None, "--source-user", help="Source Confluence Username. Usually email address",
    ),
    dest_user: Optional[str] = typer.Option(
        None, "--dest-user", help="Destination Confluence Username. Usually email address",
    ),
    source_token: Optional[str] = typer.Option(
        None, "--source-token", "-s", help="Source Confluence API token",
    ),
    dest_token: Optional[str] = typer.Option(
        None, "--dest-token", "-d", help="Destination Confluence API token",
    ),
    source_pageid: Optional[str] = typer.Option(
        None,
        "--source-pageid",
        help="Source Confluence page ID. This is where the export will start to recursively copy pages",
    ),
    source_spacekey: Optional[str] = typer.Option(
        None, "--source-spacekey", help="Source Confluence Space key",
    ),
    dest_pageid: Optional[str] = typer.Option(
        None, "--dest-pageid", help="Destination Confluence page ID. Leave blank if top-level",
    ),
    dest_spacekey: Optional[str] = typer.Option(
        None, "--dest-spacekey", help="Destination Confluence Space key",
    ),
    recursive: bool = typer.Option(
        False,
        "--recursive",
        "-r",
        help="Enable if you want to recursively copy child pages under source-pageid",
    ),
    conflict_suffix: Optional[str] = typer.Option(
        None,
        "--conflictsuffix",
        help=f"String to append to page titles when copying within the same space "
             f"[default: {DEFAULT_CONFLICT_SUFFIX}]",
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML Configuration file. Full path and extension",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "--dryrun", help="Show the pages that would be created without creating them",
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Enable debug prints. VERY noisy. This may print request details to stderr.",
    ),
    logdir: Optional[str] = typer.Option(
        None, "--logdir", help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0, "--verbosity", "-v", help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable colored output",
    ),
    version: bool = typer.Option(
        False, "--version", "-V", help="Show version and exit",
        callback=_show_version, is_eager=True,
    ),
) -> None:
    """Copy a Confluence page tree to another space, parent page or account."""
    _configure_logging(verbosity, logdir, debug)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        config = ConfigLoader.load_copy(
            config_path=config_file,
            source_overrides={
                'account': source_account,
                'user': source_user,
                'token': source_token,
                'page_id': source_pageid,
                'space_key': source_spacekey,
            },
            dest_overrides={
                'account': dest_account,
                'user': dest_user,
                'token': dest_token,
                'page_id': dest_pageid,
                'space_key': dest_spacekey,
            },
            conflict_suffix=conflict_suffix,
        )
    except CLIError as e:
        logger.error(f"Configuration failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    exit_code = CopyCommand(output_handler=output).run(
        config, recursive=recursive, dry_run=dry_run
    )
    raise typer.Exit(exit_code)


@delete_app.command()
def delete_command(
    account: Optional[str] = typer.Option(
        None, "--account", "-a", help="Account name",
    ),
    username: Optional[str] = typer.Option(
        None, "--username", "-u", help="Username",
    ),
    token: Optional[str] = typer.Option(
        None, "--token", "-t", help="API Token",
    ),
    pageid: Optional[str] = typer.Option(
        None, "--pageid", "-p", help="Page ID to delete recursively from",
    ),
    spacekey: Optional[str] = typer.Option(
        None, "--spacekey", "-k", help="Space Key of the page",
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML Configuration file. Full path and extension",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "--dryrun", help="Show the pages that would be deleted without deleting them",
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Enable debug prints. VERY noisy. This may print request details to stderr.",
    ),
    logdir: Optional[str] = typer.Option(
        None, "--logdir", help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0, "--verbosity", "-v", help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable colored output",
    ),
    version: bool = typer.Option(
        False, "--version", "-V", help="Show version and exit",
        callback=_show_version, is_eager=True,
    ),
) -> None:
    """Delete a Confluence page and every page below it (children first, root last)."""
    _configure_logging(verbosity, logdir, debug)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        config = ConfigLoader.load_delete(
            config_path=config_file,
            overrides={
                'account': account,
                'user': username,
                'token': token,
                'page_id': pageid,
                'space_key': spacekey,
            },
        )
    except CLIError as e:
        logger.error(f"Configuration failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    exit_code = DeleteCommand(output_handler=output).run(config, dry_run=dry_run)
    raise typer.Exit(exit_code)


def main_copy() -> None:
    """Console script entry point for confluence-copy."""
    copy_app()


def main_delete() -> None:
    """Console script entry point for confluence-delete."""
    delete_app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main_copy()
