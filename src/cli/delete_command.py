"""Delete command orchestration for CLI.

This module provides the DeleteCommand class that runs the delete tool:
discover every page below the root, delete them children-first and delete
the root last.
"""

import logging
from typing import Optional

from src.cli.errors import exit_code_for
from src.cli.models import DeleteConfig, ExitCode
from src.cli.output import OutputHandler
from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.auth import Authenticator
from src.confluence_client.errors import ToolError
from src.page_tree.deleter import TreeDeleter
from src.page_tree.errors import DeleteError, FetchError
from src.page_tree.models import ContentQuery
from src.page_tree.walker import TreeWalker

logger = logging.getLogger(__name__)


class DeleteCommand:
    """Orchestrates deletion of a page and all of its descendants.

    The tree is always discovered recursively; there is no flag to delete
    the root alone. Nothing is deleted if discovery fails.

    Example:
        >>> config = ConfigLoader.load_delete(overrides={...})
        >>> exit_code = DeleteCommand(OutputHandler()).run(config)
    """

    def __init__(
        self,
        output_handler: Optional[OutputHandler] = None,
        api: Optional[APIWrapper] = None,
    ):
        """Initialize delete command with dependencies.

        Args:
            output_handler: OutputHandler for terminal output (optional)
            api: Client for the account (optional, built from config)
        """
        self.output_handler = output_handler or OutputHandler()
        self.api = api

    def run(self, config: DeleteConfig, dry_run: bool = False) -> ExitCode:
        """Execute the delete.

        Args:
            config: Resolved delete configuration
            dry_run: If True, show the pages that would be deleted and stop

        Returns:
            ExitCode indicating success or specific failure type
        """
        location = config.location
        try:
            if self.api is None:
                self.api = APIWrapper(Authenticator(location.credentials()))

            walker = TreeWalker(self.api, ContentQuery(space_key=location.space_key))
            deleter = TreeDeleter(self.api, walker)

            with self.output_handler.spinner(f"Reading pages from {location.page_id}..."):
                tree = deleter.discover(location.page_id)
            self.output_handler.info(f"Discovered {tree.count()} page(s)")

            if dry_run:
                self.output_handler.print_delete_dryrun(tree)
                return ExitCode.SUCCESS

            deleted = deleter.delete_nodes(tree)
            self.output_handler.print_delete_summary(deleted)
            return ExitCode.SUCCESS

        except DeleteError as e:
            logger.error(f"Delete failed: {e}")
            self.output_handler.error(f"Delete failed: {e}")
            if e.deleted:
                self.output_handler.warning(
                    f"{len(e.deleted)} page(s) were deleted before the failure"
                )
            return exit_code_for(e)

        except FetchError as e:
            logger.error(f"Reading failed: {e}")
            self.output_handler.error(f"Failed to get child content: {e}")
            return exit_code_for(e)

        except ToolError as e:
            logger.error(f"Error: {e}")
            self.output_handler.error(f"Error: {e}")
            return exit_code_for(e)

        except Exception as e:
            logger.exception("Unexpected error during delete")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR
