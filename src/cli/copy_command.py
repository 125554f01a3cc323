"""Copy command orchestration for CLI.

This module provides the CopyCommand class that runs the copy tool: check
the destination, discover the source tree, then recreate it at the
destination, translating failures into exit codes.
"""

import logging
from typing import Optional, Tuple

from src.cli.errors import ConfigError, exit_code_for
from src.cli.models import CopyConfig, ExitCode
from src.cli.output import OutputHandler
from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.auth import Authenticator
from src.confluence_client.errors import ConfluenceError, ToolError
from src.page_tree.errors import CreateError, FetchError
from src.page_tree.materializer import TreeMaterializer
from src.page_tree.models import ContentQuery, build_ancestry
from src.page_tree.transformer import ContentTransformer
from src.page_tree.walker import TreeWalker

logger = logging.getLogger(__name__)


class CopyCommand:
    """Orchestrates a tree copy between two Confluence locations.

    The copy workflow:
        1. Build the source and destination clients (one shared client when
           both sides use the same account)
        2. If a destination parent is given, check it exists and lives in
           the destination space
        3. Discover the source tree (root only unless recursive)
        4. Either print the planned pages (dry run) or create them
           depth-first at the destination
        5. Return an exit code

    Example:
        >>> config = ConfigLoader.load_copy("copy.yaml")
        >>> exit_code = CopyCommand(OutputHandler()).run(config, recursive=True)
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        output_handler: Optional[OutputHandler] = None,
        source_api: Optional[APIWrapper] = None,
        dest_api: Optional[APIWrapper] = None,
    ):
        """Initialize copy command with dependencies.

        Args:
            output_handler: OutputHandler for terminal output (optional)
            source_api: Client for the source account (optional, built from config)
            dest_api: Client for the destination account (optional, built from config)
        """
        self.output_handler = output_handler or OutputHandler()
        self.source_api = source_api
        self.dest_api = dest_api

    def run(
        self,
        config: CopyConfig,
        recursive: bool = False,
        dry_run: bool = False,
    ) -> ExitCode:
        """Execute the copy.

        Args:
            config: Resolved copy configuration
            recursive: If True, copy every descendant page of the source root
            dry_run: If True, show the pages that would be created and stop

        Returns:
            ExitCode indicating success or specific failure type
        """
        try:
            source_api, dest_api = self._build_clients(config)
            source_query = ContentQuery(space_key=config.source.space_key)
            dest_query = ContentQuery(space_key=config.dest.space_key)

            if config.dest.page_id:
                self._check_destination_parent(dest_api, dest_query, config)

            walker = TreeWalker(source_api, source_query)
            with self.output_handler.spinner(
                f"Reading pages from {config.source.page_id}..."
            ):
                tree = walker.discover(config.source.page_id, recursive=recursive)
            self.output_handler.info(f"Discovered {tree.count()} page(s)")

            transformer = ContentTransformer(config.conflict_suffix)
            if dry_run:
                self.output_handler.print_copy_dryrun(
                    tree, transformer, config.dest.space_key, config.dest.page_id
                )
                return ExitCode.SUCCESS

            materializer = TreeMaterializer(dest_api, transformer)
            result = materializer.materialize(
                tree,
                build_ancestry([config.dest.page_id]),
                config.dest.space_key,
            )
            self.output_handler.print_copy_summary(result)
            return ExitCode.SUCCESS

        except CreateError as e:
            logger.error(f"Copy failed: {e}")
            self.output_handler.error(f"Copy failed: {e}")
            if e.created:
                self.output_handler.warning(
                    f"{len(e.created)} page(s) were created before the failure "
                    f"and have been left in place:"
                )
                self.output_handler.print_created_pages(e.created)
            return exit_code_for(e)

        except FetchError as e:
            logger.error(f"Reading failed: {e}")
            self.output_handler.error(f"Reading failed: {e}")
            return exit_code_for(e)

        except ConfigError as e:
            logger.error(f"Configuration error: {e}")
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except ToolError as e:
            logger.error(f"Error: {e}")
            self.output_handler.error(f"Error: {e}")
            return exit_code_for(e)

        except Exception as e:
            logger.exception("Unexpected error during copy")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    def _build_clients(self, config: CopyConfig) -> Tuple[APIWrapper, APIWrapper]:
        if self.source_api is None:
            self.source_api = APIWrapper(Authenticator(config.source.credentials()))
        if self.dest_api is None:
            if config.same_account:
                self.dest_api = self.source_api
            else:
                self.dest_api = APIWrapper(Authenticator(config.dest.credentials()))
        return self.source_api, self.dest_api

    def _check_destination_parent(
        self,
        dest_api: APIWrapper,
        dest_query: ContentQuery,
        config: CopyConfig,
    ) -> None:
        """Make sure the destination parent exists in the destination space.

        Raises:
            FetchError: If the destination parent cannot be read
            ConfigError: If it belongs to another space
        """
        parent_id = config.dest.page_id
        logger.info(f"Checking destination page {parent_id}")
        try:
            parent = dest_api.get_content_by_id(parent_id, dest_query)
        except (ConfluenceError, ValueError) as e:
            raise FetchError(parent_id, f"failed to get destination page: {e}") from e

        if parent.space_key != config.dest.space_key:
            raise ConfigError(
                f"destination page space key ({parent.space_key}) and destination "
                f"space key ({config.dest.space_key}) do not match",
                'dest.spacekey'
            )
