"""Delete a page together with every page below it.

The tree is always discovered recursively first. Descendants are deleted
children-before-parents and the root is deleted last, because Confluence
may refuse to delete a page that still has children.
"""

import logging
from typing import TYPE_CHECKING, List

from src.confluence_client.errors import ConfluenceError
from .errors import DeleteError
from .models import ContentNode
from .walker import TreeWalker

if TYPE_CHECKING:
    from src.confluence_client.api_wrapper import APIWrapper

logger = logging.getLogger(__name__)


def deletion_order(root: ContentNode) -> List[str]:
    """Return the page IDs of a tree in the order they must be deleted.

    Descendants come in reverse pre-order, so every page precedes its
    parent, and the root comes last.

    Example:
        Home -> A -> A1 gives ["A1", "A", "Home"]
    """
    descendant_ids = [node.content.id for node in root.descendants()]
    descendant_ids.reverse()
    return descendant_ids + [root.content.id]


class TreeDeleter:
    """Deletes a page subtree through one Confluence account.

    The first failed delete stops the run; pages already deleted are listed
    on the raised DeleteError.

    Example:
        >>> deleter = TreeDeleter(api, TreeWalker(api, ContentQuery(space_key="TEAM")))
        >>> deleted = deleter.delete_tree("123456")
    """

    def __init__(self, api: "APIWrapper", walker: TreeWalker):
        self._api = api
        self._walker = walker

    def discover(self, root_id: str) -> ContentNode:
        """Discover the full tree below ``root_id`` (always recursive)."""
        return self._walker.discover(root_id, recursive=True)

    def delete_tree(self, root_id: str) -> List[str]:
        """Delete ``root_id`` and all of its descendant pages.

        Args:
            root_id: ID of the root page

        Returns:
            IDs of the deleted pages in deletion order

        Raises:
            FetchError: If the tree cannot be discovered (nothing is deleted)
            DeleteError: If any delete call fails
        """
        return self.delete_nodes(self.discover(root_id))

    def delete_nodes(self, root: ContentNode) -> List[str]:
        """Delete every page of an already discovered tree."""
        order = deletion_order(root)
        logger.info(f"Deleting {len(order)} page(s) under {root.content.id}")

        deleted: List[str] = []
        for page_id in order:
            try:
                self._api.delete_content(page_id)
            except (ConfluenceError, ValueError) as e:
                raise DeleteError(page_id, str(e), deleted=list(deleted)) from e
            logger.info(f"Deleted page {page_id}")
            deleted.append(page_id)

        return deleted
