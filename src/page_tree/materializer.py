"""Recreate a discovered content tree at a destination.

Pages are created depth-first, each parent strictly before its children.
Every child is placed under the ID the destination just assigned to its
parent, never under the source parent's ID.
"""

import logging
from typing import TYPE_CHECKING, List, Optional

from src.confluence_client.errors import ConfluenceError
from .errors import CreateError
from .models import ContentNode, CopyResult, CreatedPage, build_ancestry
from .transformer import ContentTransformer

if TYPE_CHECKING:
    from src.confluence_client.api_wrapper import APIWrapper

logger = logging.getLogger(__name__)


class TreeMaterializer:
    """Creates every node of a ContentNode tree through the destination API.

    There is no rollback. When a create fails, the pages created so far stay
    at the destination and are listed on the raised CreateError.

    Example:
        >>> materializer = TreeMaterializer(dest_api, ContentTransformer("- copy"))
        >>> result = materializer.materialize(tree, build_ancestry([dest_parent_id]), "DST")
        >>> print(f"Created {result.created_count} pages under {result.root_id}")
    """

    def __init__(self, api: "APIWrapper", transformer: ContentTransformer):
        """Initialize the materializer.

        Args:
            api: Client for the destination account
            transformer: Builds each destination record from its source
        """
        self._api = api
        self._transformer = transformer

    def materialize(
        self,
        node: ContentNode,
        parent_ancestry: List[str],
        dest_space_key: str,
    ) -> CopyResult:
        """Create ``node`` and its whole subtree at the destination.

        Args:
            node: Root of the tree to create
            parent_ancestry: Ancestry for the root (empty for top level,
                or the single destination parent ID)
            dest_space_key: Space to create the pages in

        Returns:
            CopyResult listing the created pages in creation order

        Raises:
            CreateError: If any page cannot be created
        """
        result = CopyResult()
        self._materialize_node(node, parent_ancestry, dest_space_key, result)
        logger.info(f"Created {result.created_count} page(s) in space {dest_space_key}")
        return result

    def _materialize_node(
        self,
        node: ContentNode,
        parent_ancestry: List[str],
        dest_space_key: str,
        result: CopyResult,
    ) -> None:
        new_content = self._transformer.transform(
            node.content, parent_ancestry, dest_space_key
        )
        parent_id: Optional[str] = parent_ancestry[-1] if parent_ancestry else None

        try:
            created = self._api.create_content(new_content)
        except (ConfluenceError, ValueError) as e:
            raise CreateError(
                title=new_content.title,
                reason=str(e),
                parent_id=parent_id,
                created=list(result.created),
            ) from e

        logger.info(
            f"Created page '{created.title}' ({node.content.id} -> {created.id})"
            + (f" under {parent_id}" if parent_id else "")
        )
        result.created.append(
            CreatedPage(source_id=node.content.id, new_id=created.id, title=created.title)
        )

        child_ancestry = build_ancestry([created.id])
        for child in node.children:
            self._materialize_node(child, child_ancestry, dest_space_key, result)
