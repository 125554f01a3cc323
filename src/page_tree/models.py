"""Data models for content trees.

This module defines the records exchanged between the Confluence client
wrapper and the tree walker, transformer, materializer and deleter.
All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

PAGE_TYPE = "page"

DEFAULT_EXPAND: Tuple[str, ...] = (
    "space",
    "body.storage",
    "version",
    "ancestors",
    "descendants",
)


def build_ancestry(ancestor_ids: Iterable[Optional[str]]) -> List[str]:
    """Build an ancestry (root first, immediate parent last) from page IDs.

    Empty or missing IDs are dropped, so ``build_ancestry([None])`` is the
    ancestry of a top-level page.
    """
    return [str(ancestor_id) for ancestor_id in ancestor_ids if ancestor_id]


@dataclass(frozen=True)
class ContentQuery:
    """Read options reused for every content fetch against one space.

    Attributes:
        space_key: Space the content is read from
        type: Content type filter (only "page" is traversed)
        expand: Fields the API should expand in each response
    """
    space_key: str
    type: str = PAGE_TYPE
    expand: Tuple[str, ...] = DEFAULT_EXPAND

    @property
    def expand_param(self) -> str:
        return ",".join(self.expand)

    def as_params(self) -> Dict[str, str]:
        """Render the query as REST query parameters."""
        params = {"type": self.type, "expand": self.expand_param}
        if self.space_key:
            params["spaceKey"] = self.space_key
        return params


@dataclass
class Content:
    """A complete snapshot of one Confluence content record.

    Attributes:
        id: Content ID (empty until the destination assigns one)
        type: Content type, e.g. "page"
        status: Content status, e.g. "current"
        title: Page title
        space_key: Key of the space holding the page
        ancestors: Ancestor page IDs, root first, immediate parent last
        body: Rich-text body exactly as returned by the API (copied verbatim)
        version: Version number, read-only and never written back
    """
    id: str
    type: str
    status: str
    title: str
    space_key: str
    ancestors: List[str] = field(default_factory=list)
    body: Dict[str, Any] = field(default_factory=dict)
    version: Optional[int] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Content":
        """Create a Content from a Confluence REST response.

        Args:
            data: Content dict as returned by ``GET rest/api/content/{id}``

        Returns:
            Content snapshot

        Raises:
            ValueError: If the response has no 'id' field
        """
        content_id = data.get('id')
        if not content_id:
            raise ValueError("Content data missing required 'id' field")

        space_info = data.get('space') or {}
        version_info = data.get('version') or {}
        ancestors = build_ancestry(
            ancestor.get('id') for ancestor in (data.get('ancestors') or [])
        )

        return cls(
            id=str(content_id),
            type=data.get('type', PAGE_TYPE),
            status=data.get('status', 'current'),
            title=data.get('title', ''),
            space_key=space_info.get('key', ''),
            ancestors=ancestors,
            body=data.get('body') or {},
            version=version_info.get('number'),
        )

    def ancestor_refs(self) -> List[Dict[str, str]]:
        return [{"id": ancestor_id} for ancestor_id in self.ancestors]

    def to_api_payload(self) -> Dict[str, Any]:
        """Render the snapshot as a ``POST rest/api/content`` payload.

        The version is never included; the destination starts its own
        history. The ID is only sent when set.
        """
        payload: Dict[str, Any] = {
            "type": self.type,
            "status": self.status,
            "title": self.title,
            "space": {"key": self.space_key},
            "ancestors": self.ancestor_refs(),
            "body": self.body,
        }
        if self.id:
            payload["id"] = self.id
        return payload


@dataclass
class ContentNode:
    """One node of an in-memory content tree.

    Children keep the order in which the API listed them. A tree is built
    once by the walker and consumed once by the materializer or deleter.
    """
    content: Content
    children: List['ContentNode'] = field(default_factory=list)

    def count(self) -> int:
        """Number of nodes in this subtree, this node included."""
        return 1 + sum(child.count() for child in self.children)

    def descendants(self) -> List['ContentNode']:
        """All nodes below this one in pre-order, this node excluded."""
        result: List[ContentNode] = []
        for child in self.children:
            result.append(child)
            result.extend(child.descendants())
        return result


@dataclass
class CreatedPage:
    """A page created at the destination during a copy."""
    source_id: str
    new_id: str
    title: str


@dataclass
class CopyResult:
    """Pages created by one materialization run, in creation order."""
    created: List[CreatedPage] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.created)

    @property
    def root_id(self) -> Optional[str]:
        return self.created[0].new_id if self.created else None
