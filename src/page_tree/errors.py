"""Typed exception hierarchy for content tree operations.

Each error names the page it failed on and keeps the underlying
ConfluenceError as its ``__cause__``. Every one of them is fatal to the run.
"""

from typing import List, Optional

from src.confluence_client.errors import ToolError


class TreeError(ToolError):
    """Base exception for all content tree errors."""
    pass


class FetchError(TreeError):
    """Raised when reading a page or listing its children fails."""

    def __init__(self, page_id: str, reason: str, parent_id: Optional[str] = None):
        if parent_id:
            message = f"Failed to read page {page_id}, child of {parent_id}: {reason}"
        else:
            message = f"Failed to read page {page_id}: {reason}"
        super().__init__(message)
        self.page_id = page_id
        self.parent_id = parent_id
        self.reason = reason


class CreateError(TreeError):
    """Raised when creating a page at the destination fails.

    Pages created before the failure are left in place and listed in
    ``created``.
    """

    def __init__(
        self,
        title: str,
        reason: str,
        parent_id: Optional[str] = None,
        created: Optional[List] = None,
    ):
        if parent_id:
            message = f"Failed to create page '{title}' under {parent_id}: {reason}"
        else:
            message = f"Failed to create page '{title}': {reason}"
        super().__init__(message)
        self.title = title
        self.parent_id = parent_id
        self.reason = reason
        self.created = created if created is not None else []


class DeleteError(TreeError):
    """Raised when deleting a page fails.

    Pages deleted before the failure are listed in ``deleted``.
    """

    def __init__(self, page_id: str, reason: str, deleted: Optional[List[str]] = None):
        super().__init__(f"Failed to delete page {page_id}: {reason}")
        self.page_id = page_id
        self.reason = reason
        self.deleted = deleted if deleted is not None else []
