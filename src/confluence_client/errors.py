"""Typed exception hierarchy for Confluence-related errors.

This module defines the custom exceptions raised by the Confluence client
wrapper. All of them inherit from ConfluenceError so callers can catch any
API failure in one place, and from ToolError so the CLI can catch any
application-level failure.
"""

from typing import Optional


class ToolError(Exception):
    """Base exception for all confluence-tree-copy errors.

    Use this to catch any application-level error from the copy and
    delete tools.
    """
    pass


class ConfluenceError(ToolError):
    """Base exception for all Confluence-related errors."""
    pass


class InvalidCredentialsError(ConfluenceError):
    """Raised when API credentials are invalid or authentication fails."""

    def __init__(self, user: str, endpoint: str):
        super().__init__(
            f"API key is invalid (user: {user}, endpoint: {endpoint})"
        )
        self.user = user
        self.endpoint = endpoint


class PageNotFoundError(ConfluenceError):
    """Raised when a requested page does not exist."""

    def __init__(self, page_id: str):
        super().__init__(f"Page {page_id} not found")
        self.page_id = page_id


class PageAlreadyExistsError(ConfluenceError):
    """Raised when the destination refuses a page because its title is taken."""

    def __init__(self, title: str, space_key: Optional[str] = None):
        if space_key:
            message = f"Page with title '{title}' already exists in space {space_key}"
        else:
            message = f"Page with title '{title}' already exists"
        super().__init__(message)
        self.title = title
        self.space_key = space_key


class APIUnreachableError(ConfluenceError):
    """Raised when the Confluence API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(ConfluenceError):
    """Raised when API access fails or is refused by the server."""

    def __init__(self, message: str = "Confluence API failure"):
        super().__init__(message)
