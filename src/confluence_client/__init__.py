"""Confluence client library for copying and deleting page trees.

This package provides Python abstractions over the Confluence Cloud REST API,
translating HTTP failures into a typed exception hierarchy.
"""

from .errors import (
    ToolError,
    ConfluenceError,
    InvalidCredentialsError,
    PageNotFoundError,
    PageAlreadyExistsError,
    APIUnreachableError,
    APIAccessError,
)

__all__ = [
    "ToolError",
    "ConfluenceError",
    "InvalidCredentialsError",
    "PageNotFoundError",
    "PageAlreadyExistsError",
    "APIUnreachableError",
    "APIAccessError",
]
