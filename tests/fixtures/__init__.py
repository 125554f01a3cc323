"""Test fixtures for the tree copy and delete tests.

This module provides:
- FakeConfluenceAPI, an in-memory account implementing the four content
  operations and recording every call
- page_data and home_tree builders for REST-shaped pages and a small tree
"""

from .fake_confluence import FakeConfluenceAPI, page_data, home_tree

__all__ = [
    "FakeConfluenceAPI",
    "page_data",
    "home_tree",
]
