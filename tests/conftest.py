"""Shared pytest configuration for the unit tests."""

import logging

# atlassian-python-api logs missing pages at ERROR level.
logging.getLogger("atlassian").setLevel(logging.WARNING)
