"""Command-line interface for copying and deleting Confluence page trees.

This package provides the `confluence-copy` and `confluence-delete` CLI tools.
It resolves configuration, builds the Confluence clients and runs the tree
operations with progress indication and error handling.
"""

from .copy_command import CopyCommand
from .delete_command import DeleteCommand
from .models import ExitCode, LocationConfig, CopyConfig, DeleteConfig
from .errors import (
    CLIError,
    ConfigError,
    ConfigNotFoundError,
)

__all__ = [
    'CopyCommand',
    'DeleteCommand',
    'ExitCode',
    'LocationConfig',
    'CopyConfig',
    'DeleteConfig',
    'CLIError',
    'ConfigError',
    'ConfigNotFoundError',
]
