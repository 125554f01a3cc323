"""Typed exception hierarchy for CLI-related errors.

This module defines the custom exceptions raised by the CLI layer and maps
any application error to the process exit code it should produce.
"""

from typing import Optional

from src.confluence_client.errors import (
    ToolError,
    InvalidCredentialsError,
    APIUnreachableError,
)
from src.cli.models import ExitCode


class CLIError(ToolError):
    """Base exception for all CLI-related errors."""
    pass


class ConfigNotFoundError(CLIError):
    """Raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(
            f"Configuration file not found at {config_path}"
        )
        self.config_path = config_path


class ConfigError(CLIError):
    """Raised when configuration is malformed or a required option is missing."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


def exit_code_for(error: BaseException) -> ExitCode:
    """Pick the exit code for an error by inspecting its cause chain.

    Tree errors wrap the Confluence error that caused them, so an
    authentication failure three pages deep still exits with AUTH_ERROR.

    Args:
        error: The error that terminated the run

    Returns:
        ExitCode for the process
    """
    current: Optional[BaseException] = error
    while current is not None:
        if isinstance(current, InvalidCredentialsError):
            return ExitCode.AUTH_ERROR
        if isinstance(current, APIUnreachableError):
            return ExitCode.NETWORK_ERROR
        current = current.__cause__
    return ExitCode.GENERAL_ERROR
