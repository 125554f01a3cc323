"""Data models for CLI operations.

This module defines the exit codes and the resolved configuration records
used by the copy and delete commands.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from src.confluence_client.auth import Credentials
from src.page_tree.transformer import DEFAULT_CONFLICT_SUFFIX


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): Config issues, validation failures, failed reads or writes
    - AUTH_ERROR (3): Authentication or authorization failure
    - NETWORK_ERROR (4): Network connectivity or API availability issues

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4


@dataclass
class LocationConfig:
    """One side of an operation: an account, its credentials and a page.

    Attributes:
        account: Atlassian site name ("team" for team.atlassian.net) or a full base URL
        user: Confluence user name, usually an email address
        token: Confluence API token
        page_id: Page to start from (source) or to create under (destination)
        space_key: Space key of the page
    """
    account: Optional[str] = None
    user: Optional[str] = None
    token: Optional[str] = None
    page_id: Optional[str] = None
    space_key: Optional[str] = None

    @property
    def base_url(self) -> str:
        """Confluence base URL for this account.

        Returns:
            The account verbatim when it is already an http(s) URL,
            otherwise https://{account}.atlassian.net/wiki
        """
        account = (self.account or "").strip()
        if account.startswith(("http://", "https://")):
            return account.rstrip("/")
        return f"https://{account}.atlassian.net/wiki"

    def credentials(self) -> Credentials:
        return Credentials(url=self.base_url, user=self.user or "", api_token=self.token or "")


@dataclass
class CopyConfig:
    """Resolved configuration for the copy tool.

    Attributes:
        source: Account, root page and space to copy from
        dest: Account, optional parent page and space to copy to
        conflict_suffix: Appended to titles when copying within one space
    """
    source: LocationConfig = field(default_factory=LocationConfig)
    dest: LocationConfig = field(default_factory=LocationConfig)
    conflict_suffix: str = DEFAULT_CONFLICT_SUFFIX

    @property
    def same_account(self) -> bool:
        """Both locations resolve to the same Confluence base URL."""
        return self.source.base_url == self.dest.base_url


@dataclass
class DeleteConfig:
    """Resolved configuration for the delete tool."""
    location: LocationConfig = field(default_factory=LocationConfig)
