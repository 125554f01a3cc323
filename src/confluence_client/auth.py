"""Authentication module for Confluence credentials.

Each tool talks to one or two Confluence accounts. Credentials for an
account are either handed in explicitly (resolved by the CLI config layer)
or loaded from environment variables using python-dotenv. Missing values
raise InvalidCredentialsError before any request is made.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import InvalidCredentialsError


class Credentials(NamedTuple):
    """Confluence API credentials."""
    url: str
    user: str
    api_token: str


class Authenticator:
    """Supplies validated Confluence credentials for one account.

    When explicit credentials are passed they are returned as-is (after
    validation). Otherwise they are read from environment variables named
    after ``env_prefix``:

        {PREFIX}_URL: Confluence instance URL (e.g., https://team.atlassian.net/wiki)
        {PREFIX}_USER: Confluence user email address
        {PREFIX}_API_TOKEN: Confluence API token

    Credentials are never logged.

    Example:
        >>> auth = Authenticator(Credentials("https://team.atlassian.net/wiki", "me@team.io", "tok"))
        >>> auth.get_credentials().url
        'https://team.atlassian.net/wiki'
    """

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        env_prefix: str = "CONFLUENCE",
    ):
        """Initialize the authenticator.

        Args:
            credentials: Explicit credentials; skips the environment lookup
            env_prefix: Prefix of the environment variables to read otherwise
        """
        self._credentials = credentials
        self._env_prefix = env_prefix
        if credentials is None:
            load_dotenv()

    def get_credentials(self) -> Credentials:
        """Return the credentials for this account.

        Returns:
            Credentials: A named tuple containing url, user, and api_token

        Raises:
            InvalidCredentialsError: If any required credential is missing
        """
        if self._credentials is not None:
            url, user, api_token = self._credentials
        else:
            url = os.getenv(f'{self._env_prefix}_URL')
            user = os.getenv(f'{self._env_prefix}_USER')
            api_token = os.getenv(f'{self._env_prefix}_API_TOKEN')

        if not url or not user or not api_token:
            raise InvalidCredentialsError(
                user=user if user else "unknown",
                endpoint=url if url else "unknown"
            )

        return Credentials(url=url, user=user, api_token=api_token)
