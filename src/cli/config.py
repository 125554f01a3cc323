"""Configuration loading and validation for the copy and delete tools.

Values are merged from three places, lowest precedence first:

1. an optional YAML configuration file,
2. environment variables (a .env file is loaded with python-dotenv),
3. command-line flags.

Copy tool configuration file structure:
    source:
      account: "team"
      user: "me@example.com"
      token: "..."
      pageid: "123456"
      spacekey: "SRC"
    dest:
      account: "other-team"
      user: "me@example.com"
      token: "..."
      pageid: "654321"      # optional, omit for a top-level copy
      spacekey: "DST"
    conflictsuffix: "- import"

Delete tool configuration file structure (top level):
    account: "team"
    user: "me@example.com"
    token: "..."
    pageid: "123456"
    spacekey: "SRC"
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from src.page_tree.transformer import DEFAULT_CONFLICT_SUFFIX
from .errors import ConfigError, ConfigNotFoundError
from .models import CopyConfig, DeleteConfig, LocationConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Builds validated CopyConfig and DeleteConfig objects.

    Each LocationConfig field has a key in the YAML file and an environment
    variable named ``{prefix}_{KEY}`` in upper case, for example
    CONFLUENCE_SOURCE_PAGEID or CONFLUENCE_TOKEN.
    """

    # LocationConfig attribute -> YAML / environment key
    FIELD_KEYS = {
        'account': 'account',
        'user': 'user',
        'token': 'token',
        'page_id': 'pageid',
        'space_key': 'spacekey',
    }

    SOURCE_ENV_PREFIX = 'CONFLUENCE_SOURCE'
    DEST_ENV_PREFIX = 'CONFLUENCE_DEST'
    DELETE_ENV_PREFIX = 'CONFLUENCE'

    @classmethod
    def read_file(cls, config_path: str) -> Dict[str, Any]:
        """Read and parse a YAML configuration file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Parsed configuration dictionary (empty for an empty file)

        Raises:
            ConfigNotFoundError: If the file does not exist
            ConfigError: If the file cannot be read or is not a YAML mapping
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigNotFoundError(config_path)
        except PermissionError:
            raise ConfigError(f"Permission denied reading {config_path}")
        except OSError as e:
            raise ConfigError(f"Failed to read {config_path}: {e}")

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return {}

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return config_dict

    @classmethod
    def load_copy(
        cls,
        config_path: Optional[str] = None,
        source_overrides: Optional[Dict[str, Optional[str]]] = None,
        dest_overrides: Optional[Dict[str, Optional[str]]] = None,
        conflict_suffix: Optional[str] = None,
    ) -> CopyConfig:
        """Resolve and validate the copy tool configuration.

        Args:
            config_path: Optional YAML configuration file
            source_overrides: Flag values for the source, keyed by LocationConfig field
            dest_overrides: Flag values for the destination, keyed by LocationConfig field
            conflict_suffix: Flag value for the conflict suffix

        Returns:
            Validated CopyConfig

        Raises:
            ConfigNotFoundError: If config_path does not exist
            ConfigError: If the file is malformed or a required value is missing
        """
        load_dotenv()
        file_config = cls.read_file(config_path) if config_path else {}

        source = cls._build_location(
            cls._section(file_config, 'source'),
            cls.SOURCE_ENV_PREFIX,
            source_overrides or {},
        )
        dest = cls._build_location(
            cls._section(file_config, 'dest'),
            cls.DEST_ENV_PREFIX,
            dest_overrides or {},
        )

        if conflict_suffix is None:
            conflict_suffix = file_config.get('conflictsuffix')
        if conflict_suffix is None:
            conflict_suffix = DEFAULT_CONFLICT_SUFFIX

        config = CopyConfig(source=source, dest=dest, conflict_suffix=str(conflict_suffix))
        cls._validate_copy(config)

        if config.same_account:
            # One account means one client: the source credentials are used for both sides
            config.dest.user = config.source.user
            config.dest.token = config.source.token

        logger.debug(
            f"Copy config: source={config.source.base_url} page={config.source.page_id} "
            f"space={config.source.space_key}, dest={config.dest.base_url} "
            f"parent={config.dest.page_id or '(top level)'} space={config.dest.space_key}"
        )
        return config

    @classmethod
    def load_delete(
        cls,
        config_path: Optional[str] = None,
        overrides: Optional[Dict[str, Optional[str]]] = None,
    ) -> DeleteConfig:
        """Resolve and validate the delete tool configuration.

        Args:
            config_path: Optional YAML configuration file
            overrides: Flag values keyed by LocationConfig field

        Returns:
            Validated DeleteConfig

        Raises:
            ConfigNotFoundError: If config_path does not exist
            ConfigError: If the file is malformed or a required value is missing
        """
        load_dotenv()
        file_config = cls.read_file(config_path) if config_path else {}

        location = cls._build_location(
            file_config, cls.DELETE_ENV_PREFIX, overrides or {}
        )
        config = DeleteConfig(location=location)
        cls._validate_delete(config)
        return config

    @classmethod
    def _section(cls, file_config: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = file_config.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(
                f"Section must be a YAML dictionary, got {type(section).__name__}",
                name
            )
        return section

    @classmethod
    def _build_location(
        cls,
        section: Dict[str, Any],
        env_prefix: str,
        overrides: Dict[str, Optional[str]],
    ) -> LocationConfig:
        values: Dict[str, Optional[str]] = {}
        for attr, key in cls.FIELD_KEYS.items():
            value = overrides.get(attr)
            if value is None:
                value = os.getenv(f"{env_prefix}_{key.upper()}")
            if value is None and section.get(key) is not None:
                value = str(section[key])
            values[attr] = value or None
        return LocationConfig(**values)

    @classmethod
    def _validate_copy(cls, config: CopyConfig) -> None:
        """Check the copy configuration in the order the options are documented.

        Raises:
            ConfigError: Naming the first missing option
        """
        required = [
            (config.source.user, 'source.user', "please provide source username"),
            (config.source.token, 'source.token', "please provide source token"),
            (config.source.page_id, 'source.pageid', "please provide source page ID"),
            (config.source.space_key, 'source.spacekey', "please provide source space key"),
            (config.source.account, 'source.account', "please provide source account"),
            (
                config.dest.account,
                'dest.account',
                "please provide destination account. Can be same as source account",
            ),
            (config.dest.space_key, 'dest.spacekey', "please provide destination space key"),
        ]
        for value, field_name, message in required:
            if not value:
                raise ConfigError(message, field_name)

        if not config.same_account:
            if not config.dest.token:
                raise ConfigError("please provide destination token", 'dest.token')
            if not config.dest.user:
                raise ConfigError("please provide destination username", 'dest.user')

    @classmethod
    def _validate_delete(cls, config: DeleteConfig) -> None:
        location = config.location
        required = [
            (location.account, 'account', "please provide account"),
            (location.user, 'user', "please provide username"),
            (location.token, 'token', "please provide token"),
            (location.page_id, 'pageid', "please provide page ID"),
            (location.space_key, 'spacekey', "please provide space key"),
        ]
        for value, field_name, message in required:
            if not value:
                raise ConfigError(message, field_name)
