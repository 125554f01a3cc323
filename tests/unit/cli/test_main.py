"""Unit tests for main CLI entry points (main.py).

Tests the Typer CLI applications using CliRunner.
"""

import logging
import os
import pytest
from unittest.mock import patch
from typer.testing import CliRunner

from src.cli.errors import ConfigError
from src.cli.main import copy_app, delete_app, _configure_logging, VERSION
from src.cli.models import ExitCode
from tests.fixtures import FakeConfluenceAPI, home_tree


runner = CliRunner()

COPY_ARGS = [
    "--source-account", "team",
    "--source-user", "me@team.io",
    "-s", "tok",
    "--source-pageid", "100",
    "--source-spacekey", "SRC",
    "--dest-account", "team",
    "--dest-spacekey", "DST",
    "--no-color",
]

DELETE_ARGS = [
    "-a", "team",
    "-u", "me@team.io",
    "-t", "tok",
    "-p", "1",
    "-k", "SRC",
    "--no-color",
]


@pytest.fixture(autouse=True)
def restore_loggers():
    """Undo handler and level changes made by _configure_logging."""
    saved = {}
    for name in ("src", "atlassian"):
        log = logging.getLogger(name)
        saved[name] = (log.level, list(log.handlers))
    yield
    for name, (level, handlers) in saved.items():
        log = logging.getLogger(name)
        for handler in log.handlers:
            if handler not in handlers:
                handler.close()
        log.handlers = handlers
        log.setLevel(level)


@pytest.fixture
def clean_environment(monkeypatch):
    for key in list(os.environ):
        if key.startswith('CONFLUENCE'):
            monkeypatch.delenv(key, raising=False)
    with patch('src.cli.config.load_dotenv'):
        yield


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    @pytest.mark.parametrize("verbosity,level", [
        (0, logging.WARNING),
        (1, logging.INFO),
        (2, logging.DEBUG),
        (5, logging.DEBUG),
    ])
    def test_verbosity_levels(self, verbosity, level):
        """Verbosity selects the level of the application logger."""
        _configure_logging(verbosity)

        assert logging.getLogger("src").level == level

    def test_debug_enables_library_logging(self):
        """--debug forces DEBUG and turns on the atlassian logger."""
        _configure_logging(0, debug=True)

        assert logging.getLogger("src").level == logging.DEBUG
        assert logging.getLogger("atlassian").level == logging.DEBUG

    def test_logdir_creates_log_file(self, tmp_path):
        """A log directory gets a timestamped log file."""
        logdir = tmp_path / "logs"

        _configure_logging(1, str(logdir))

        files = list(logdir.glob("confluence-tree-copy_*.log"))
        assert len(files) == 1


class TestCopyApp:
    """Test cases for the confluence-copy command."""

    def test_version(self):
        """--version prints the version and exits."""
        result = runner.invoke(copy_app, ["--version"])

        assert result.exit_code == 0
        assert f"version {VERSION}" in result.output

    @patch('src.cli.main.CopyCommand')
    @patch('src.cli.main.ConfigLoader')
    def test_flags_are_passed_to_config(self, mock_loader, mock_command):
        """Flags are handed to the config loader as overrides."""
        mock_command.return_value.run.return_value = ExitCode.SUCCESS

        result = runner.invoke(copy_app, COPY_ARGS + [
            "--dest-pageid", "555", "-d", "dest-tok", "--conflictsuffix", "- copy",
        ])

        assert result.exit_code == 0
        kwargs = mock_loader.load_copy.call_args.kwargs
        assert kwargs['config_path'] is None
        assert kwargs['source_overrides']['token'] == 'tok'
        assert kwargs['source_overrides']['page_id'] == '100'
        assert kwargs['dest_overrides']['page_id'] == '555'
        assert kwargs['dest_overrides']['token'] == 'dest-tok'
        assert kwargs['dest_overrides']['user'] is None
        assert kwargs['conflict_suffix'] == '- copy'

    @patch('src.cli.main.CopyCommand')
    @patch('src.cli.main.ConfigLoader')
    def test_recursive_and_dry_run_flags(self, mock_loader, mock_command):
        """-r and --dry-run reach the command."""
        mock_command.return_value.run.return_value = ExitCode.SUCCESS

        result = runner.invoke(copy_app, ["-r", "--dry-run", "-c", "copy.yaml"])

        assert result.exit_code == 0
        assert mock_loader.load_copy.call_args.kwargs['config_path'] == 'copy.yaml'
        mock_command.return_value.run.assert_called_once_with(
            mock_loader.load_copy.return_value, recursive=True, dry_run=True
        )

    @patch('src.cli.main.CopyCommand')
    @patch('src.cli.main.ConfigLoader')
    def test_command_exit_code_is_returned(self, mock_loader, mock_command):
        """The command's exit code becomes the process exit code."""
        mock_command.return_value.run.return_value = ExitCode.AUTH_ERROR

        result = runner.invoke(copy_app, COPY_ARGS)

        assert result.exit_code == ExitCode.AUTH_ERROR

    @patch('src.cli.main.CopyCommand')
    @patch('src.cli.main.ConfigLoader')
    def test_config_error_exits_general_error(self, mock_loader, mock_command):
        """A configuration error stops before the command runs."""
        mock_loader.load_copy.side_effect = ConfigError(
            "please provide source username", 'source.user'
        )

        result = runner.invoke(copy_app, ["--no-color"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "source.user" in result.output
        mock_command.assert_not_called()

    @patch('src.cli.main.CopyCommand')
    @patch('src.cli.main.OutputHandler')
    @patch('src.cli.main.ConfigLoader')
    def test_output_options(self, mock_loader, mock_output_cls, mock_command):
        """-v and --no-color configure the OutputHandler."""
        mock_command.return_value.run.return_value = ExitCode.SUCCESS

        result = runner.invoke(copy_app, ["-v", "2", "--no-color"])

        assert result.exit_code == 0
        mock_output_cls.assert_called_once_with(verbosity=2, no_color=True)

    @patch('src.cli.copy_command.APIWrapper')
    def test_copy_end_to_end(self, mock_wrapper, clean_environment):
        """A full run copies Home, A and B through the client."""
        api = home_tree(FakeConfluenceAPI())
        mock_wrapper.return_value = api

        result = runner.invoke(copy_app, COPY_ARGS + ["-r"])

        assert result.exit_code == 0
        assert api.create_calls == [('create', 'Home'), ('create', 'A'), ('create', 'B')]
        assert {c.space_key for c in api.created} == {'DST'}
        assert "Copy completed: 3 page(s) created" in result.output

    def test_missing_options(self, clean_environment):
        """Without any options the first missing value is reported."""
        result = runner.invoke(copy_app, ["--no-color"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "source.user" in result.output


class TestDeleteApp:
    """Test cases for the confluence-delete command."""

    def test_version(self):
        """--version prints the version and exits."""
        result = runner.invoke(delete_app, ["-V"])

        assert result.exit_code == 0
        assert f"version {VERSION}" in result.output

    @patch('src.cli.main.DeleteCommand')
    @patch('src.cli.main.ConfigLoader')
    def test_flags_are_passed_to_config(self, mock_loader, mock_command):
        """Short flags map onto the location fields."""
        mock_command.return_value.run.return_value = ExitCode.SUCCESS

        result = runner.invoke(delete_app, DELETE_ARGS + ["--dryrun"])

        assert result.exit_code == 0
        overrides = mock_loader.load_delete.call_args.kwargs['overrides']
        assert overrides == {
            'account': 'team',
            'user': 'me@team.io',
            'token': 'tok',
            'page_id': '1',
            'space_key': 'SRC',
        }
        mock_command.return_value.run.assert_called_once_with(
            mock_loader.load_delete.return_value, dry_run=True
        )

    @patch('src.cli.delete_command.APIWrapper')
    def test_delete_end_to_end(self, mock_wrapper, clean_environment):
        """A full run deletes grandchild, child and root."""
        api = FakeConfluenceAPI()
        api.add_page('1', 'Home')
        api.add_page('2', 'A', parent_id='1')
        api.add_page('3', 'A1', parent_id='2')
        mock_wrapper.return_value = api

        result = runner.invoke(delete_app, DELETE_ARGS)

        assert result.exit_code == 0
        assert api.delete_calls == [('delete', '3'), ('delete', '2'), ('delete', '1')]

    def test_missing_token(self, clean_environment):
        """A missing token is reported."""
        result = runner.invoke(delete_app, ["-a", "team", "-u", "me@team.io", "--no-color"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "please provide token" in result.output
