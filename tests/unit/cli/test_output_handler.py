"""Unit tests for cli.output module."""

from unittest.mock import Mock, patch
import pytest
from rich.console import Console

from src.cli.output import OutputHandler
from src.page_tree.models import Content, ContentNode, CopyResult, CreatedPage
from src.page_tree.transformer import ContentTransformer


def make_node(page_id, title, children=None, space_key='SRC'):
    content = Content(id=page_id, type='page', status='current', title=title, space_key=space_key)
    return ContentNode(content=content, children=children or [])


def home_tree():
    return make_node('100', 'Home', [make_node('101', 'A'), make_node('102', 'B')])


@pytest.fixture
def recorded():
    """OutputHandler whose console records plain text."""
    handler = OutputHandler(no_color=True)
    handler.console = Console(record=True, width=120, no_color=True, force_terminal=False)
    return handler


class TestOutputHandlerInit:
    """Test cases for OutputHandler initialization."""

    def test_init_defaults(self):
        """Initialize with default verbosity (0) and color enabled."""
        handler = OutputHandler()

        assert handler.verbosity == 0
        assert handler.console.no_color is False

    def test_init_no_color(self):
        """no_color=True disables colors."""
        handler = OutputHandler(verbosity=2, no_color=True)

        assert handler.verbosity == 2
        assert handler.console.no_color is True


class TestOutputHandlerMessages:
    """Test cases for message output methods."""

    @patch('src.cli.output.Console')
    def test_success(self, mock_console_class):
        """success() displays message with green checkmark."""
        handler = OutputHandler()

        handler.success("Copy finished")

        handler.console.print.assert_called_once_with("[green]✓[/green] Copy finished")

    @patch('src.cli.output.Console')
    def test_error(self, mock_console_class):
        """error() displays message with red X."""
        handler = OutputHandler()

        handler.error("Something failed")

        handler.console.print.assert_called_once_with("[red]✗[/red] Something failed", style="red")

    @patch('src.cli.output.Console')
    def test_warning(self, mock_console_class):
        """warning() displays message with yellow warning symbol."""
        handler = OutputHandler()

        handler.warning("Be careful")

        handler.console.print.assert_called_once_with("[yellow]⚠[/yellow] Be careful", style="yellow")

    @patch('src.cli.output.Console')
    def test_markup_in_messages_is_escaped(self, mock_console_class):
        """Page titles containing brackets are not read as markup."""
        handler = OutputHandler()

        handler.success("Created [draft] page")

        printed = handler.console.print.call_args[0][0]
        assert "\\[draft]" in printed


class TestOutputHandlerVerbosity:
    """Test cases for verbosity-controlled output."""

    @pytest.mark.parametrize("verbosity,shown", [(0, False), (1, True), (2, True)])
    def test_info(self, verbosity, shown):
        """info() displays only at verbosity >= 1."""
        handler = OutputHandler(verbosity=verbosity)
        handler.console = Mock()

        handler.info("Info message")

        assert handler.console.print.called is shown

    @pytest.mark.parametrize("verbosity,shown", [(0, False), (1, False), (2, True)])
    def test_debug(self, verbosity, shown):
        """debug() displays only at verbosity >= 2."""
        handler = OutputHandler(verbosity=verbosity)
        handler.console = Mock()

        handler.debug("Debug message")

        assert handler.console.print.called is shown


class TestOutputHandlerTrees:
    """Test cases for tree previews and summaries."""

    def test_render_tree(self, recorded):
        """render_tree shows every page with its ID."""
        tree = recorded.render_tree(home_tree())

        text = recorded.console.export_text()
        assert "Home (100)" in text
        assert "A (101)" in text
        assert "B (102)" in text
        assert len(tree.children) == 2

    def test_copy_dryrun_shows_new_titles(self, recorded):
        """A same-space preview shows the suffixed titles."""
        recorded.print_copy_dryrun(home_tree(), ContentTransformer("- copy"), "SRC", "555")

        text = recorded.console.export_text()
        assert "Dry Run - would create 3 page(s) in space SRC under page 555" in text
        assert "Home- copy (100)" in text
        assert "B- copy (102)" in text

    def test_copy_dryrun_top_level(self, recorded):
        """A top-level preview says so."""
        recorded.print_copy_dryrun(home_tree(), ContentTransformer(), "DST")

        text = recorded.console.export_text()
        assert "in space DST at the top level" in text
        assert "Home (100)" in text

    def test_delete_dryrun(self, recorded):
        """The delete preview counts every page."""
        recorded.print_delete_dryrun(home_tree())

        assert "Dry Run - would delete 3 page(s)" in recorded.console.export_text()

    def test_copy_summary(self, recorded):
        """The copy summary lists each created page."""
        result = CopyResult(created=[
            CreatedPage(source_id='100', new_id='9000', title='Home'),
            CreatedPage(source_id='101', new_id='9001', title='A'),
        ])

        recorded.print_copy_summary(result)

        text = recorded.console.export_text()
        assert "Home (100 → 9000)" in text
        assert "Copy completed: 2 page(s) created" in text

    def test_copy_summary_empty(self, recorded):
        """An empty result says nothing was copied."""
        recorded.print_copy_summary(CopyResult())

        assert "No pages copied" in recorded.console.export_text()

    def test_delete_summary(self, recorded):
        """The delete summary counts deleted pages."""
        recorded.print_delete_summary(['3', '2', '1'])

        text = recorded.console.export_text()
        assert "3 page(s) deleted" in text
        assert "Deletion completed: 3 page(s) total" in text

    def test_delete_summary_empty(self, recorded):
        """An empty delete says nothing was deleted."""
        recorded.print_delete_summary([])

        assert "No pages deleted" in recorded.console.export_text()

    def test_created_pages_printed_literally(self, recorded):
        """Bracketed titles are not treated as markup."""
        recorded.print_created_pages([
            CreatedPage(source_id='100', new_id='9000', title='Notes [/draft]'),
            CreatedPage(source_id='101', new_id='9001', title='[bold]A'),
        ])

        text = recorded.console.export_text()
        assert "Notes [/draft] (9000)" in text
        assert "[bold]A (9001)" in text
