"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
colored status messages, a spinner for long reads, tree previews for
--dry-run and summaries of what was copied or deleted.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner
from rich.tree import Tree

from src.page_tree.models import ContentNode, CopyResult, CreatedPage, build_ancestry
from src.page_tree.transformer import ContentTransformer


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Operation completed")
        >>> with handler.spinner("Processing..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        Args:
            message: Message to display with spinner

        Example:
            >>> with handler.spinner("Fetching pages..."):
            ...     tree = walker.discover(root_id)
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def render_tree(
        self,
        root: ContentNode,
        transformer: Optional[ContentTransformer] = None,
        dest_space_key: Optional[str] = None,
        dest_parent_id: Optional[str] = None,
    ) -> Tree:
        """Build and print a Rich tree of a discovered content tree.

        With a transformer and destination space, each label shows the title
        the page would get at the destination.

        Args:
            root: Root of the discovered tree
            transformer: Optional transformer used to preview new titles
            dest_space_key: Destination space key for the preview
            dest_parent_id: Destination parent ID for the preview

        Returns:
            The printed Rich Tree
        """
        def label(node: ContentNode, ancestry: List[str]) -> str:
            title = node.content.title
            if transformer is not None and dest_space_key is not None:
                title = transformer.transform(node.content, ancestry, dest_space_key).title
            return f"{escape(title)} [dim]({node.content.id})[/dim]"

        def add_children(branch: Tree, node: ContentNode) -> None:
            for child in node.children:
                add_children(branch.add(label(child, [node.content.id])), child)

        tree = Tree(label(root, build_ancestry([dest_parent_id])))
        add_children(tree, root)
        self.console.print(tree)
        return tree

    def print_copy_dryrun(
        self,
        root: ContentNode,
        transformer: ContentTransformer,
        dest_space_key: str,
        dest_parent_id: Optional[str] = None,
    ) -> None:
        """Display the pages a copy would create."""
        where = f"under page {dest_parent_id}" if dest_parent_id else "at the top level"
        self.console.print(
            f"\n[bold]Dry Run - would create {root.count()} page(s) in space "
            f"{escape(dest_space_key)} {where}:[/bold]"
        )
        self.render_tree(root, transformer, dest_space_key, dest_parent_id)

    def print_delete_dryrun(self, root: ContentNode) -> None:
        """Display the pages a delete would remove."""
        self.console.print(
            f"\n[bold]Dry Run - would delete {root.count()} page(s):[/bold]"
        )
        self.render_tree(root)

    def print_copy_summary(self, result: CopyResult) -> None:
        """Display the pages created by a copy."""
        self.console.print("\n[bold]Copy Summary:[/bold]")
        for page in result.created:
            self.console.print(
                f"  [green]+[/green] {escape(page.title)} "
                f"[dim]({page.source_id} → {page.new_id})[/dim]"
            )

        if result.created_count == 0:
            self.console.print("\n[yellow]No pages copied[/yellow]")
        else:
            self.console.print(
                f"\n[green]Copy completed: {result.created_count} page(s) created[/green]"
            )

    def print_created_pages(self, pages: List[CreatedPage]) -> None:
        """List pages created at the destination, one per line."""
        for page in pages:
            self.console.print(f"  • {escape(page.title)} ({page.new_id})")

    def print_delete_summary(self, deleted: List[str]) -> None:
        """Display the pages removed by a delete."""
        self.console.print("\n[bold]Deletion Summary:[/bold]")
        if not deleted:
            self.console.print("\n[yellow]No pages deleted[/yellow]")
        else:
            self.console.print(
                f"  [red]✗[/red] Confluence: {len(deleted)} page(s) deleted"
            )
            self.console.print(f"\n[green]Deletion completed: {len(deleted)} page(s) total[/green]")
