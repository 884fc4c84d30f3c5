"""Info and toc command implementations."""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from epub_reader.core.epub import Epub
from epub_reader.models.epub import NavPoint


def display_metadata(epub: Epub, console: Console) -> None:
    """Display every non-empty metadata field."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="bold cyan")
    table.add_column("Value", style="white")

    for name, value in epub.get_metadata().model_dump().items():
        if value:
            table.add_row(name.capitalize(), value)

    console.print(Panel(table, title=epub.get_title() or "Untitled", border_style="blue"))


def execute_info(book_path: Path, console: Console) -> None:
    """Execute the info command."""
    with Epub.open(book_path) as epub:
        display_metadata(epub, console)

        html_items = sum(1 for item in epub.manifest if item.is_html)
        console.print(f"[bold]Package document:[/] {epub.root_file}")
        console.print(
            f"[bold]Manifest:[/] {len(epub.manifest)} items ({html_items} HTML)"
        )
        console.print(f"[bold]Spine:[/] {len(epub.spine)} entries")
        if epub.toc is None:
            console.print("[bold]Table of contents:[/] [dim]none (NCX not found)[/]")
        else:
            console.print(
                f"[bold]Table of contents:[/] {len(epub.toc.nav_map)} top-level entries"
            )


def _add_nav_points(tree: Tree, points: list[NavPoint]) -> None:
    for point in points:
        label = point.label or "[dim]Untitled[/]"
        branch = tree.add(f"{label} [dim]{point.src}[/]")
        _add_nav_points(branch, point.children)


def execute_toc(book_path: Path, console: Console) -> None:
    """Execute the toc command."""
    with Epub.open(book_path) as epub:
        if epub.toc is None:
            console.print("[yellow]No NCX table of contents found.[/]")
            return
        tree = Tree(f"[bold]{epub.toc.title or epub.get_title() or 'Contents'}[/]")
        _add_nav_points(tree, epub.toc.nav_map)
        console.print(tree)
