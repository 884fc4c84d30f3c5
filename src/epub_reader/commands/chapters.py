"""Chapter listing and single chapter command implementations."""

from pathlib import Path

from rich.console import Console
from rich.table import Table

from epub_reader.core.epub import Epub
from epub_reader.core.options import Option, with_chapter_filter, with_max_content_length
from epub_reader.models.epub import Chapter


def build_options(max_length: int, contains: str | None = None) -> list[Option]:
    """Translate command line flags into chapter query options."""
    opts: list[Option] = [with_max_content_length(max_length)]
    if contains:
        needle = contains.lower()
        opts.append(with_chapter_filter(lambda chapter: needle in chapter.content.lower()))
    return opts


def display_chapters(chapters: list[Chapter], console: Console) -> None:
    """Display chapters as a table."""
    table = Table(title="Chapters", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="white")
    table.add_column("Source", style="dim")
    table.add_column("Chars", justify="right", style="green")

    for chapter in chapters:
        table.add_row(
            str(chapter.order), chapter.title, chapter.path, f"{len(chapter.content):,}"
        )

    console.print(table)


def execute_chapters(
    book_path: Path,
    max_length: int,
    contains: str | None,
    console: Console,
) -> None:
    """Execute the chapters command."""
    with Epub.open(book_path) as epub:
        chapters = epub.get_chapters(*build_options(max_length, contains))

    if not chapters:
        console.print("[yellow]No chapters matched.[/]")
        return
    display_chapters(chapters, console)


def execute_chapter(
    book_path: Path,
    index: int,
    max_length: int,
    console: Console,
) -> None:
    """Execute the chapter command: print raw markup of one spine entry."""
    with Epub.open(book_path) as epub:
        content = epub.get_chapter_content(index, with_max_content_length(max_length))
    console.print(content, markup=False, highlight=False, soft_wrap=True)
