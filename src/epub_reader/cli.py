"""Main CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from epub_reader.commands.chapters import execute_chapter, execute_chapters
from epub_reader.commands.extract import execute_cover, execute_export
from epub_reader.commands.info import execute_info, execute_toc
from epub_reader.core.errors import EpubError

app = typer.Typer(
    name="epub-reader",
    help="Inspect EPUB files: metadata, table of contents, chapters and cover.",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

BookPath = Annotated[
    Path,
    typer.Argument(
        help="Path to the EPUB file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
]

MaxLength = Annotated[
    int,
    typer.Option(
        "--max-length",
        "-m",
        help="Skip (or reject) chapters larger than N bytes; 0 means unlimited",
        min=0,
    ),
]


def _fail(error: Exception) -> None:
    err_console.print(f"[red]Error: {error}[/]")
    raise typer.Exit(1)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Inspect EPUB files: metadata, table of contents, chapters and cover."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


@app.command()
def info(book_path: BookPath) -> None:
    """Display book metadata and structure counts."""
    try:
        execute_info(book_path, console)
    except EpubError as e:
        _fail(e)


@app.command()
def toc(book_path: BookPath) -> None:
    """Display the NCX table of contents as a tree."""
    try:
        execute_toc(book_path, console)
    except EpubError as e:
        _fail(e)


@app.command()
def chapters(
    book_path: BookPath,
    max_length: MaxLength = 0,
    contains: Annotated[
        Optional[str],
        typer.Option(
            "--contains",
            "-c",
            help="Only list chapters whose markup contains this text (case-insensitive)",
        ),
    ] = None,
) -> None:
    """List chapters in reading order."""
    try:
        execute_chapters(book_path, max_length, contains, console)
    except EpubError as e:
        _fail(e)


@app.command()
def chapter(
    book_path: BookPath,
    index: Annotated[
        int,
        typer.Argument(help="0-based spine index of the chapter"),
    ],
    max_length: MaxLength = 0,
) -> None:
    """Print the raw markup of one chapter."""
    try:
        execute_chapter(book_path, index, max_length, console)
    except EpubError as e:
        _fail(e)


@app.command()
def cover(
    book_path: BookPath,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output file (default: {book_name}_cover.{ext})",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Extract the cover image."""
    try:
        execute_cover(book_path, output, console)
    except EpubError as e:
        _fail(e)


@app.command()
def export(
    book_path: BookPath,
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output-dir",
            "-o",
            help="Output directory (default: {book_name}_chapters/)",
        ),
    ] = None,
    max_length: MaxLength = 0,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress progress output",
        ),
    ] = False,
) -> None:
    """Export chapters as JSON files with a manifest."""
    try:
        execute_export(book_path, output_dir, max_length, quiet, console)
    except EpubError as e:
        _fail(e)


if __name__ == "__main__":
    app()
