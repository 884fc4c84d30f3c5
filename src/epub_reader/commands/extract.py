"""Cover and export command implementations."""

import re
import shutil
from pathlib import Path

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from epub_reader.commands.chapters import build_options
from epub_reader.core.cover import find_cover_item
from epub_reader.core.epub import Epub
from epub_reader.core.output_writer import OutputWriter


def get_default_output_dir(book_path: Path) -> Path:
    """Get default output directory based on book filename."""
    stem = book_path.stem
    # Clean up the filename for directory name
    clean_stem = re.sub(r"[^\w\s-]", "", stem).strip()
    clean_stem = re.sub(r"[-\s]+", "_", clean_stem)
    return book_path.parent / f"{clean_stem}_chapters"


def execute_cover(book_path: Path, output: Path | None, console: Console) -> Path | None:
    """Execute the cover command. Returns the written file, if any."""
    with Epub.open(book_path) as epub:
        cover = epub.get_cover()
        if cover is None:
            console.print("[yellow]No cover image found.[/]")
            return None

        item = find_cover_item(epub.manifest)
        target = output or book_path.with_name(
            f"{book_path.stem}_cover{Path(item.href).suffix or '.img'}"
        )
        with cover, open(target, "wb") as dst:
            shutil.copyfileobj(cover, dst)

    console.print(f"[green]Cover written to {target}[/]")
    return target


def execute_export(
    book_path: Path,
    output_dir: Path | None,
    max_length: int,
    quiet: bool,
    console: Console,
) -> Path:
    """Execute the export command. Returns the manifest path."""
    output_dir = output_dir or get_default_output_dir(book_path)

    with Epub.open(book_path) as epub:
        chapters = epub.get_chapters(*build_options(max_length))
        writer = OutputWriter(output_dir, book_path)
        records = []

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            disable=quiet,
        ) as progress:
            task = progress.add_task("Writing chapters...", total=len(chapters))
            for chapter in chapters:
                _, record = writer.write_chapter(chapter)
                records.append(record)
                progress.advance(task)

        manifest_path = writer.write_manifest(epub, records)

    if not quiet:
        console.print(
            f"[green]Exported {len(records)} chapter(s) to {output_dir}[/]"
        )
    return manifest_path
