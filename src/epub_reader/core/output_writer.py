"""Write extracted chapters to an output directory."""

from datetime import datetime
from pathlib import Path

from epub_reader.core.epub import Epub
from epub_reader.models.epub import Chapter
from epub_reader.models.output import BookOutput, ChapterOutput, ChapterRecord


class OutputWriter:
    """Write chapters as JSON files plus a manifest."""

    def __init__(self, output_dir: Path, source_path: Path):
        """Initialize output writer.

        Args:
            output_dir: Directory to write output files
            source_path: Path to the source EPUB
        """
        self.output_dir = output_dir
        self.source_path = source_path
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write_chapter(self, chapter: Chapter) -> tuple[Path, ChapterRecord]:
        """Write single chapter to JSON file."""
        record = ChapterRecord(
            order=chapter.order,
            title=chapter.title,
            item_id=chapter.item_id,
            source_file=chapter.path,
            byte_count=len(chapter.content.encode("utf-8")),
            character_count=len(chapter.content),
        )
        output = ChapterOutput(record=record, content=chapter.content)

        filename = f"chapter_{chapter.order:03d}.json"
        filepath = self.output_dir / filename
        filepath.write_text(output.model_dump_json(indent=2), encoding="utf-8")

        return filepath, record

    def write_manifest(self, epub: Epub, records: list[ChapterRecord]) -> Path:
        """Write book manifest file."""
        manifest = BookOutput(
            source_path=str(self.source_path),
            metadata=epub.get_metadata(),
            root_file=epub.root_file,
            spine_length=len(epub.spine),
            exported_chapters=[record.order for record in records],
            output_directory=str(self.output_dir),
            created_at=datetime.now(),
            chapters=records,
        )

        filepath = self.output_dir / "manifest.json"
        filepath.write_text(manifest.model_dump_json(indent=2), encoding="utf-8")
        return filepath
