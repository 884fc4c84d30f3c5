"""Data models for exported chapters."""

from datetime import datetime

from pydantic import BaseModel, Field

from epub_reader.models.epub import Metadata


class ChapterRecord(BaseModel):
    """Metadata accompanying an exported chapter."""

    order: int
    title: str
    item_id: str
    source_file: str
    byte_count: int
    character_count: int


class ChapterOutput(BaseModel):
    """Exported chapter: metadata plus raw markup."""

    record: ChapterRecord
    content: str


class BookOutput(BaseModel):
    """Manifest written next to the exported chapters."""

    source_path: str
    metadata: Metadata
    root_file: str
    spine_length: int
    exported_chapters: list[int]
    output_directory: str
    created_at: datetime = Field(default_factory=datetime.now)
    chapters: list[ChapterRecord]
