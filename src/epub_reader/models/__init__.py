"""Data models."""

from epub_reader.models.epub import (
    NCX,
    Chapter,
    Container,
    Item,
    ItemRef,
    Metadata,
    NavPoint,
    PackageDocument,
    Rootfile,
)
from epub_reader.models.output import (
    BookOutput,
    ChapterOutput,
    ChapterRecord,
)

__all__ = [
    # EPUB models
    "Metadata",
    "Item",
    "ItemRef",
    "NavPoint",
    "NCX",
    "Rootfile",
    "Container",
    "PackageDocument",
    "Chapter",
    # Output models
    "ChapterRecord",
    "ChapterOutput",
    "BookOutput",
]
