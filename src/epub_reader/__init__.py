"""Read EPUB archives into a queryable document model."""

from epub_reader.core.epub import Epub, open_epub
from epub_reader.core.errors import (
    ArchiveClosedError,
    ArchiveReadError,
    ChapterIndexError,
    ContentTooLargeError,
    DeadlineExceededError,
    EpubCancelledError,
    EpubDecodeError,
    EpubError,
    EpubNotFoundError,
    InvalidArchiveError,
    UnsupportedContentError,
)
from epub_reader.core.options import (
    CancellationToken,
    EpubOptions,
    Option,
    apply_options,
    with_cancellation,
    with_chapter_filter,
    with_cover,
    with_deadline,
    with_max_content_length,
    with_metadata,
)
from epub_reader.models.epub import NCX, Chapter, Item, ItemRef, Metadata, NavPoint

__all__ = [
    # Book
    "Epub",
    "open_epub",
    # Models
    "Metadata",
    "Item",
    "ItemRef",
    "NavPoint",
    "NCX",
    "Chapter",
    # Options
    "EpubOptions",
    "Option",
    "CancellationToken",
    "apply_options",
    "with_cancellation",
    "with_deadline",
    "with_cover",
    "with_metadata",
    "with_chapter_filter",
    "with_max_content_length",
    # Errors
    "EpubError",
    "InvalidArchiveError",
    "ArchiveReadError",
    "ArchiveClosedError",
    "EpubNotFoundError",
    "EpubDecodeError",
    "ChapterIndexError",
    "UnsupportedContentError",
    "ContentTooLargeError",
    "EpubCancelledError",
    "DeadlineExceededError",
]
