"""The Epub aggregate: open pipeline and query surface."""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import IO

from epub_reader.core import chapters as chapter_extractor
from epub_reader.core import cover as cover_locator
from epub_reader.core.archive import ArchiveAccessor, normalize_path
from epub_reader.core.container import resolve_root_file
from epub_reader.core.options import Option, apply_options
from epub_reader.core.package import parse_package
from epub_reader.core.toc import resolve_toc
from epub_reader.models.epub import NCX, Chapter, Item, ItemRef, Metadata

log = logging.getLogger(__name__)


class Epub:
    """An opened EPUB book.

    Built by :meth:`open` or :meth:`from_zipfile`, which run the whole
    container -> package -> TOC pipeline; an instance is never partially
    populated. Metadata, manifest, spine and TOC live in memory. Chapter,
    cover and file queries read the archive again on every call.

    After :meth:`close`, the in-memory accessors keep working while anything
    that touches the archive raises ``ArchiveClosedError``. Instances are not
    safe for concurrent use from several threads.
    """

    def __init__(
        self,
        archive: ArchiveAccessor,
        root_file: str,
        metadata: Metadata,
        manifest: list[Item],
        spine: list[ItemRef],
        toc: NCX | None,
    ):
        self.archive = archive
        self.root_file = root_file
        self.metadata = metadata
        self.manifest = manifest
        self.spine = spine
        self.toc = toc

    @classmethod
    def _load(cls, archive: ArchiveAccessor) -> "Epub":
        root_file = resolve_root_file(archive)
        package = parse_package(archive, root_file)
        toc = resolve_toc(archive, root_file, package.manifest)
        return cls(
            archive=archive,
            root_file=root_file,
            metadata=package.metadata,
            manifest=package.manifest,
            spine=package.spine,
            toc=toc,
        )

    @classmethod
    def open(cls, path: Path | str) -> "Epub":
        """Open and parse the EPUB at ``path``.

        The returned book owns the underlying file; call :meth:`close` or use
        it as a context manager. If any parsing stage fails the file is closed
        before the error propagates.

        Raises:
            InvalidArchiveError: If ``path`` cannot be opened or is not a zip
                archive
            EpubNotFoundError: If container.xml, the package document or the
                declared NCX file is missing
            EpubDecodeError: If one of those documents is malformed
        """
        archive = ArchiveAccessor.open(path)
        try:
            epub = cls._load(archive)
        except BaseException:
            archive.close()
            raise
        log.info(
            f"Opened {Path(path).name}: {len(epub.manifest)} manifest items, "
            f"{len(epub.spine)} spine entries"
        )
        return epub

    @classmethod
    def from_zipfile(cls, zf: zipfile.ZipFile) -> "Epub":
        """Parse an EPUB from an already opened zip.

        The caller keeps ownership of ``zf``; :meth:`close` leaves it open.
        """
        return cls._load(ArchiveAccessor(zf, owned=False))

    def __enter__(self) -> "Epub":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Epub(root_file={self.root_file!r}, title={self.metadata.title!r})"

    @property
    def closed(self) -> bool:
        return self.archive.closed

    # Manifest lookups. Duplicate ids and hrefs resolve to the first match.

    def find_item_by_id(self, item_id: str) -> Item | None:
        return next((item for item in self.manifest if item.id == item_id), None)

    def find_item_by_href(self, href: str) -> Item | None:
        href = normalize_path(href)
        return next(
            (item for item in self.manifest if normalize_path(item.href) == href),
            None,
        )

    def find_item_by_media_type(self, media_type: str) -> Item | None:
        return next(
            (item for item in self.manifest if item.media_type == media_type), None
        )

    # Metadata

    def get_title(self) -> str:
        return self.metadata.title

    def get_author(self) -> str:
        return self.metadata.creator

    def get_description(self) -> str:
        return self.metadata.description

    def get_metadata(self) -> Metadata:
        """Return a copy of the complete metadata record."""
        return self.metadata.model_copy()

    def get_items(self) -> list[Item]:
        """Return copies of every manifest item in document order."""
        return [item.model_copy() for item in self.manifest]

    # Content

    def get_chapters(self, *opts: Option) -> list[Chapter]:
        """Return chapters in spine order.

        Example:
            >>> chapters = book.get_chapters(with_max_content_length(100_000))
            >>> [c.order for c in chapters]
            [1, 2, 4]
        """
        return chapter_extractor.get_chapters(self, apply_options(*opts))

    def get_chapter_content(self, index: int, *opts: Option) -> str:
        """Return the markup of the spine entry at the 0-based ``index``.

        Raises:
            ChapterIndexError: If ``index`` is outside the spine
            EpubNotFoundError: If the item or its file is missing
            UnsupportedContentError: If the item is not HTML
            ContentTooLargeError: If the content exceeds the configured limit
            EpubCancelledError: If cancelled before reading
        """
        return chapter_extractor.get_chapter_content(self, index, apply_options(*opts))

    def get_chapter_stream(self, index: int, *opts: Option) -> io.BytesIO:
        """Same as :meth:`get_chapter_content`, as a binary stream."""
        return chapter_extractor.get_chapter_stream(self, index, apply_options(*opts))

    def get_cover(self) -> IO[bytes] | None:
        """Open the cover image, or return None if no cover is declared.

        The caller closes the returned stream.
        """
        return cover_locator.get_cover(self)

    def get_file_reader(self, path: str) -> IO[bytes]:
        """Open any archive entry by its path from the archive root.

        Raises:
            EpubNotFoundError: If no entry has that path
            ArchiveReadError: If the entry cannot be decompressed
        """
        return self.archive.open_stream(path)

    def close(self) -> None:
        """Release the archive. Safe to call more than once."""
        self.archive.close()


def open_epub(path: Path | str) -> Epub:
    """Shortcut for :meth:`Epub.open`."""
    return Epub.open(path)
