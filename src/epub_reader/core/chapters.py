"""Turn the spine into ordered chapters."""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING

from epub_reader.core.archive import resolve
from epub_reader.core.errors import (
    ArchiveReadError,
    ChapterIndexError,
    ContentTooLargeError,
    EpubNotFoundError,
    UnsupportedContentError,
)
from epub_reader.core.options import EpubOptions
from epub_reader.models.epub import Chapter

if TYPE_CHECKING:
    from epub_reader.core.epub import Epub

log = logging.getLogger(__name__)

# Spine entries walked between cancellation checks
CANCEL_CHECK_INTERVAL = 5


def chapter_title(epub: Epub, index: int) -> str:
    """Title for the spine entry at ``index``.

    Titles come from the top-level TOC entry at the same position, not from
    matching hrefs, so nested or reordered TOCs can mislabel chapters.
    """
    if epub.toc is not None and index < len(epub.toc.nav_map):
        return epub.toc.nav_map[index].label
    return f"Chapter {index + 1}"


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def get_chapters(epub: Epub, options: EpubOptions) -> list[Chapter]:
    """Return HTML spine entries as chapters, in reading order.

    Missing items, non-HTML resources, unreadable files, oversized content
    and filtered chapters are skipped. ``order`` is the 1-based spine
    position, so skipped entries leave gaps.

    Raises:
        EpubCancelledError: If the cancellation token fires; no chapters are
            returned in that case
    """
    options.check_cancelled()

    chapters: list[Chapter] = []
    for i, itemref in enumerate(epub.spine):
        if i % CANCEL_CHECK_INTERVAL == 0:
            options.check_cancelled()

        item = epub.find_item_by_id(itemref.idref)
        if item is None:
            log.debug(f"Spine entry {i} references unknown item {itemref.idref!r}")
            continue
        if not item.is_html:
            continue

        chapter_path = resolve(epub.root_file, item.href)
        try:
            content = epub.archive.get_bytes(chapter_path)
        except (EpubNotFoundError, ArchiveReadError) as exc:
            log.debug(f"Skipping spine entry {i}: {exc}")
            continue

        if options.exceeds_limit(len(content)):
            log.debug(
                f"Skipping spine entry {i}: {len(content)} bytes over limit "
                f"{options.max_content_length}"
            )
            continue

        chapter = Chapter(
            title=chapter_title(epub, i),
            content=_decode(content),
            order=i + 1,
            item_id=item.id,
            path=chapter_path,
        )
        if options.chapter_filter is not None and not options.chapter_filter(chapter):
            continue

        chapters.append(chapter)

    return chapters


def read_chapter(epub: Epub, index: int, options: EpubOptions) -> bytes:
    """Return the raw bytes of the spine entry at ``index``.

    Unlike :func:`get_chapters`, every problem is raised, including content
    over the configured maximum length. The chapter filter is not applied.
    """
    options.check_cancelled()

    if index < 0 or index >= len(epub.spine):
        raise ChapterIndexError(
            f"chapter index {index} out of range (spine has {len(epub.spine)} entries)"
        )

    itemref = epub.spine[index]
    item = epub.find_item_by_id(itemref.idref)
    if item is None:
        raise EpubNotFoundError(f"chapter item not found: {itemref.idref}")
    if not item.is_html:
        raise UnsupportedContentError(
            f"chapter {index} is not an HTML document ({item.media_type})"
        )

    chapter_path = resolve(epub.root_file, item.href)
    try:
        content = epub.archive.get_bytes(chapter_path)
    except (EpubNotFoundError, ArchiveReadError) as exc:
        raise EpubNotFoundError(
            f"failed to get chapter content: {exc}", chapter_path
        ) from exc

    if options.exceeds_limit(len(content)):
        raise ContentTooLargeError(len(content), options.max_content_length)

    return content


def get_chapter_content(epub: Epub, index: int, options: EpubOptions) -> str:
    return _decode(read_chapter(epub, index, options))


def get_chapter_stream(epub: Epub, index: int, options: EpubOptions) -> io.BytesIO:
    return io.BytesIO(read_chapter(epub, index, options))
