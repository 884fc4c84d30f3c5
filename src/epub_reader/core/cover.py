"""Heuristic cover image lookup."""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING

from epub_reader.core.archive import resolve
from epub_reader.models.epub import Item

if TYPE_CHECKING:
    from epub_reader.core.epub import Epub

log = logging.getLogger(__name__)

# Conventional manifest ids, in priority order
COVER_IDS = ("cover", "cover-image", "cover-img")


def find_cover_item(manifest: list[Item]) -> Item | None:
    """Return the first conventionally named manifest item that is an image."""
    for cover_id in COVER_IDS:
        item = next((item for item in manifest if item.id == cover_id), None)
        if item is not None and item.is_image:
            return item
    return None


def get_cover(epub: Epub) -> IO[bytes] | None:
    """Open a stream over the cover image, or return None when there is none.

    Raises:
        EpubNotFoundError: If the manifest names a cover the archive lacks
        ArchiveReadError: If the cover entry cannot be decompressed
    """
    item = find_cover_item(epub.manifest)
    if item is None:
        return None
    cover_path = resolve(epub.root_file, item.href)
    log.debug(f"Cover image {cover_path} (manifest id {item.id!r})")
    return epub.archive.open_stream(cover_path)
