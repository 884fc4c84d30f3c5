"""Resolve the table of contents.

Two formats exist: the EPUB 2 NCX file and the EPUB 3 navigation document.
Resolution tries them in that order. Only NCX is decoded; the navigation
document arm locates the file and stops there.
"""

import logging
from abc import ABC, abstractmethod

from lxml import etree

from epub_reader.core import xml_utils as xml
from epub_reader.core.archive import ArchiveAccessor, resolve
from epub_reader.models.epub import NCX, Item, NavPoint

log = logging.getLogger(__name__)


def _parse_nav_point(node: etree._Element) -> NavPoint:
    content = xml.child(node, "content")
    return NavPoint(
        id=xml.attr(node, "id"),
        play_order=xml.attr(node, "playOrder"),
        label=xml.text(xml.path(node, "navLabel", "text")),
        content=xml.text(content),
        src=xml.attr(content, "src") if content is not None else "",
        children=[_parse_nav_point(child) for child in xml.children(node, "navPoint")],
    )


def parse_ncx(raw: bytes, path: str | None = None) -> NCX:
    """Decode an NCX document into its navigation tree."""
    root = xml.parse_xml(raw, path)
    nav_map = xml.child(root, "navMap")
    return NCX(
        title=xml.text(xml.path(root, "docTitle", "text")),
        nav_map=[]
        if nav_map is None
        else [_parse_nav_point(node) for node in xml.children(nav_map, "navPoint")],
    )


class TocStrategy(ABC):
    """One way of finding a table of contents."""

    name: str

    @abstractmethod
    def locate(self, manifest: list[Item]) -> Item | None:
        """Return the manifest item holding this kind of TOC, if any."""

    @abstractmethod
    def load(self, archive: ArchiveAccessor, root_path: str, item: Item) -> NCX | None:
        """Read the located item into a navigation tree."""


class NcxStrategy(TocStrategy):
    """EPUB 2 NCX file, found by media type."""

    name = "ncx"

    def locate(self, manifest: list[Item]) -> Item | None:
        return next((item for item in manifest if item.is_ncx), None)

    def load(self, archive: ArchiveAccessor, root_path: str, item: Item) -> NCX | None:
        ncx_path = resolve(root_path, item.href)
        return parse_ncx(archive.get_bytes(ncx_path), ncx_path)


class NavDocumentStrategy(TocStrategy):
    """EPUB 3 navigation document.

    Decoding the XHTML nav structure is not implemented, so ``load`` never
    produces a tree.
    """

    name = "nav"

    def locate(self, manifest: list[Item]) -> Item | None:
        return next(
            (
                item
                for item in manifest
                if item.is_html and "nav" in item.properties.split()
            ),
            None,
        )

    def load(self, archive: ArchiveAccessor, root_path: str, item: Item) -> NCX | None:
        log.debug(
            f"Navigation document {item.href} found; EPUB 3 navigation parsing is not supported"
        )
        return None


STRATEGIES: tuple[TocStrategy, ...] = (NcxStrategy(), NavDocumentStrategy())


def resolve_toc(
    archive: ArchiveAccessor, root_path: str, manifest: list[Item]
) -> NCX | None:
    """Return the first table of contents a strategy can locate.

    The first strategy that locates an item decides the result; later
    strategies are not consulted. No TOC at all is not an error.
    """
    for strategy in STRATEGIES:
        item = strategy.locate(manifest)
        if item is None:
            continue
        log.debug(f"TOC candidate {item.href} ({strategy.name})")
        return strategy.load(archive, root_path, item)
    log.debug("No table of contents declared in manifest")
    return None
