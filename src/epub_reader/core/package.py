"""Parse the OPF package document."""

from lxml import etree

from epub_reader.core import xml_utils as xml
from epub_reader.core.archive import ArchiveAccessor
from epub_reader.models.epub import Item, ItemRef, Metadata, PackageDocument

METADATA_FIELDS = tuple(Metadata.model_fields)


def _parse_metadata(node: etree._Element | None) -> Metadata:
    values: dict[str, str] = {}
    if node is None:
        return Metadata()
    for element in node:
        name = xml.local_name(element.tag)
        # Last occurrence wins when an element repeats
        if name in METADATA_FIELDS:
            values[name] = xml.text(element)
    return Metadata(**values)


def parse_package_document(raw: bytes, path: str | None = None) -> PackageDocument:
    """Decode OPF bytes into metadata, manifest and spine.

    Manifest and spine keep document order. Nothing is validated: unknown
    media types, dangling hrefs and duplicate ids are all passed through.
    """
    root = xml.parse_xml(raw, path)

    manifest = [
        Item(
            id=xml.attr(node, "id"),
            href=xml.attr(node, "href"),
            media_type=xml.attr(node, "media-type"),
            properties=xml.attr(node, "properties"),
        )
        for manifest_node in xml.children(root, "manifest")
        for node in xml.children(manifest_node, "item")
    ]
    spine = [
        ItemRef(idref=xml.attr(node, "idref"), linear=xml.attr(node, "linear"))
        for spine_node in xml.children(root, "spine")
        for node in xml.children(spine_node, "itemref")
    ]

    return PackageDocument(
        metadata=_parse_metadata(xml.child(root, "metadata")),
        manifest=manifest,
        spine=spine,
    )


def parse_package(archive: ArchiveAccessor, root_path: str) -> PackageDocument:
    """Read and decode the package document at ``root_path``."""
    return parse_package_document(archive.get_bytes(root_path), root_path)
