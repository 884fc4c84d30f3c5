"""XML decoding helpers built on lxml.

Documents inside an EPUB use namespaces inconsistently, so every lookup here
matches on local element names.
"""

from collections.abc import Iterator

from lxml import etree

from epub_reader.core.errors import EpubDecodeError

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


def parse_xml(raw: bytes, path: str | None = None) -> etree._Element:
    """Decode ``raw`` into an element tree root.

    Raises:
        EpubDecodeError: If the bytes are not well-formed XML
    """
    try:
        root = etree.fromstring(raw, parser=_PARSER)
    except etree.XMLSyntaxError as exc:
        raise EpubDecodeError(f"malformed XML in {path or 'document'}: {exc}", path) from exc
    if root is None:
        raise EpubDecodeError(f"empty XML document: {path or 'document'}", path)
    return root


def local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def children(node: etree._Element, name: str) -> Iterator[etree._Element]:
    """Yield direct children named ``name``."""
    for element in node:
        if local_name(element.tag) == name:
            yield element


def child(node: etree._Element | None, name: str) -> etree._Element | None:
    if node is None:
        return None
    return next(children(node, name), None)


def path(node: etree._Element | None, *names: str) -> etree._Element | None:
    """Follow a chain of first-matching children, e.g. ``path(n, "navLabel", "text")``."""
    for name in names:
        node = child(node, name)
    return node


def text(node: etree._Element | None) -> str:
    if node is None:
        return ""
    return "".join(node.itertext()).strip()


def attr(node: etree._Element, name: str) -> str:
    """Attribute value by local name, empty when absent."""
    value = node.get(name)
    if value is not None:
        return value
    for key, value in node.attrib.items():
        if local_name(key) == name:
            return value
    return ""
