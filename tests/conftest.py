from __future__ import annotations

import struct
import zipfile
from pathlib import Path
from typing import Callable, Mapping

import pytest

CONTAINER_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
{rootfiles}
  </rootfiles>
</container>
"""

OPF_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<package version="2.0" unique-identifier="BookId" xmlns="http://www.idpf.org/2007/opf">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">
{metadata}
  </metadata>
  <manifest>
{manifest}
  </manifest>
  <spine toc="ncx">
{spine}
  </spine>
</package>
"""

NCX_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <head><meta name="dtb:uid" content="urn:uuid:1234"/></head>
  <docTitle><text>{title}</text></docTitle>
  <navMap>
{nav_points}
  </navMap>
</ncx>
"""

DEFAULT_METADATA = {
    "title": "Sample Book",
    "creator": "Sample Author",
    "description": "A short description.",
    "language": "en",
    "identifier": "urn:uuid:1234",
}


def container_xml(*root_paths: str) -> str:
    rootfiles = "\n".join(
        f'    <rootfile full-path="{path}" media-type="application/oebps-package+xml"/>'
        for path in root_paths
    )
    return CONTAINER_TEMPLATE.format(rootfiles=rootfiles)


def opf_xml(
    manifest: list[tuple[str, str, str]],
    spine: list[str],
    metadata: Mapping[str, str] | None = None,
) -> str:
    """Build a package document.

    ``manifest`` holds ``(id, href, media_type)`` tuples, ``spine`` the idrefs.
    """
    metadata = DEFAULT_METADATA if metadata is None else metadata
    metadata_xml = "\n".join(
        f"    <dc:{name}>{value}</dc:{name}>" for name, value in metadata.items()
    )
    manifest_xml = "\n".join(
        f'    <item id="{item_id}" href="{href}" media-type="{media_type}"/>'
        for item_id, href, media_type in manifest
    )
    spine_xml = "\n".join(f'    <itemref idref="{idref}"/>' for idref in spine)
    return OPF_TEMPLATE.format(
        metadata=metadata_xml, manifest=manifest_xml, spine=spine_xml
    )


def nav_point(point_id: str, order: int, label: str, src: str, children: str = "") -> str:
    return (
        f'<navPoint id="{point_id}" playOrder="{order}">'
        f"<navLabel><text>{label}</text></navLabel>"
        f'<content src="{src}"/>{children}</navPoint>'
    )


def ncx_xml(title: str, *nav_points: str) -> str:
    return NCX_TEMPLATE.format(title=title, nav_points="\n".join(nav_points))


def html_doc(body: str) -> str:
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<html xmlns="http://www.w3.org/1999/xhtml"><head><title>t</title></head>'
        f"<body>{body}</body></html>"
    )


def write_zip(path: Path, entries: Mapping[str, str | bytes]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
        for name, data in entries.items():
            zf.writestr(name, data, compress_type=zipfile.ZIP_DEFLATED)
    return path


def set_compression_method(path: Path, name: str, method: int) -> None:
    """Rewrite the compression method of entry ``name`` in both zip headers.

    Lets tests produce entries that zipfile refuses to decompress, such as
    deflate64 (method 9).
    """
    with zipfile.ZipFile(path) as zf:
        local_offset = zf.getinfo(name).header_offset
    data = bytearray(path.read_bytes())
    packed = struct.pack("<H", method)
    data[local_offset + 8 : local_offset + 10] = packed

    encoded = name.encode()
    pos = data.find(b"PK\x01\x02")
    while pos != -1:
        name_length = struct.unpack_from("<H", data, pos + 28)[0]
        if data[pos + 46 : pos + 46 + name_length] == encoded:
            data[pos + 10 : pos + 12] = packed
            break
        pos = data.find(b"PK\x01\x02", pos + 46)
    path.write_bytes(bytes(data))


@pytest.fixture
def make_epub(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing an EPUB zip from a mapping of entry name to content."""
    counter = {"n": 0}

    def _make(entries: Mapping[str, str | bytes], name: str | None = None) -> Path:
        counter["n"] += 1
        return write_zip(tmp_path / (name or f"book{counter['n']}.epub"), entries)

    return _make


@pytest.fixture
def sample_epub(make_epub: Callable[..., Path]) -> Path:
    """EPUB 2 book under OEBPS/ with an NCX, a cover and three chapters."""
    manifest = [
        ("ncx", "toc.ncx", "application/x-dtbncx+xml"),
        ("cover", "images/cover.jpg", "image/jpeg"),
        ("css", "style.css", "text/css"),
        ("ch1", "text/ch1.xhtml", "application/xhtml+xml"),
        ("ch2", "text/ch2.xhtml", "application/xhtml+xml"),
        ("ch3", "text/ch3.xhtml", "application/xhtml+xml"),
    ]
    ncx = ncx_xml(
        "Sample Book",
        nav_point("np1", 1, "Opening", "text/ch1.xhtml"),
        nav_point(
            "np2",
            2,
            "Middle",
            "text/ch2.xhtml",
            children=nav_point("np2a", 3, "Middle, part A", "text/ch2.xhtml#a"),
        ),
    )
    return make_epub(
        {
            "META-INF/container.xml": container_xml("OEBPS/content.opf"),
            "OEBPS/content.opf": opf_xml(manifest, ["ch1", "ch2", "ch3"]),
            "OEBPS/toc.ncx": ncx,
            "OEBPS/images/cover.jpg": b"\xff\xd8\xff\xe0fake-jpeg",
            "OEBPS/style.css": "body { margin: 0 }",
            "OEBPS/text/ch1.xhtml": html_doc("<h1>Opening</h1><p>First.</p>"),
            "OEBPS/text/ch2.xhtml": html_doc("<h1>Middle</h1><p>Second.</p>"),
            "OEBPS/text/ch3.xhtml": html_doc("<h1>End</h1><p>Third.</p>"),
        },
        name="sample.epub",
    )


@pytest.fixture
def two_chapter_epub(make_epub: Callable[..., Path]) -> Path:
    """Package at the archive root, two 50-byte chapters, no TOC."""
    manifest = [
        ("item-1", "one.html", "text/html"),
        ("item-2", "two.html", "text/html"),
    ]
    return make_epub(
        {
            "META-INF/container.xml": container_xml("content.opf"),
            "content.opf": opf_xml(manifest, ["item-1", "item-2"]),
            "one.html": b"<html><body><p>" + b"a" * 17 + b"</p></body></html>",
            "two.html": b"<html><body><p>" + b"b" * 17 + b"</p></body></html>",
        },
        name="two.epub",
    )
