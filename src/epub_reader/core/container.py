"""Locate the package document through META-INF/container.xml."""

from epub_reader.core import xml_utils as xml
from epub_reader.core.archive import ArchiveAccessor
from epub_reader.core.errors import EpubNotFoundError
from epub_reader.models.epub import Container, Rootfile

CONTAINER_PATH = "META-INF/container.xml"


def parse_container(raw: bytes) -> Container:
    """Decode container.xml into its list of rootfiles."""
    root = xml.parse_xml(raw, CONTAINER_PATH)
    rootfiles = xml.child(root, "rootfiles")
    if rootfiles is None:
        return Container()
    return Container(
        rootfiles=[
            Rootfile(
                full_path=xml.attr(node, "full-path"),
                media_type=xml.attr(node, "media-type"),
            )
            for node in xml.children(rootfiles, "rootfile")
        ]
    )


def resolve_root_file(archive: ArchiveAccessor) -> str:
    """Return the archive path of the first declared package document."""
    container = parse_container(archive.get_bytes(CONTAINER_PATH))
    if not container.rootfiles or not container.rootfiles[0].full_path:
        raise EpubNotFoundError(
            f"no rootfile declared in {CONTAINER_PATH}", CONTAINER_PATH
        )
    return container.rootfiles[0].full_path
