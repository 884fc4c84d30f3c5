"""Data models for EPUB structure."""

from collections.abc import Iterator

from pydantic import BaseModel, Field

NCX_MEDIA_TYPE = "application/x-dtbncx+xml"
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")


class Metadata(BaseModel):
    """Dublin Core metadata of the package document."""

    title: str = ""
    creator: str = ""
    subject: str = ""
    description: str = ""
    publisher: str = ""
    contributor: str = ""
    date: str = ""
    type: str = ""
    format: str = ""
    identifier: str = ""
    language: str = ""
    rights: str = ""


class Item(BaseModel):
    """Single resource declared in the manifest."""

    id: str = ""
    href: str = ""
    media_type: str = ""
    properties: str = ""

    @property
    def is_html(self) -> bool:
        return "html" in self.media_type

    @property
    def is_image(self) -> bool:
        return self.media_type.startswith("image/") or self.href.lower().endswith(
            IMAGE_EXTENSIONS
        )

    @property
    def is_ncx(self) -> bool:
        return self.media_type == NCX_MEDIA_TYPE


class ItemRef(BaseModel):
    """Spine entry pointing at a manifest item."""

    idref: str = ""
    linear: str = ""

    @property
    def is_linear(self) -> bool:
        return self.linear != "no"


class NavPoint(BaseModel):
    """Navigation point of an NCX table of contents."""

    id: str = ""
    play_order: str = ""
    label: str = ""
    content: str = ""
    src: str = ""
    children: list["NavPoint"] = Field(default_factory=list)

    def walk(self) -> Iterator["NavPoint"]:
        """Yield this point and its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


class NCX(BaseModel):
    """Legacy (EPUB 2) table of contents."""

    title: str = ""
    nav_map: list[NavPoint] = Field(default_factory=list)


class Rootfile(BaseModel):
    """Rendition declared in META-INF/container.xml."""

    full_path: str = ""
    media_type: str = ""


class Container(BaseModel):
    """Decoded META-INF/container.xml."""

    rootfiles: list[Rootfile] = Field(default_factory=list)


class PackageDocument(BaseModel):
    """Decoded OPF package document."""

    metadata: Metadata = Field(default_factory=Metadata)
    manifest: list[Item] = Field(default_factory=list)
    spine: list[ItemRef] = Field(default_factory=list)


class Chapter(BaseModel):
    """Chapter content taken from one HTML spine entry."""

    title: str
    content: str
    order: int
    item_id: str = ""
    path: str = ""
