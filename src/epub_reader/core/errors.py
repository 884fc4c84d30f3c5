"""Exceptions raised while opening and querying EPUB archives."""


class EpubError(Exception):
    """Base class for every error raised by epub_reader."""


class InvalidArchiveError(EpubError):
    """The file is not a readable zip container."""


class ArchiveReadError(EpubError):
    """An archive entry exists but its bytes could not be read."""


class ArchiveClosedError(EpubError):
    """The archive was read after the book was closed."""


class EpubNotFoundError(EpubError, LookupError):
    """A required internal path, manifest item or file is missing."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class EpubDecodeError(EpubError, ValueError):
    """An XML document inside the archive could not be decoded."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class ChapterIndexError(EpubError, IndexError):
    """Chapter index outside the spine bounds."""


class UnsupportedContentError(EpubError):
    """Spine entry resolved to a resource that is not an HTML document."""


class ContentTooLargeError(EpubError):
    """Chapter content exceeds the configured maximum length."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"chapter content exceeds maximum length ({size} > {limit} bytes)"
        )
        self.size = size
        self.limit = limit


class EpubCancelledError(EpubError):
    """Operation aborted because its cancellation token fired."""


class DeadlineExceededError(EpubCancelledError):
    """Operation aborted because its cancellation deadline passed."""
