"""Name-based access to entries of the EPUB zip container."""

import logging
import posixpath
import zipfile
import zlib
from pathlib import Path
from typing import IO

from epub_reader.core.errors import (
    ArchiveClosedError,
    ArchiveReadError,
    EpubNotFoundError,
    InvalidArchiveError,
)

log = logging.getLogger(__name__)

# zipfile raises NotImplementedError for unsupported compression methods and
# RuntimeError for encrypted entries
READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    OSError,
    NotImplementedError,
    RuntimeError,
)


def normalize_path(path: str) -> str:
    """Use forward slashes as the canonical separator."""
    return path.replace("\\", "/")


def resolve(base_file: str, href: str) -> str:
    """Resolve ``href`` relative to the directory containing ``base_file``."""
    base_dir = posixpath.dirname(normalize_path(base_file))
    joined = posixpath.join(base_dir, normalize_path(href))
    return posixpath.normpath(joined)


class ArchiveAccessor:
    """Look up archive entries by path.

    Entries are found by a linear scan of the zip directory; EPUBs rarely
    hold more than a few hundred files.
    """

    def __init__(self, zf: zipfile.ZipFile, owned: bool = False):
        self._zf: zipfile.ZipFile | None = zf
        self._owned = owned

    @classmethod
    def open(cls, path: Path | str) -> "ArchiveAccessor":
        """Open the zip at ``path``; the accessor owns and closes it."""
        try:
            zf = zipfile.ZipFile(path)
        except zipfile.BadZipFile as exc:
            raise InvalidArchiveError(f"not a zip archive: {path}") from exc
        except OSError as exc:
            raise InvalidArchiveError(f"cannot open {path}: {exc}") from exc
        return cls(zf, owned=True)

    @property
    def closed(self) -> bool:
        return self._zf is None

    def _zip(self) -> zipfile.ZipFile:
        if self._zf is None:
            raise ArchiveClosedError("archive is closed")
        return self._zf

    def _find(self, path: str) -> zipfile.ZipInfo:
        wanted = normalize_path(path)
        for info in self._zip().infolist():
            if normalize_path(info.filename) == wanted:
                return info
        raise EpubNotFoundError(f"file not found: {wanted}", wanted)

    def names(self) -> list[str]:
        return [normalize_path(info.filename) for info in self._zip().infolist()]

    def exists(self, path: str) -> bool:
        try:
            self._find(path)
        except EpubNotFoundError:
            return False
        return True

    def get_bytes(self, path: str) -> bytes:
        """Return the full content of the entry at ``path``."""
        info = self._find(path)
        try:
            with self._zip().open(info) as handle:
                return handle.read()
        except READ_ERRORS as exc:
            raise ArchiveReadError(f"cannot read {info.filename}: {exc}") from exc

    def open_stream(self, path: str) -> IO[bytes]:
        """Open the entry at ``path`` for streaming; the caller closes it."""
        info = self._find(path)
        try:
            return self._zip().open(info)
        except READ_ERRORS as exc:
            raise ArchiveReadError(f"cannot read {info.filename}: {exc}") from exc

    def close(self) -> None:
        """Release the archive. Borrowed zips are left open."""
        if self._zf is None:
            return
        zf, self._zf = self._zf, None
        if self._owned:
            log.debug(f"Closing archive {zf.filename}")
            zf.close()
