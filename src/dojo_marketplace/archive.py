"""ZIP extraction into an install directory."""

from __future__ import annotations

import io
import logging
import os
import zipfile
import zlib
from pathlib import Path, PurePosixPath

from dojo_marketplace.errors import ExtractionError
from dojo_marketplace.filesystem import RealFileSystem
from dojo_marketplace.protocols import FileSystem

logger = logging.getLogger(__name__)

# Raised by zipfile on malformed content and by the filesystem on write errors
_ARCHIVE_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    ValueError,
    NotImplementedError,
    RuntimeError,
    OSError,
)


def safe_entry_path(target_dir: Path, name: str) -> Path:
    """Map an archive entry name to a path inside the target directory.

    Archive entry names are untrusted. This is independent of the slug
    check done when computing ``target_dir`` itself.

    Args:
        target_dir: Resolved extraction directory.
        name: Entry name as stored in the archive.

    Returns:
        Resolved destination path.

    Raises:
        ExtractionError: If the entry is absolute or escapes ``target_dir``.
    """
    normalized = name.replace("\\", "/")
    pure = PurePosixPath(normalized)
    if pure.is_absolute() or (pure.parts and ":" in pure.parts[0]):
        raise ExtractionError(f"Archive contains an absolute path entry: {name!r}")

    base = target_dir.resolve()
    candidate = (base / pure).resolve()
    if candidate != base and not str(candidate).startswith(str(base) + os.sep):
        raise ExtractionError(f"Archive contains an invalid path entry: {name!r}")
    return candidate


class ArchiveInstaller:
    """Extracts verified ZIP archives, overwriting existing files.

    Reinstalling the same archive over an existing directory produces the
    same tree. Files not present in the archive are left in place.
    """

    def __init__(self, filesystem: FileSystem | None = None) -> None:
        """Initialize the installer.

        Args:
            filesystem: Filesystem abstraction (defaults to RealFileSystem).
        """
        self.fs = filesystem or RealFileSystem()

    def install(self, data: bytes, target_dir: Path) -> list[Path]:
        """Extract a ZIP archive into a directory.

        Every entry name is validated before anything is written.

        Args:
            data: Archive bytes, already verified.
            target_dir: Destination directory; created with parents if absent.

        Returns:
            Paths of the files written.

        Raises:
            ExtractionError: On malformed archives, unsafe entries or write errors.
        """
        try:
            archive = zipfile.ZipFile(io.BytesIO(data))
        except _ARCHIVE_ERRORS as e:
            raise ExtractionError(f"Malformed archive: {e}") from e

        written: list[Path] = []
        with archive:
            entries = [
                (info, safe_entry_path(target_dir, info.filename))
                for info in archive.infolist()
                if info.filename
            ]
            try:
                self.fs.mkdir(target_dir, parents=True, exist_ok=True)
                for info, destination in entries:
                    if info.is_dir():
                        self.fs.mkdir(destination, parents=True, exist_ok=True)
                        continue
                    self.fs.mkdir(destination.parent, parents=True, exist_ok=True)
                    self.fs.write_bytes(destination, archive.read(info))
                    written.append(destination)
            except _ARCHIVE_ERRORS as e:
                raise ExtractionError(f"Failed to extract archive to {target_dir}: {e}") from e

        logger.debug("ZIP extracted to %s (%d files)", target_dir, len(written))
        return written
