"""Filesystem abstraction for testability.

The RealFileSystem implementation wraps standard library Path operations
and satisfies the FileSystem protocol structurally.
"""

from __future__ import annotations

import shutil
from pathlib import Path


class RealFileSystem:
    """Production filesystem implementation."""

    def read_bytes(self, path: Path) -> bytes:
        """Read binary content from a file."""
        return path.read_bytes()

    def write_bytes(self, path: Path, content: bytes) -> None:
        """Write binary content to a file, replacing any existing file."""
        path.write_bytes(content)

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        return path.is_dir()

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        path.mkdir(parents=parents, exist_ok=exist_ok)

    def iterdir(self, path: Path) -> list[Path]:
        """List the entries of a directory, sorted by name."""
        return sorted(path.iterdir())

    def unlink(self, path: Path) -> None:
        """Remove a file."""
        path.unlink()

    def rmtree(self, path: Path) -> None:
        """Remove a directory tree."""
        shutil.rmtree(path)
