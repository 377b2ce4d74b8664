"""Protocol definitions for core abstractions.

This module defines abstract interfaces (Protocols) for the services the
install pipeline is composed from. Designing to interfaces enables:
- Loose coupling between components
- Easy substitution of test doubles
- Clear contracts for implementations

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from dojo_marketplace.types import ResolvedItem, VersionRecord


@runtime_checkable
class CatalogService(Protocol):
    """Protocol for the remote catalog.

    Implementations look up item and version metadata and record usage.
    """

    def resolve_slug(self, slug: str) -> ResolvedItem:
        """Resolve a slug to an item.

        Args:
            slug: Item slug.

        Returns:
            The resolved item.

        Raises:
            SlugResolutionError: On any non-success response.
        """
        ...

    def get_version_record(self, item_id: str, version: str) -> VersionRecord:
        """Fetch metadata for one version of an item.

        Args:
            item_id: Item identifier.
            version: Version string.

        Returns:
            The version record.

        Raises:
            VersionFetchError: On any non-success response.
        """
        ...

    def increment_usage_count(self, item_id: str) -> None:
        """Record one install of an item. Best effort, never raises.

        Args:
            item_id: Item identifier.
        """
        ...

    def with_api_key(self, api_key: str) -> CatalogService:
        """Return a catalog that sends a different bearer credential.

        The receiver is left unchanged.

        Args:
            api_key: Credential forwarded verbatim on every request.

        Returns:
            A catalog bound to the credential.
        """
        ...


@runtime_checkable
class ArchiveSource(Protocol):
    """Protocol for retrieving archive bytes."""

    def fetch(self, url: str) -> bytes:
        """Download the full content at a URL.

        Args:
            url: Archive location.

        Returns:
            Raw archive bytes.

        Raises:
            DownloadError: On a non-success response or transport failure.
        """
        ...


@runtime_checkable
class ArchiveExtractor(Protocol):
    """Protocol for unpacking a verified archive."""

    def install(self, data: bytes, target_dir: Path) -> list[Path]:
        """Extract an archive into a directory, overwriting existing files.

        Args:
            data: Verified archive bytes.
            target_dir: Destination directory.

        Returns:
            Paths of the files written.

        Raises:
            ExtractionError: On malformed content, unsafe entries or write failure.
        """
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Abstracts file I/O for testability.
    """

    def read_bytes(self, path: Path) -> bytes:
        """Read binary content from a file."""
        ...

    def write_bytes(self, path: Path, content: bytes) -> None:
        """Write binary content to a file."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        ...

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        ...

    def iterdir(self, path: Path) -> list[Path]:
        """List the entries of a directory.

        Args:
            path: Directory to list.

        Returns:
            Entry paths sorted by name.
        """
        ...

    def unlink(self, path: Path) -> None:
        """Remove a file.

        Args:
            path: Path to remove.
        """
        ...

    def rmtree(self, path: Path) -> None:
        """Remove a directory tree.

        Args:
            path: Path to remove.
        """
        ...
