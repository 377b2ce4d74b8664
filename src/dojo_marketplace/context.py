"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
and reducing coupling in CLI commands.

Dependencies are typed using Protocols (abstract interfaces) rather than
concrete implementations, so test doubles can be injected without inheritance.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dojo_marketplace.config import MarketplaceConfig
from dojo_marketplace.install import Installer
from dojo_marketplace.paths import InstallLayout
from dojo_marketplace.protocols import (
    ArchiveExtractor,
    ArchiveSource,
    CatalogService,
    FileSystem,
)


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from dojo_marketplace.filesystem import RealFileSystem
    return RealFileSystem()


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for all services used by CLI commands.
    """

    catalog: CatalogService
    fetcher: ArchiveSource
    extractor: ArchiveExtractor
    layout: InstallLayout
    installer: Installer
    filesystem: FileSystem = field(default_factory=_default_filesystem)


def create_context(
    config: MarketplaceConfig | None = None,
    api_key: str | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Creates all services with proper wiring. Use this in production code.
    For tests, construct AppContext directly with test doubles.

    Args:
        config: Settings (loaded from the environment if omitted).
        api_key: Credential overriding ``config.api_key``.

    Returns:
        Configured AppContext with all dependencies.
    """
    from dojo_marketplace.archive import ArchiveInstaller
    from dojo_marketplace.catalog import CatalogClient
    from dojo_marketplace.fetcher import ArchiveFetcher
    from dojo_marketplace.filesystem import RealFileSystem

    config = config or MarketplaceConfig.from_env()
    filesystem = RealFileSystem()
    catalog = CatalogClient(
        base_url=config.api_base_url,
        api_key=api_key or config.api_key,
        timeout=config.http_timeout,
    )
    fetcher = ArchiveFetcher(timeout=config.download_timeout)
    extractor = ArchiveInstaller(filesystem=filesystem)
    layout = InstallLayout(config.install_root)
    installer = Installer.create(
        catalog=catalog,
        fetcher=fetcher,
        extractor=extractor,
        layout=layout,
        filesystem=filesystem,
    )

    return AppContext(
        catalog=catalog,
        fetcher=fetcher,
        extractor=extractor,
        layout=layout,
        installer=installer,
        filesystem=filesystem,
    )
